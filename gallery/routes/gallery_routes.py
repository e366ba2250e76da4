from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from gallery.core.config import settings
from gallery.schemas.gallery_schemas import (
    AlbumDetail,
    AlbumList,
    DeleteImageResponse,
    Image,
    MoveImageRequest,
    MoveImageResponse,
)
from gallery.services.collections import StorageType, make_albums_collection
from gallery.services.gallery_services import GalleryService

router = APIRouter(prefix="/gallery", tags=["Gallery"])


@lru_cache
def get_gallery_service() -> GalleryService:
    return GalleryService(make_albums_collection(StorageType(settings.STORAGE_TYPE)))


@router.post("/{album}")
def create_album(album: str, service: GalleryService = Depends(get_gallery_service)):
    service.create_album(album)

    return Response(status_code=200)

@router.post("/{album}/image", response_model=Image)
async def upload_image(
    album: str,
    request: Request,
    service: GalleryService = Depends(get_gallery_service)
):
    # Look the album up before the body is read
    target = await run_in_threadpool(service.find_album, album)

    if target is None:
        raise HTTPException(status_code=404, detail="Album not found")

    form = await request.form()

    try:
        # The first file part carries the image, whatever its field name
        upload = next((value for _, value in form.multi_items() if isinstance(value, UploadFile)), None)

        if upload is None or not upload.filename:
            raise HTTPException(status_code=400, detail="A file part with a filename is required")

        return await run_in_threadpool(service.upload_image, target, upload.filename, upload.file)
    finally:
        await form.close()

@router.get("", response_model=AlbumList)
def list_albums(service: GalleryService = Depends(get_gallery_service)):
    return AlbumList(albums=service.get_albums())

@router.get("/{album}", response_model=AlbumDetail)
def get_album(album: str, service: GalleryService = Depends(get_gallery_service)):
    details = service.get_album(album)

    if details is None:
        raise HTTPException(status_code=404, detail="Album not found")

    return details

@router.post("/{album}/image/{image}/move", response_model=MoveImageResponse)
def move_image(
    album: str,
    image: str,
    data: MoveImageRequest,
    service: GalleryService = Depends(get_gallery_service)
):
    if not service.move_image(album, image, data.target_album):
        raise HTTPException(status_code=404, detail="Album not found")

    return MoveImageResponse(name=image, album=data.target_album)

@router.delete("/{album}/image/{image}", response_model=DeleteImageResponse)
def delete_image(album: str, image: str, service: GalleryService = Depends(get_gallery_service)):
    if not service.delete_image(album, image):
        raise HTTPException(status_code=404, detail="Album not found")

    return DeleteImageResponse(deleted=image)
