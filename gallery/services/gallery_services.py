import logging
from typing import BinaryIO, Optional

from google.api_core.exceptions import Conflict

from gallery.schemas.gallery_schemas import AlbumDetail, AlbumSummary, Image
from gallery.services.collections import Album, AlbumsCollection

logger = logging.getLogger(__name__)


class GalleryService:
    def __init__(self, albums: AlbumsCollection):
        self.albums = albums

    def create_album(self, name: str) -> None:
        try:
            self.albums.create(name)
        except Conflict:
            # Bucket names are global: only a bucket we can see counts as ours
            if self.albums.get(name) is None:
                raise
            logger.info("[Gallery] Album %s already exists", name)

    def find_album(self, name: str) -> Optional[Album]:
        return self.albums.get(name)

    def upload_image(self, album: Album, image_name: str, data: BinaryIO) -> Image:
        return album.images.create(image_name, data)

    def get_albums(self) -> list[AlbumSummary]:
        return [AlbumSummary(name=album.name) for album in self.albums.list()]

    def get_album(self, name: str) -> Optional[AlbumDetail]:
        album = self.albums.get(name)

        if album is None:
            return None

        return AlbumDetail(name=album.name, images=album.images.list())

    def move_image(self, album_name: str, image_name: str, target_album_name: str) -> bool:
        album = self.albums.get(album_name)
        target = self.albums.get(target_album_name)

        if album is None or target is None:
            return False

        album.images.move(image_name, target.name)
        return True

    def delete_image(self, album_name: str, image_name: str) -> bool:
        album = self.albums.get(album_name)

        if album is None:
            return False

        album.images.delete(image_name)
        return True
