from pydantic import BaseModel
from typing import List

class Image(BaseModel):
    name: str
    url: str
    preview: str

class AlbumSummary(BaseModel):
    name: str

class AlbumList(BaseModel):
    albums: List[AlbumSummary]

class AlbumDetail(BaseModel):
    name: str
    images: List[Image]

class MoveImageRequest(BaseModel):
    target_album: str  # Name of the album (bucket) receiving the image

class MoveImageResponse(BaseModel):
    name: str
    album: str

class DeleteImageResponse(BaseModel):
    deleted: str
