from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, List, Optional, Protocol

from gallery.schemas.gallery_schemas import Image


class ImagesCollection(Protocol):
    def create(self, image_name: str, data: BinaryIO) -> Image: ...

    def list(self) -> List[Image]: ...

    def move(self, image_name: str, album_name: str) -> None: ...

    def delete(self, image_name: str) -> None: ...


@dataclass(frozen=True)
class Album:
    name: str
    images: ImagesCollection


class AlbumsCollection(Protocol):
    def create(self, name: str) -> Optional[Album]: ...

    def get(self, name: str) -> Optional[Album]: ...

    def list(self) -> List[Album]: ...


class StorageType(str, Enum):
    GOOGLE_STORAGE = "google"


def make_albums_collection(storage_type: StorageType) -> AlbumsCollection:
    if storage_type is StorageType.GOOGLE_STORAGE:
        from gallery.services.google_storage_services import GoogleAlbumsCollection

        return GoogleAlbumsCollection.from_settings()

    raise ValueError("Wrong storage type")
