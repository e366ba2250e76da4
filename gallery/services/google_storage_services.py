import logging
from typing import BinaryIO, List, Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage
from google.oauth2 import service_account

from gallery.core.config import settings
from gallery.core.exceptions import UploadError
from gallery.schemas.gallery_schemas import Image
from gallery.services.collections import Album
from gallery.services.staging import infer_extension, staged_file

logger = logging.getLogger(__name__)

PUBLIC_READ = "publicRead"


class GoogleAlbumsCollection:
    """Albums backed 1:1 by Google Cloud Storage buckets."""

    def __init__(self, client: storage.Client, temp_dir: str, description: str):
        self.client = client
        self.temp_dir = temp_dir
        self.description = description

    @classmethod
    def from_settings(cls) -> "GoogleAlbumsCollection":
        creds = service_account.Credentials.from_service_account_file(
            settings.GOOGLE_APPLICATION_CREDENTIALS
        )

        client = storage.Client(
            credentials=creds,
            project=settings.PROJECT_ID
        )
        return cls(client, temp_dir=settings.TEMP_DIR, description=settings.UPLOAD_DESCRIPTION)

    def create(self, name: str) -> Optional[Album]:
        logger.info("[Storage] Creating bucket: %s", name)
        self.client.create_bucket(name)

        return self.get(name)

    def get(self, name: str) -> Optional[Album]:
        if not self.client.bucket(name).exists():
            return None

        return self._album(name)

    def list(self) -> List[Album]:
        # The client pages through every bucket transparently
        return [self._album(bucket.name) for bucket in self.client.list_buckets()]

    def _album(self, name: str) -> Album:
        return Album(
            name=name,
            images=GoogleImagesCollection(name, self.client, self.temp_dir, self.description),
        )


class GoogleImagesCollection:
    """Objects of a single bucket, seen as the images of one album."""

    def __init__(self, album: str, client: storage.Client, temp_dir: str, description: str):
        self.album = album
        self.client = client
        self.temp_dir = temp_dir
        self.description = description

    def create(self, image_name: str, data: BinaryIO) -> Image:
        bucket = self.client.bucket(self.album)
        blob = bucket.blob(image_name)
        blob.metadata = {"description": self.description}

        with staged_file(data, infer_extension(image_name), self.temp_dir) as path:
            blob.upload_from_filename(path, predefined_acl=PUBLIC_READ)

        if not blob.media_link:
            raise UploadError(image_name, self.album)

        logger.info("[Storage] Uploaded %s to %s", blob.name, self.album)
        return _to_image(blob)

    def list(self) -> List[Image]:
        return [_to_image(blob) for blob in self.client.list_blobs(self.album)]

    def move(self, image_name: str, album_name: str) -> None:
        """Copy the object into ``album_name`` and delete it from this album.

        Not atomic: when the delete fails the image is left in both albums.
        """
        source_bucket = self.client.bucket(self.album)
        source_blob = source_bucket.blob(image_name)
        dest_bucket = self.client.bucket(album_name)

        source_bucket.copy_blob(source_blob, dest_bucket, image_name)

        try:
            source_blob.delete()
        except GoogleAPIError as e:
            logger.error(
                "[Storage] %s copied to %s but not deleted from %s: %s",
                image_name, album_name, self.album, e
            )
            raise

        logger.info("[Storage] Moved %s from %s to %s", image_name, self.album, album_name)

    def delete(self, image_name: str) -> None:
        self.client.bucket(self.album).blob(image_name).delete()
        logger.info("[Storage] Deleted %s from %s", image_name, self.album)


def _to_image(blob) -> Image:
    return Image(name=blob.name, url=blob.media_link, preview=blob.media_link)
