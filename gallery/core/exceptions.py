class GalleryError(Exception):
    """Base class for errors raised by the gallery itself (not by the backend)."""


class UploadError(GalleryError):
    """The backend accepted an upload but returned no usable media link."""

    def __init__(self, image_name: str, album_name: str):
        self.image_name = image_name
        self.album_name = album_name
        super().__init__(f"Unknown upload error for {image_name} in album {album_name}")
