import logging
import os
import secrets
import shutil
from contextlib import contextmanager
from typing import BinaryIO, Iterator

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"
CHUNK_SIZE = 64 * 1024


def infer_extension(image_name: str) -> str:
    """Trailing dot-segment of the last path component, ``jpg`` when there is none."""
    base_name = os.path.basename(image_name)
    if "." not in base_name:
        return DEFAULT_EXTENSION

    extension = base_name.rsplit(".", 1)[1]
    # Only plain extensions end up in the temp file name
    if not extension.isalnum():
        return DEFAULT_EXTENSION
    return extension


def ensure_temp_dir(directory: str) -> str:
    if not os.path.isdir(directory):
        logger.info("[Staging] Creating temp directory: %s", directory)
    os.makedirs(directory, exist_ok=True)
    return directory


@contextmanager
def staged_file(data: BinaryIO, extension: str, directory: str) -> Iterator[str]:
    """Write ``data`` to a randomly named file and yield its path.

    The file is removed on exit, including when writing it or using it fails.
    """
    path = os.path.join(directory, f"{secrets.token_hex(16)}.{extension}")

    try:
        with open(path, "wb") as out_file:
            shutil.copyfileobj(data, out_file, CHUNK_SIZE)
        logger.debug("[Staging] Staged upload at %s", path)

        yield path
    finally:
        _remove(path)


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
