import os

import pytest
from fastapi.testclient import TestClient
from google.api_core.exceptions import Conflict, Forbidden, NotFound

# Settings are read at import time
os.environ.setdefault("PROJECT_ID", "test-project")

from gallery.core.config import settings
from gallery.main import app
from gallery.routes.gallery_routes import get_gallery_service
from gallery.services.gallery_services import GalleryService
from gallery.services.google_storage_services import GoogleAlbumsCollection


class FakeStorageClient:
    """In-memory stand-in for ``google.cloud.storage.Client``.

    Buckets are dicts of object name -> record. Only the calls the gallery
    makes are implemented, with the same NotFound/Conflict behavior.
    """

    def __init__(self):
        self.buckets = {}
        self.foreign_buckets = set()  # exist globally but belong to another project
        self.media_links = True
        self.fail_deletes = False
        self.staged_paths = []

    def create_bucket(self, name):
        if name in self.buckets or name in self.foreign_buckets:
            raise Conflict(f"Bucket {name} already exists")
        self.buckets[name] = {}
        return FakeBucket(self, name)

    def bucket(self, name):
        return FakeBucket(self, name)

    def list_buckets(self):
        return [FakeBucket(self, name) for name in sorted(self.buckets)]

    def list_blobs(self, bucket_name):
        objects = self._objects(bucket_name)
        return [FakeBlob(FakeBucket(self, bucket_name), name) for name in sorted(objects)]

    def _objects(self, bucket_name):
        if bucket_name not in self.buckets:
            raise NotFound(f"Bucket {bucket_name} not found")
        return self.buckets[bucket_name]


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def exists(self):
        return self.name in self.client.buckets

    def blob(self, name):
        return FakeBlob(self, name)

    def copy_blob(self, blob, destination_bucket, new_name):
        source = self.client._objects(self.name)
        if blob.name not in source:
            raise NotFound(f"Object {blob.name} not found")

        target = self.client._objects(destination_bucket.name)
        target[new_name] = dict(source[blob.name])
        return FakeBlob(destination_bucket, new_name)


class FakeBlob:
    def __init__(self, bucket, name):
        self.bucket = bucket
        self.name = name
        record = bucket.client.buckets.get(bucket.name, {}).get(name, {})
        self.metadata = record.get("metadata")
        self.media_link = record.get("media_link")

    def upload_from_filename(self, filename, predefined_acl=None):
        objects = self.bucket.client._objects(self.bucket.name)
        self.bucket.client.staged_paths.append(filename)

        with open(filename, "rb") as f:
            content = f.read()

        media_link = None
        if self.bucket.client.media_links:
            media_link = f"https://storage.example.com/download/{self.bucket.name}/{self.name}"

        objects[self.name] = {
            "content": content,
            "metadata": self.metadata,
            "acl": predefined_acl,
            "media_link": media_link,
        }
        self.media_link = media_link

    def delete(self):
        if self.bucket.client.fail_deletes:
            raise Forbidden(f"Delete of {self.name} denied")

        objects = self.bucket.client._objects(self.bucket.name)
        if self.name not in objects:
            raise NotFound(f"Object {self.name} not found")
        del objects[self.name]


@pytest.fixture
def storage_client():
    return FakeStorageClient()


@pytest.fixture
def temp_dir(tmp_path):
    path = tmp_path / "temp"
    path.mkdir()
    return str(path)


@pytest.fixture
def albums(storage_client, temp_dir):
    return GoogleAlbumsCollection(storage_client, temp_dir=temp_dir, description="Some description")


@pytest.fixture
def api_client(albums, temp_dir, monkeypatch):
    monkeypatch.setattr(settings, "TEMP_DIR", temp_dir)
    app.dependency_overrides[get_gallery_service] = lambda: GalleryService(albums)

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
