# blog_app/services/test_storage_service.py
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound, Conflict, ServiceUnavailable

from blog_app.core.errors import StorageError
from blog_app.services.storage_service import FirebaseObjectStore, InMemoryObjectStore

def test_in_memory_put_overwrites():
    store = InMemoryObjectStore()
    store.put("posts/1/media.jpg", b"old", "image/png")
    store.put("posts/1/media.jpg", b"new", "image/jpeg")
    assert store.get("posts/1/media.jpg") == (b"new", "image/jpeg")
    assert store.paths() == ["posts/1/media.jpg"]

def test_in_memory_signed_url_requires_object():
    store = InMemoryObjectStore('blog-media')
    with pytest.raises(FileNotFoundError):
        store.signed_url("missing.png", timedelta(days=7))

    store.put("qr/qr-image-1.png", b"qr", "image/png")
    url = store.signed_url("qr/qr-image-1.png", timedelta(days=7))
    assert url.startswith("memory://blog-media/qr/qr-image-1.png?expires=")

def test_in_memory_remove_missing_is_noop():
    store = InMemoryObjectStore()
    store.remove("nothing-here")
    assert store.paths() == []

def test_firebase_ensure_bucket_creates_when_missing():
    bucket = MagicMock()
    bucket.exists.return_value = False
    FirebaseObjectStore(bucket).ensure_bucket()
    bucket.create.assert_called_once()

def test_firebase_ensure_bucket_is_idempotent():
    bucket = MagicMock()
    bucket.exists.return_value = True
    FirebaseObjectStore(bucket).ensure_bucket()
    bucket.create.assert_not_called()

    # 다른 인스턴스가 먼저 만든 경우
    bucket.exists.return_value = False
    bucket.create.side_effect = Conflict("already exists")
    FirebaseObjectStore(bucket).ensure_bucket()

def test_firebase_put_uploads_with_content_type():
    bucket = MagicMock()
    FirebaseObjectStore(bucket).put("posts/1/media.mp4", b"video", "video/mp4")
    bucket.blob.assert_called_with("posts/1/media.mp4")
    bucket.blob.return_value.upload_from_string.assert_called_once_with(b"video", content_type="video/mp4")

def test_firebase_signed_url_is_v4_get():
    bucket = MagicMock()
    blob = bucket.blob.return_value
    blob.exists.return_value = True
    blob.generate_signed_url.return_value = "https://signed"

    url = FirebaseObjectStore(bucket).signed_url("posts/1/media.jpg", timedelta(days=7))
    assert url == "https://signed"
    blob.generate_signed_url.assert_called_once_with(version="v4", expiration=timedelta(days=7), method="GET")

def test_firebase_remove_ignores_missing_blob():
    bucket = MagicMock()
    bucket.blob.return_value.delete.side_effect = NotFound("gone")
    FirebaseObjectStore(bucket).remove("posts/1/media.jpg")

def test_firebase_remove_wraps_other_errors():
    bucket = MagicMock()
    bucket.blob.return_value.delete.side_effect = ServiceUnavailable("down")
    with pytest.raises(StorageError):
        FirebaseObjectStore(bucket).remove("posts/1/media.jpg")
