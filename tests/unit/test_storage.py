import pytest
import requests

from wardrobo.services import StorageError, get_image_storage
from wardrobo.services import storage
from wardrobo.services.storage import (
    BlobImageStorage,
    LocalImageStorage,
    safe_filename,
)


def test_safe_filename_replaces_unsafe_characters():
    assert safe_filename("my photo (1).jpg") == "my_photo__1_.jpg"
    assert safe_filename(None) == "upload"


def test_local_storage_writes_file(tmp_path):
    backend = LocalImageStorage(tmp_path / "uploads")
    url = backend.save("tee.png", b"data", "image/png")

    assert url.startswith("/uploads/")
    assert url.endswith("-tee.png")
    stored = tmp_path / "uploads" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"data"


def test_local_storage_wraps_os_errors(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    backend = LocalImageStorage(blocker)
    with pytest.raises(StorageError):
        backend.save("tee.png", b"data", "image/png")


def test_storage_from_env_prefers_blob(monkeypatch):
    assert isinstance(get_image_storage(), LocalImageStorage)

    monkeypatch.setenv("BLOB_READ_WRITE_TOKEN", "blob-token")
    storage.reset_image_storage_for_tests()
    backend = get_image_storage()
    assert isinstance(backend, BlobImageStorage)
    assert backend.token == "blob-token"


def test_blob_storage_put(monkeypatch, fake_response):
    captured = {}

    def fake_put(url, data=None, headers=None, timeout=None):
        captured.update(url=url, data=data, headers=headers)
        return fake_response({"url": "https://blob.example/wardrobo/tee.png"})

    monkeypatch.setattr(storage.requests, "put", fake_put)

    url = BlobImageStorage("tok").save("tee.png", b"data", "image/png")

    assert url == "https://blob.example/wardrobo/tee.png"
    assert captured["url"].startswith("https://blob.vercel-storage.com/wardrobo/")
    assert captured["headers"]["Authorization"] == "Bearer tok"
    assert captured["headers"]["x-content-type"] == "image/png"
    assert captured["data"] == b"data"


def test_blob_storage_errors(monkeypatch, fake_response):
    monkeypatch.setattr(storage.requests, "put", lambda *a, **kw: fake_response({"url": "x"}, status_code=403))
    with pytest.raises(StorageError):
        BlobImageStorage("tok").save("tee.png", b"data", "image/png")

    def boom(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(storage.requests, "put", boom)
    with pytest.raises(StorageError):
        BlobImageStorage("tok").save("tee.png", b"data", "image/png")

    monkeypatch.setattr(storage.requests, "put", lambda *a, **kw: fake_response({"pathname": "x"}))
    with pytest.raises(StorageError, match="Unexpected"):
        BlobImageStorage("tok").save("tee.png", b"data", "image/png")
