import io

import pytest
from cloudinary.exceptions import Error as CloudinaryError
from werkzeug.datastructures import FileStorage, MultiDict

from backend import images
from backend.config import CloudinaryConfig
from backend.errors import ClientInputError, ImageUploadError
from backend.images import (
    ImageUploader,
    LocalPath,
    RemoteUrl,
    UploadedFile,
    resolve_image_input,
)


def test_resolve_url_and_path():
    assert resolve_image_input(None, {"image": "https://x.io/a.png"}) == RemoteUrl("https://x.io/a.png")
    assert resolve_image_input(None, {"image": "./uploads/a.png"}) == LocalPath("./uploads/a.png")


def test_resolve_nothing():
    assert resolve_image_input(MultiDict(), {}) is None
    assert resolve_image_input(None, {"image": ""}) is None
    assert resolve_image_input(None, {"image": "   "}) is None


def test_resolve_file_wins_over_field():
    upload = FileStorage(stream=io.BytesIO(b"data"), filename="a.png")
    image = resolve_image_input(MultiDict({"image": upload}), {"image": "https://x.io/b.png"})
    assert isinstance(image, UploadedFile)
    assert image.source() is upload.stream


def test_resolve_rejects_other_types():
    with pytest.raises(ClientInputError):
        resolve_image_input(None, {"image": 42})


@pytest.fixture
def cloud(app):
    uploader = ImageUploader(CloudinaryConfig("demo", "key", "secret", folder="movieImage"))
    with app.app_context():
        yield uploader


def test_upload_scopes_folder(cloud, monkeypatch):
    calls = []

    def fake_upload(source, **options):
        calls.append((source, options))
        return {"public_id": "movieImage/abc", "secure_url": "https://res.cloudinary.com/abc.jpg"}

    monkeypatch.setattr(images.cloudinary.uploader, "upload", fake_upload)
    result = cloud.upload(RemoteUrl("https://x.io/a.png"))

    assert result.public_id == "movieImage/abc"
    assert result.secure_url == "https://res.cloudinary.com/abc.jpg"
    assert calls == [("https://x.io/a.png", {"folder": "movieImage"})]


def test_upload_failure_propagates(cloud, monkeypatch):
    def boom(source, **options):
        raise CloudinaryError("bad credentials")

    monkeypatch.setattr(images.cloudinary.uploader, "upload", boom)
    with pytest.raises(ImageUploadError):
        cloud.upload(LocalPath("missing.png"))


def test_destroy(cloud, monkeypatch):
    removed = []
    monkeypatch.setattr(images.cloudinary.uploader, "destroy", lambda public_id: removed.append(public_id))
    assert cloud.destroy("movieImage/abc") is True
    assert removed == ["movieImage/abc"]
