import itertools

import pytest

from backend.app import create_app
from backend.config import Config
from backend.errors import ImageUploadError
from backend.images import UploadResult
from backend.models import db


class FakeUploader:
    def __init__(self):
        self.uploaded = []
        self.destroyed = []
        self.fail = False
        self._ids = itertools.count(1)

    def upload(self, image):
        if self.fail:
            raise ImageUploadError("upload refused")
        public_id = f"movieImage/img{next(self._ids)}"
        self.uploaded.append((image, public_id))
        return UploadResult(public_id, f"https://res.cloudinary.com/demo/{public_id}.jpg")

    def destroy(self, public_id):
        self.destroyed.append(public_id)
        return True


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(uploader):
    config = Config(
        env="testing",
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        TESTING=True,
        APP_ORIGIN=None,
    )
    app = create_app(config, uploader=uploader)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(client):
    counter = itertools.count(1)

    def _make(name="alice", email=None):
        email = email or f"user{next(counter)}@example.com"
        res = client.post("/user", json={"name": name, "email": email})
        assert res.status_code in (200, 201)
        return res.get_json()["user"]

    return _make


@pytest.fixture
def make_genre(client):
    def _make(name="drama"):
        res = client.post("/genres", json={"name": name})
        assert res.status_code == 201
        return res.get_json()["new_genre"]

    return _make


@pytest.fixture
def make_movie(client):
    def _make(user_id, genre_id, title="Movie", **extra):
        payload = {
            "title": title,
            "year": 2020,
            "description": "a film",
            "language": "en",
            "genre": genre_id,
            "image": "https://example.com/poster.jpg",
        }
        payload.update(extra)
        res = client.post(f"/movies/{user_id}", json=payload)
        assert res.status_code == 201, res.get_json()
        return res.get_json()["new_movie"]

    return _make
