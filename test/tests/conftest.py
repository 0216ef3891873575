"""
Project: Café Menu Service

Description:
Shared fixtures: an app on in-memory SQLite with a temporary upload folder,
its test client, a MenuClient wired to that test client, and an image
factory built on Pillow.
"""

import io
import os
import sys

import pytest
from PIL import Image

# --- Make sure project root is importable ---
TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app  # noqa: E402
from client import MenuClient  # noqa: E402
from imaging import ImageFile  # noqa: E402
from models import db  # noqa: E402


class _FlaskResponse:
    def __init__(self, resp):
        self._resp = resp
        self.status_code = resp.status_code

    def json(self):
        data = self._resp.get_json(silent=True)
        if data is None:
            raise ValueError("response body is not JSON")
        return data


class FlaskSession:
    """Just enough of requests.Session for MenuClient, backed by the Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, params=None, json=None, files=None, timeout=None):
        kwargs = {"method": method, "query_string": params}
        if json is not None:
            kwargs["json"] = json
        if files:
            kwargs["data"] = {
                field: (io.BytesIO(data), name, content_type)
                for field, (name, data, content_type) in files.items()
            }
            kwargs["content_type"] = "multipart/form-data"
        return _FlaskResponse(self.test_client.open(url, **kwargs))


@pytest.fixture
def app_overrides(tmp_path):
    return {"UPLOAD_FOLDER": str(tmp_path / "uploads")}


@pytest.fixture
def app(app_overrides):
    app = create_app(testing=True, overrides=app_overrides)
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api_client(client):
    return MenuClient(session=FlaskSession(client))


@pytest.fixture
def create_item(client):
    def _create(**fields):
        payload = {"title": "Latte", "price": 5000, "imageUrl": "/uploads/latte.jpg"}
        payload.update(fields)
        r = client.post("/menu", json=payload)
        assert r.status_code == 200, r.get_json()
        return next(i for i in client.get("/menu").get_json() if i["title"] == payload["title"])
    return _create


def encode_image(width, height, fmt="JPEG", noise=False, color=(200, 120, 40), **save_kwargs):
    if noise:
        img = Image.frombytes("RGB", (width, height), os.urandom(width * height * 3))
    else:
        img = Image.new("RGB", (width, height), color)
    buf = io.BytesIO()
    img.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


@pytest.fixture
def make_image():
    content_types = {"JPEG": "image/jpeg", "PNG": "image/png", "WEBP": "image/webp", "GIF": "image/gif"}
    extensions = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp", "GIF": "gif"}

    def _make(width=64, height=64, fmt="JPEG", noise=False, name=None, **save_kwargs):
        data = encode_image(width, height, fmt, noise=noise, **save_kwargs)
        return ImageFile(name or f"photo.{extensions[fmt]}", content_types[fmt], data)
    return _make
