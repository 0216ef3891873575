import io

import pytest


def test_login_flow(client):
    resp = client.post("/login", json={"username": "admin", "password": "password"})
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}
    assert client.get("/session").get_json() == {"loggedIn": True, "username": "admin"}

    client.post("/logout")
    assert client.get("/session").get_json()["loggedIn"] is False


def test_login_with_form_fields(client):
    resp = client.post("/login", data={"username": "admin", "password": "password"})
    assert resp.status_code == 200


@pytest.mark.parametrize("username, password", [("admin", "wrong"), ("root", "password"), ("", "")])
def test_login_rejects_bad_credentials(client, username, password):
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 401
    assert resp.get_json()["ok"] is False


def test_mutations_are_open_by_default(client):
    r = client.post("/menu", json={"title": "Latte", "price": 5000, "imageUrl": "/u.jpg"})
    assert r.status_code == 200


class TestRequireAdminLogin:
    @pytest.fixture
    def app_overrides(self, tmp_path):
        return {
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "REQUIRE_ADMIN_LOGIN": True,
            "ADMIN_USERNAME": "caffe24",
            "ADMIN_PASSWORD": "s3cret",
        }

    def test_mutations_need_a_session(self, client):
        payload = {"title": "Latte", "price": 5000, "imageUrl": "/u.jpg"}
        assert client.post("/menu", json=payload).status_code == 401
        assert client.put("/menu", json={"id": 1, "title": "x"}).status_code == 401
        assert client.delete("/menu?id=1").status_code == 401
        r = client.post("/upload", data={"file": (io.BytesIO(b"x"), "a.jpg", "image/jpeg")},
                        content_type="multipart/form-data")
        assert r.status_code == 401
        assert r.get_json() == {"error": "login_required"}

    def test_listing_stays_public(self, client):
        assert client.get("/menu").status_code == 200

    def test_configured_credentials_unlock_mutations(self, client):
        assert client.post("/login", json={"username": "admin", "password": "password"}).status_code == 401
        assert client.post("/login", json={"username": "caffe24", "password": "s3cret"}).status_code == 200

        r = client.post("/menu", json={"title": "Latte", "price": 5000, "imageUrl": "/u.jpg"})
        assert r.status_code == 200
        assert len(client.get("/menu").get_json()) == 1
