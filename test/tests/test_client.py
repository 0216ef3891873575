import pytest
import requests

from client import ApiError, MenuClient, normalize_menu_items
from state import AppState


def test_normalize_drops_rows_without_id_and_coerces_fields():
    data = [
        {"id": 1, "title": "Latte", "price": "5000", "imageUrl": "/a.jpg"},
        {"id": "2", "title": 42, "price": None, "image_url": "/b.jpg", "category": None},
        {"id": "abc", "title": "bad"},
        {"title": "no id"},
        "garbage",
    ]
    items = normalize_menu_items(data)
    assert [i["id"] for i in items] == [1, 2]
    assert items[0]["price"] == 5000
    assert items[0]["titleKurdish"] == ""
    assert items[1]["title"] == "42"
    assert items[1]["price"] == 0
    assert items[1]["imageUrl"] == "/b.jpg"
    assert items[1]["category"] == "coffee"


@pytest.mark.parametrize("data", [None, {}, "x", 3])
def test_normalize_non_list_is_empty(data):
    assert normalize_menu_items(data) == []


def test_client_round_trip_against_app(api_client):
    api_client.create_item({"title": "Latte", "price": 5000, "imageUrl": "/u.jpg"})
    [item] = api_client.list_items()
    api_client.update_item(item["id"], {"price": 5500})
    assert api_client.list_items()[0]["price"] == 5500
    api_client.delete_item(item["id"])
    assert api_client.list_items() == []


def test_client_raises_server_error_message(api_client):
    with pytest.raises(ApiError) as exc:
        api_client.create_item({"title": "", "price": 5000, "imageUrl": "/u.jpg"})
    assert str(exc.value) == "Item name (English) is required"
    assert exc.value.status_code == 400


def test_client_wraps_transport_errors():
    class DownSession:
        def request(self, method, url, **kwargs):
            raise requests.ConnectionError("connection refused")

    client = MenuClient("http://cafe.local", session=DownSession())
    with pytest.raises(ApiError, match="connection refused"):
        client.list_items()


def test_client_passes_default_timeout():
    seen = {}

    class Resp:
        status_code = 200

        def json(self):
            return []

    class RecordingSession:
        def request(self, method, url, **kwargs):
            seen.update(kwargs, method=method, url=url)
            return Resp()

    MenuClient("http://cafe.local/", session=RecordingSession()).list_items()
    assert seen["url"] == "http://cafe.local/menu"
    assert seen["timeout"] == 10


def test_app_state_toggles():
    state = AppState()
    assert state.dir == "ltr"
    state.toggle_theme()
    assert state.theme == "dark"
    state.set_lang("ckb")
    assert state.dir == "rtl"
    with pytest.raises(ValueError):
        state.set_lang("fr")
