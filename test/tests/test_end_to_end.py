import io

from conftest import encode_image
from dashboard import AdminDashboard
from state import AppState
from storefront import Storefront


def test_upload_then_create_then_list(client):
    png = encode_image(820, 820, "PNG", noise=True)
    assert 1.5 * 1024 * 1024 < len(png) < 5 * 1024 * 1024

    r = client.post(
        "/upload",
        data={"file": (io.BytesIO(png), "latte.png", "image/png")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 200
    image_url = r.get_json()["imageUrl"]
    assert image_url.startswith("/uploads/")

    r = client.post("/menu", json={"title": "Latte", "price": 5000, "imageUrl": image_url})
    assert r.status_code == 200
    assert r.get_json() == {"success": True}

    items = client.get("/menu").get_json()
    assert any(
        i["title"] == "Latte" and i["price"] == 5000 and i["imageUrl"] == image_url
        for i in items
    )
    assert client.get(image_url).data == png


def test_dashboard_and_storefront_share_the_menu(api_client, make_image):
    state = AppState()
    admin = AdminDashboard(api_client, state)
    admin.load()
    admin.start_add()
    admin.new_category = "milkshake"
    assert admin.ingest_image(make_image(900, 900, "PNG", noise=True, name="shake.png"))
    assert admin.submit_add({"title": "Chocolate Shake", "titleKurdish": "شەیک", "price": "6000"})

    shop = Storefront(api_client, state)
    shop.load()
    shop.set_category("milkshake")
    [item] = shop.filtered_items()
    assert item["title"] == "Chocolate Shake"
    assert shop.image_url(item).endswith(".jpg")
    state.set_lang("ckb")
    assert shop.display_title(item) == "شەیک"
