"""
Project: Café Menu Service

Description:
HTTP client for the menu and upload endpoints, used by the admin dashboard
and storefront controllers.
"""

import logging
import math

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _text(value, default=""):
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _number(value, default=0):
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def normalize_menu_items(data):
    """Coerce a /menu response into well-formed dicts, dropping rows without an id."""
    if not isinstance(data, list):
        return []

    items = []
    for raw in data:
        if not isinstance(raw, dict):
            continue
        try:
            item_id = float(raw.get("id"))
        except (TypeError, ValueError):
            continue
        if not math.isfinite(item_id):
            continue

        image_url = raw.get("imageUrl")
        if not isinstance(image_url, str):
            image_url = raw.get("image_url") if isinstance(raw.get("image_url"), str) else ""

        items.append({
            "id": int(item_id) if item_id.is_integer() else item_id,
            "title": _text(raw.get("title")),
            "titleKurdish": _text(raw.get("titleKurdish")),
            "price": _number(raw.get("price")),
            "imageUrl": image_url,
            "description": _text(raw.get("description")),
            "descriptionKurdish": _text(raw.get("descriptionKurdish")),
            "category": _text(raw.get("category"), "coffee"),
        })
    return items


class MenuClient:
    def __init__(self, base_url="", session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(f"Request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or f"Request failed with status {resp.status_code}", resp.status_code)
        return data

    def list_items(self):
        return normalize_menu_items(self._request("GET", "/menu"))

    def create_item(self, payload):
        return self._request("POST", "/menu", json=payload)

    def update_item(self, item_id, payload):
        body = dict(payload)
        body["id"] = item_id
        return self._request("PUT", "/menu", json=body)

    def delete_item(self, item_id):
        return self._request("DELETE", "/menu", params={"id": item_id})

    def upload_image(self, image):
        data = self._request("POST", "/upload", files={"file": (image.name, image.data, image.content_type)})
        image_url = (data or {}).get("imageUrl")
        if not image_url:
            raise ApiError("Upload did not return an image URL")
        return image_url

    def login(self, username, password):
        return self._request("POST", "/login", json={"username": username, "password": password})

    def logout(self):
        return self._request("POST", "/logout")
