"""
Project: Café Menu Service

Description:
Public storefront view state: loads the menu once, filters it by category
and free-text search, and picks the text to show for the current language.
Read only.
"""

import logging

from client import ApiError
from models import DEFAULT_CATEGORY, RECOMMENDED_CATEGORIES

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

_CATEGORY_NAMES = {
    "icecoffee": "Ice Coffee",
    "hotdrinks": "Hot Drinks",
    "freshdrinks": "Fresh Drinks",
    "milkshake": "Milk Shake",
}


def format_category_name(category):
    if not category:
        return ""
    key = category.lower()
    if key in _CATEGORY_NAMES:
        return _CATEGORY_NAMES[key]
    return category[0].upper() + category[1:]


class Storefront:
    def __init__(self, client, state):
        self.client = client
        self.state = state
        self.items = []
        self.loading = True
        self.selected_category = ALL_CATEGORIES
        self.search_term = ""
        self.selected_item = None
        self._loaded = False
        self._broken_images = set()

    def load(self):
        if self._loaded:
            return
        try:
            self.items = self.client.list_items()
        except ApiError:
            logger.exception("Failed to fetch menu items")
            self.items = []
        finally:
            self._loaded = True
            self.loading = False

    def categories(self):
        return (ALL_CATEGORIES,) + RECOMMENDED_CATEGORIES

    def set_category(self, category):
        self.selected_category = category or ALL_CATEGORIES

    def set_search(self, term):
        self.search_term = term or ""

    def filtered_items(self):
        q = self.search_term.strip().lower()
        result = []
        for item in self.items:
            category = item.get("category") or DEFAULT_CATEGORY
            if self.selected_category != ALL_CATEGORIES and category != self.selected_category:
                continue
            if q:
                fields = (
                    item.get("title"),
                    item.get("description"),
                    item.get("titleKurdish"),
                    item.get("descriptionKurdish"),
                )
                if not any(q in (value or "").lower() for value in fields):
                    continue
            result.append(item)
        return result

    # ---------- detail ----------
    def select_item(self, item_id):
        self.selected_item = next((i for i in self.items if i["id"] == item_id), None)
        return self.selected_item

    def close_item(self):
        self.selected_item = None

    # ---------- display ----------
    def display_title(self, item):
        if self.state.lang == "ckb" and (item.get("titleKurdish") or "").strip():
            return item["titleKurdish"]
        return item.get("title") or ""

    def display_description(self, item):
        if self.state.lang == "ckb" and (item.get("descriptionKurdish") or "").strip():
            return item["descriptionKurdish"]
        return item.get("description") or ""

    def image_url(self, item):
        """None means the image element should be hidden."""
        if item.get("id") in self._broken_images:
            return None
        return item.get("imageUrl") or None

    def mark_image_broken(self, item_id):
        self._broken_images.add(item_id)
