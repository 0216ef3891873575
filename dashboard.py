"""
Project: Café Menu Service

Description:
Admin dashboard controller. Sequences image ingestion and menu API calls
for the add / edit / delete flows and keeps the displayed list in sync by
re-fetching it after every successful change.
"""

import logging
import time

from client import ApiError
from imaging import ImageIngestionError, ingest_image
from models import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

NOTIFICATION_SECONDS = 2.5

PLEASE_UPLOAD = "Please upload an image first"
ADD_FAILED = "Failed to add item"
UPDATE_FAILED = "Failed to update item"
DELETE_FAILED = "Failed to delete item"


class AdminDashboard:
    def __init__(self, client, state, clock=time.monotonic, compression=None):
        self.client = client
        self.state = state
        self.clock = clock
        self.compression = compression

        self.items = []
        self.is_loading = True
        self.search_term = ""

        self.is_adding = False
        self.new_category = DEFAULT_CATEGORY
        self.editing_item = None
        self.edit_category = DEFAULT_CATEGORY

        self.preview_image = ""
        self.image_error = ""
        self.login_error = ""
        self.compressing_image = False
        self.uploading_image = False

        self.delete_confirm = None
        self.delete_error = ""

        self._notice = None

    # ---------- session ----------
    def login(self, username, password):
        self.login_error = ""
        try:
            self.client.login(username, password)
        except ApiError as e:
            self.login_error = str(e)
            return False
        self.state.admin_logged_in = True
        self.state.admin_username = username
        return True

    def logout(self):
        try:
            self.client.logout()
        except ApiError:
            logger.exception("Logout request failed")
        self.state.admin_logged_in = False
        self.state.admin_username = None

    # ---------- list ----------
    def load(self):
        try:
            self.items = self.client.list_items()
        except ApiError:
            logger.exception("Error loading items")
        finally:
            self.is_loading = False

    def filtered_items(self):
        q = self.search_term.lower()
        return [
            item for item in self.items
            if q in item["title"].lower() or q in item["description"].lower()
        ]

    # ---------- notifications ----------
    def show_success(self, message):
        self._notice = (message, self.clock())

    @property
    def success_message(self):
        if self._notice is None:
            return ""
        message, shown_at = self._notice
        if self.clock() - shown_at >= NOTIFICATION_SECONDS:
            self._notice = None
            return ""
        return message

    # ---------- image ----------
    def ingest_image(self, image):
        """Validate, compress and upload; the resulting URL becomes the preview."""
        self.image_error = ""
        self.compressing_image = True
        try:
            url = ingest_image(image, self._upload, self.compression)
        except ImageIngestionError as e:
            logger.error("Upload error: %s", e)
            self.image_error = str(e)
            return None
        finally:
            self.compressing_image = False
            self.uploading_image = False

        self.preview_image = url
        if self.editing_item is not None:
            self.editing_item = dict(self.editing_item, imageUrl=url)
        return url

    def _upload(self, image):
        self.compressing_image = False
        self.uploading_image = True
        return self.client.upload_image(image)

    # ---------- add ----------
    def start_add(self):
        self.cancel_edit()
        self.is_adding = True
        self.preview_image = ""
        self.image_error = ""
        self.new_category = DEFAULT_CATEGORY

    def cancel_add(self):
        self.is_adding = False
        self.preview_image = ""
        self.image_error = ""
        self.new_category = DEFAULT_CATEGORY

    def submit_add(self, form):
        if not self.preview_image:
            self.image_error = PLEASE_UPLOAD
            return False

        payload = {
            "title": form.get("title"),
            "titleKurdish": form.get("titleKurdish"),
            "price": form.get("price"),
            "description": form.get("description"),
            "descriptionKurdish": form.get("descriptionKurdish"),
            "category": self.new_category,
            "imageUrl": self.preview_image,
        }
        try:
            self.client.create_item(payload)
        except ApiError as e:
            logger.error("Error adding item: %s", e)
            self.image_error = str(e) or ADD_FAILED
            return False

        self.load()
        self.cancel_add()
        self.show_success("Item added successfully")
        return True

    # ---------- edit ----------
    def start_edit(self, item):
        self.is_adding = False
        self.editing_item = dict(item)
        self.preview_image = item.get("imageUrl") or ""
        self.edit_category = item.get("category") or DEFAULT_CATEGORY
        self.image_error = ""

    def cancel_edit(self):
        self.editing_item = None
        self.preview_image = ""
        self.image_error = ""
        self.edit_category = DEFAULT_CATEGORY

    def submit_edit(self, form):
        if self.editing_item is None:
            return False
        if not self.preview_image:
            self.image_error = PLEASE_UPLOAD
            return False

        payload = {
            "title": form.get("title"),
            "titleKurdish": form.get("titleKurdish"),
            "price": form.get("price"),
            "imageUrl": self.preview_image,
            "description": form.get("description"),
            "descriptionKurdish": form.get("descriptionKurdish"),
            "category": self.edit_category,
        }
        try:
            self.client.update_item(self.editing_item["id"], payload)
        except ApiError as e:
            logger.error("Error updating item: %s", e)
            self.image_error = str(e) or UPDATE_FAILED
            return False

        self.load()
        self.cancel_edit()
        self.show_success("Item updated successfully")
        return True

    # ---------- delete ----------
    def request_delete(self, item_id):
        self.delete_error = ""
        self.delete_confirm = item_id

    def cancel_delete(self):
        self.delete_confirm = None

    def confirm_delete(self):
        if self.delete_confirm is None:
            return False
        item_id = self.delete_confirm
        self.delete_confirm = None
        try:
            self.client.delete_item(item_id)
        except ApiError as e:
            logger.error("Error deleting item %s: %s", item_id, e)
            self.delete_error = str(e) or DELETE_FAILED
            return False

        self.load()
        self.show_success("Item deleted successfully")
        return True
