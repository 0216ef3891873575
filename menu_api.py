"""
Project: Café Menu Service

Description:
JSON API for menu items: list, create, partial update and delete on /menu.
Every handler turns failures into a {"error": ...} response; nothing is
raised past the route.
"""

import logging
import math

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from auth import admin_required
from events import emit_event
from models import DEFAULT_CATEGORY, MenuItem, db

logger = logging.getLogger(__name__)

bp = Blueprint("menu_api", __name__)

MAX_TITLE_LENGTH = 255
MAX_CATEGORY_LENGTH = 50
# INTEGER column range
MAX_INT = 2_147_483_647

MISSING_ID = "Missing id"
TITLE_REQUIRED = "Item name (English) is required"
TITLE_TOO_LONG = "Item name (English) must be at most 255 characters"
TITLE_KURDISH_TOO_LONG = "Item name (Kurdish) must be at most 255 characters"
PRICE_REQUIRED = "Valid price is required"
IMAGE_REQUIRED = "Image URL is required"
CATEGORY_TOO_LONG = "Category must be at most 50 characters"


class PayloadError(ValueError):
    pass


def to_text(value, default=""):
    if value is None:
        return default
    return str(value).strip()


def to_number(value):
    """Loose numeric coercion for JSON and query values; None when not finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def to_whole_number(value):
    number = to_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            return None
        number = int(number)
    return number


def to_price(value):
    price = to_whole_number(value)
    if price is None or price <= 0 or price > MAX_INT:
        return None
    return price


def parse_create_payload(data):
    """Validate a create request; returns MenuItem constructor kwargs."""
    title = to_text(data.get("title"))
    if not title:
        raise PayloadError(TITLE_REQUIRED)
    if len(title) > MAX_TITLE_LENGTH:
        raise PayloadError(TITLE_TOO_LONG)

    price = to_price(data.get("price"))
    if price is None:
        raise PayloadError(PRICE_REQUIRED)

    image_url = to_text(data.get("imageUrl"))
    if not image_url:
        raise PayloadError(IMAGE_REQUIRED)

    title_kurdish = to_text(data.get("titleKurdish")) or title
    if len(title_kurdish) > MAX_TITLE_LENGTH:
        raise PayloadError(TITLE_KURDISH_TOO_LONG)

    category = to_text(data.get("category")) or DEFAULT_CATEGORY
    if len(category) > MAX_CATEGORY_LENGTH:
        raise PayloadError(CATEGORY_TOO_LONG)

    return {
        "title": title,
        "title_kurdish": title_kurdish,
        "description": to_text(data.get("description")),
        "description_kurdish": to_text(data.get("descriptionKurdish")),
        "category": category,
        "price": price,
        "image_url": image_url,
    }


def parse_update_payload(data, strict=False):
    """
    Build the column values for a partial update.

    A field that is absent (or null) is left alone. title and imageUrl only
    overwrite when non-blank, price only when it is a whole number > 0.
    Other supplied text fields always overwrite, blank included.

    Invalid values are skipped unless strict is set, in which case the first
    one raises PayloadError and nothing is written.
    """
    values = {}

    def supplied(key):
        return data.get(key) is not None

    def reject(message):
        if strict:
            raise PayloadError(message)

    if supplied("title"):
        title = to_text(data["title"])
        if not title:
            reject(TITLE_REQUIRED)
        elif len(title) > MAX_TITLE_LENGTH:
            reject(TITLE_TOO_LONG)
        else:
            values["title"] = title

    if supplied("titleKurdish"):
        title_kurdish = to_text(data["titleKurdish"])
        if len(title_kurdish) > MAX_TITLE_LENGTH:
            reject(TITLE_KURDISH_TOO_LONG)
        else:
            values["title_kurdish"] = title_kurdish

    if supplied("price"):
        price = to_price(data["price"])
        if price is None:
            reject(PRICE_REQUIRED)
        else:
            values["price"] = price

    if supplied("imageUrl"):
        image_url = to_text(data["imageUrl"])
        if not image_url:
            reject(IMAGE_REQUIRED)
        else:
            values["image_url"] = image_url

    if supplied("description"):
        values["description"] = to_text(data["description"])

    if supplied("descriptionKurdish"):
        values["description_kurdish"] = to_text(data["descriptionKurdish"])

    if supplied("category"):
        category = to_text(data["category"])
        if len(category) > MAX_CATEGORY_LENGTH:
            reject(CATEGORY_TOO_LONG)
        else:
            values["category"] = category

    return values


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _storable_id(item_id):
    # anything outside the column range cannot match a row
    return 0 < item_id <= MAX_INT


@bp.get("/menu")
def list_menu():
    try:
        items = MenuItem.query.all()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error fetching items")
        return jsonify({"error": "Failed to fetch items"}), 500
    return jsonify([m.to_dict() for m in items])


@bp.post("/menu")
@admin_required
def create_menu():
    data = _json_body()
    try:
        fields = parse_create_payload(data)
    except PayloadError as e:
        return jsonify({"error": str(e)}), 400

    item = MenuItem(**fields)
    try:
        db.session.add(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error adding item %r", fields.get("title"))
        return jsonify({"error": "Failed to add item"}), 500

    logger.info("Menu item %s created (%s)", item.id, item.title)
    emit_event("menu.created", item=item.to_dict())
    return jsonify({"success": True})


@bp.put("/menu")
@admin_required
def update_menu():
    data = _json_body()
    item_id = to_whole_number(data.get("id"))
    if item_id is None:
        return jsonify({"error": MISSING_ID}), 400

    try:
        values = parse_update_payload(data, strict=current_app.config.get("STRICT_MENU_UPDATES", False))
    except PayloadError as e:
        return jsonify({"error": str(e)}), 400

    if not values or not _storable_id(item_id):
        logger.info("Menu item %s: no changes", item_id)
        return jsonify({"success": True})

    try:
        # last write wins, there is no version check
        updated = MenuItem.query.filter_by(id=item_id).update(values)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error updating item %s", item_id)
        return jsonify({"error": "Failed to update item"}), 500

    logger.info("Menu item %s updated (%s, %d rows)", item_id, ", ".join(sorted(values)), updated)
    if updated:
        emit_event("menu.updated", id=item_id)
    return jsonify({"success": True})


@bp.delete("/menu")
@admin_required
def delete_menu():
    item_id = to_whole_number(request.args.get("id"))
    if item_id is None:
        item_id = to_whole_number(_json_body().get("id"))
    if item_id is None:
        return jsonify({"error": MISSING_ID}), 400

    if not _storable_id(item_id):
        logger.info("Menu item %s deleted (0 rows)", item_id)
        return jsonify({"success": True})

    try:
        deleted = MenuItem.query.filter_by(id=item_id).delete()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error deleting item %s", item_id)
        return jsonify({"error": "Failed to delete item"}), 500

    logger.info("Menu item %s deleted (%d rows)", item_id, deleted)
    if deleted:
        emit_event("menu.deleted", id=item_id)
    return jsonify({"success": True})
