"""
Project: Café Menu Service

Description:
Image upload endpoint. The client compresses before sending, but type and
size are checked again here. Files are stored under a random name through
the storage backend selected at startup.
"""

import logging

from flask import Blueprint, current_app, jsonify, request, send_from_directory
from werkzeug.exceptions import RequestEntityTooLarge

from auth import admin_required
from imaging import NO_FILE_MESSAGE, TOO_LARGE_MESSAGE, ImageFile, validate_image_file
from storage import StorageError, storage_filename

logger = logging.getLogger(__name__)

bp = Blueprint("upload_api", __name__)


def get_storage():
    return current_app.extensions["image_storage"]


@bp.post("/upload")
@admin_required
def upload_image():
    file = request.files.get("file")
    if file is None or not file.filename:
        return jsonify({"error": NO_FILE_MESSAGE}), 400

    image = ImageFile(name=file.filename, content_type=file.mimetype or "", data=file.read())
    result = validate_image_file(image)
    if not result.is_valid:
        logger.info("Rejected upload %r (%s, %d bytes)", image.name, image.content_type, image.size)
        return jsonify({"error": result.error}), 400

    filename = storage_filename(image.name)
    try:
        image_url = get_storage().save(filename, image.data, image.content_type)
    except StorageError as e:
        logger.error("Upload of %r failed: %s", image.name, e)
        return jsonify({"error": str(e)}), 500

    return jsonify({"success": True, "imageUrl": image_url})


@bp.get("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


@bp.errorhandler(RequestEntityTooLarge)
def request_too_large(e):
    return jsonify({"error": TOO_LARGE_MESSAGE}), 400
