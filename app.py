"""
Project: Café Menu Service

Description:
Main application entry point. Initializes Flask, the database and Socket.IO,
selects the image storage backend, and registers the menu, upload and auth
routes.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from auth import bp as auth_bp, init_auth
from config import Config
from events import socketio
from menu_api import bp as menu_bp
from models import db
from storage import build_storage
from upload_api import bp as upload_bp

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(testing: bool = False, overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        app.config["STORAGE_BACKEND"] = "local"
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    db.init_app(app)
    socketio.init_app(app, async_mode=app.config.get("SOCKETIO_ASYNC_MODE"))
    init_auth(app)

    app.extensions["image_storage"] = build_storage(app.config)
    logger.info("Image storage backend: %s", app.extensions["image_storage"].name)

    app.register_blueprint(auth_bp)
    app.register_blueprint(menu_bp)
    app.register_blueprint(upload_bp)

    # ---------- HEALTH ----------
    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    # ---------- ERRORS ----------
    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        logger.exception("Unhandled exception")
        return jsonify({"error": "Internal server error"}), 500

    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=5013, debug=True)
