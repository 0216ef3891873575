"""
Project: Café Menu Service

Description:
Application configuration. Values are read from the environment (a local
.env file is loaded first) and applied with app.config.from_object(Config).
"""

import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _database_url():
    url = os.getenv("DATABASE_URL", "sqlite:///cafe_menu.db")
    # Hosted Postgres providers still hand out the old scheme
    if url.startswith("postgres://"):
        url = "postgresql+psycopg://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def _flag(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Whole request body; the 5MB image limit is checked by the upload route
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(BASE_DIR, "static", "uploads"))
    UPLOAD_URL_PREFIX = "/uploads"

    # auto | local | s3
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "auto").lower()
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET")
    STORAGE_ENDPOINT_URL = os.getenv("STORAGE_ENDPOINT_URL")
    STORAGE_ACCESS_KEY_ID = os.getenv("STORAGE_ACCESS_KEY_ID")
    STORAGE_SECRET_ACCESS_KEY = os.getenv("STORAGE_SECRET_ACCESS_KEY")
    STORAGE_REGION = os.getenv("STORAGE_REGION")
    STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL")

    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "password")
    REQUIRE_ADMIN_LOGIN = _flag("REQUIRE_ADMIN_LOGIN")

    STRICT_MENU_UPDATES = _flag("STRICT_MENU_UPDATES")

    SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE") or None
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
