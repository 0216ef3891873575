"""
Project: Café Menu Service

Description:
Admin credential check and session handling. Mutating endpoints are only
gated when REQUIRE_ADMIN_LOGIN is enabled.
"""

import logging
from functools import wraps

from flask import Blueprint, current_app, jsonify, request, session
from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)


def init_auth(app):
    app.extensions["admin_password_hash"] = generate_password_hash(app.config["ADMIN_PASSWORD"])


def admin_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if current_app.config.get("REQUIRE_ADMIN_LOGIN") and not session.get("admin"):
            return jsonify({"error": "login_required"}), 401
        return f(*args, **kwargs)
    return wrapper


@bp.post("/login")
def login():
    data = request.form if request.form else (request.get_json(silent=True) or {})
    username = str(data.get("username") or "").strip()
    password = str(data.get("password") or "")

    expected = current_app.config["ADMIN_USERNAME"]
    password_hash = current_app.extensions["admin_password_hash"]
    if username == expected and check_password_hash(password_hash, password):
        session["admin"] = True
        session["username"] = username
        logger.info("Admin %s logged in", username)
        return jsonify({"ok": True})

    logger.warning("Failed admin login for %r", username)
    return jsonify({"ok": False, "error": "Invalid credentials"}), 401


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})


@bp.get("/session")
def current_session():
    return jsonify({"loggedIn": bool(session.get("admin")), "username": session.get("username")})
