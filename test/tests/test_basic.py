import re
from pathlib import Path


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_unknown_route_returns_json_error(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert "error" in r.get_json()


def test_session_defaults_to_logged_out(client):
    r = client.get("/session")
    assert r.status_code == 200
    assert r.get_json() == {"loggedIn": False, "username": None}


def test_seed_script_is_not_installed_as_a_module():
    pyproject = (Path(__file__).resolve().parents[2] / "pyproject.toml").read_text(encoding="utf-8")
    modules = re.search(r"py-modules = \[(.*?)\]", pyproject, re.S).group(1)
    assert '"app"' in modules
    assert '"seed"' not in modules
