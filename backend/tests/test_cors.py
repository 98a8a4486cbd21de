import importlib
import os
import sys

import pytest
from fastapi.testclient import TestClient


def _cleanup_app_modules():
    for module in [
        name for name in sys.modules if name == "golfbets" or name.startswith("golfbets.")
    ]:
        sys.modules.pop(module, None)


@pytest.fixture(autouse=True)
def app_import_isolation(monkeypatch):
    app_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    cleanup = _cleanup_app_modules
    saved = {
        name: module
        for name, module in sys.modules.items()
        if name == "golfbets" or name.startswith("golfbets.")
    }
    cleanup()
    monkeypatch.syspath_prepend(app_path)
    try:
        yield
    finally:
        cleanup()
        sys.modules.update(saved)


def test_rejects_wildcard_with_credentials(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "true")
    with pytest.raises(ValueError):
        importlib.import_module("golfbets.main")


def test_cors_headers_for_allowed_origin(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://clubhouse.example")
    monkeypatch.delenv("ALLOW_CREDENTIALS", raising=False)
    main = importlib.import_module("golfbets.main")
    client = TestClient(main.app)
    resp = client.get("/healthz", headers={"Origin": "https://clubhouse.example"})
    assert resp.headers["access-control-allow-origin"] == "https://clubhouse.example"


def test_no_cors_without_allowed_origins(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    main = importlib.import_module("golfbets.main")
    client = TestClient(main.app)
    resp = client.get("/healthz", headers={"Origin": "https://elsewhere.example"})
    assert "access-control-allow-origin" not in resp.headers


def test_api_prefix_is_canonicalised(monkeypatch):
    monkeypatch.setenv("API_PREFIX", "golf/")
    main = importlib.import_module("golfbets.main")
    client = TestClient(main.app)
    assert client.get("/golf/healthz").json() == {"status": "ok"}


def test_bad_settings_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("MAX_BET_AMOUNT", "lots")
    monkeypatch.setenv("NINES_FOUR_PLAYER_POINTS", "4,4,4,4")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    config = importlib.import_module("golfbets.config")
    assert config.MAX_BET_AMOUNT == 1000.0
    assert config.NINES_FOUR_PLAYER_POINTS == [5, 3, 1, 0]
    assert config.LOG_LEVEL == "INFO"


def test_nines_table_from_environment(monkeypatch):
    monkeypatch.setenv("NINES_FOUR_PLAYER_POINTS", "4, 3, 1, 1")
    config = importlib.import_module("golfbets.config")
    assert config.NINES_FOUR_PLAYER_POINTS == [4, 3, 1, 1]
