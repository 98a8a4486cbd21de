import logging
import os
import sys
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure the golfbets package is importable
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from golfbets.exceptions import DomainException, SettlementImbalance
from golfbets.main import domain_exception_handler, unhandled_exception_handler


def test_unhandled_exception_logs_traceback(caplog):
    app = FastAPI()
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/boom")
    def boom():
        raise ValueError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.get("/boom")

    assert response.status_code == 500
    record = next((r for r in caplog.records if r.message == "Unhandled exception"), None)
    assert record is not None
    assert record.exc_info[0] is ValueError
    assert "ValueError: boom" in caplog.text


def test_settlement_imbalance_is_logged_as_a_server_error(caplog):
    app = FastAPI()
    app.add_exception_handler(DomainException, domain_exception_handler)

    @app.get("/imbalance")
    def imbalance():
        raise SettlementImbalance(3)

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.get("/imbalance")

    assert response.status_code == 500
    assert response.json()["code"] == "settlement_imbalance"
    record = next((r for r in caplog.records if r.levelno == logging.ERROR), None)
    assert record is not None
    assert record.exc_info[0] is SettlementImbalance
