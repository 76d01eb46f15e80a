"""
Tests for database URL handling and log formatting.
"""

import json
import logging

from app.database import split_database_url
from app.logging_config import ContextTextFormatter, JSONFormatter


class TestDatabaseUrl:
    """Hosted Postgres URLs are rewritten for asyncpg."""

    def test_heroku_style_url(self):
        url, connect_args = split_database_url("postgres://u:p@db.example.com:5432/shashikala")
        assert url == "postgresql+asyncpg://u:p@db.example.com:5432/shashikala"
        assert connect_args == {}

    def test_sslmode_becomes_connect_arg(self):
        url, connect_args = split_database_url(
            "postgresql://u:p@db.example.com/shashikala?sslmode=require&application_name=api"
        )
        assert url == "postgresql+asyncpg://u:p@db.example.com/shashikala?application_name=api"
        assert connect_args == {"ssl": True}

    def test_disabled_ssl(self):
        url, connect_args = split_database_url("postgresql+asyncpg://u:p@localhost/db?sslmode=disable")
        assert url == "postgresql+asyncpg://u:p@localhost/db"
        assert connect_args == {}


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.services", logging.INFO, __file__, 10, "Payment %s done", ("PAY-1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    entry = json.loads(JSONFormatter().format(make_record(payment_id="PAY-1", gateway_order_id="order_1")))

    assert entry["message"] == "Payment PAY-1 done"
    assert entry["level"] == "INFO"
    assert entry["payment_id"] == "PAY-1"
    assert entry["gateway_order_id"] == "order_1"
    assert "registration_id" not in entry


def test_text_formatter_appends_context():
    line = ContextTextFormatter().format(make_record(registration_id="REG-1"))

    assert "Payment PAY-1 done" in line
    assert line.endswith("[registration_id=REG-1]")
