import logging

import pytest

from core.error_handler import (
    StructuredLogger,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger("tests")


def test_structured_logger_redacts_generator_credentials(logger):
    # placeholder values only; allowlist: test fixture, not a real secret
    data = {
        "GEMINI_API_KEY": "placeholder_key",  # pragma: allowlist secret
        "authorization": "Bearer placeholder_token",
        "model": "gemini-2.5-pro",
    }
    sanitized = logger._sanitize_data(data)

    assert sanitized["GEMINI_API_KEY"] == "[REDACTED]"
    assert sanitized["authorization"] == "[REDACTED]"
    assert sanitized["model"] == "gemini-2.5-pro"


def test_structured_logger_keeps_generation_fields(logger):
    data = {"keywords": ["冬季", "元旦"], "job": "morning:2024-01-01", "attempts": 3}

    assert logger._sanitize_data(data) == data


def test_structured_logger_sanitizes_nested_values(logger):
    data = {"request": {"headers": [{"name": "Authorization", "value": "Bearer x"}]}}

    sanitized = logger._sanitize_data(data)

    assert sanitized["request"]["headers"][0]["value"] == "[REDACTED]"


def test_structured_logger_prefixes_correlation_id(logger, caplog):
    set_correlation_id("cid-42")
    try:
        with caplog.at_level(logging.INFO, logger="tests"):
            logger.info("Copies generated", category="toddler")
    finally:
        set_correlation_id(None)

    assert "[cid-42] Copies generated" in caplog.text
    record = caplog.records[-1]
    assert record.structured_data["correlation_id"] == "cid-42"
    assert record.structured_data["category"] == "toddler"


def test_get_correlation_id_generates_when_unset():
    set_correlation_id(None)
    generated = get_correlation_id()

    assert generated
    assert get_correlation_id() == generated
    set_correlation_id(None)
