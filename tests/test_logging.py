"""Tests for logging helpers"""
import logging

from cartsync.logging import get_logger, sanitize_string_for_logging


def test_get_logger_is_cached():
    assert get_logger("cartsync.test") is get_logger("cartsync.test")
    assert isinstance(get_logger("cartsync.test"), logging.Logger)


def test_sanitize_escapes_newlines():
    assert sanitize_string_for_logging("a\nb\rc") == "a\\nb\\rc"


def test_sanitize_truncates():
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."


def test_sanitize_empty():
    assert sanitize_string_for_logging(None) == "N/A"
    assert sanitize_string_for_logging("") == "N/A"
