"""Tests for core utilities."""

from core.utils import generate_entry_id, get_current_timestamp


def test_generate_entry_id_is_unique() -> None:
    first = generate_entry_id("status")
    second = generate_entry_id("status")

    assert first.startswith("status-")
    assert first != second


def test_get_current_timestamp_is_utc() -> None:
    assert get_current_timestamp().endswith("+00:00")
