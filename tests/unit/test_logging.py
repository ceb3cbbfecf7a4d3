"""Unit tests for the log record filter in standings/logging/setup.py"""

from standings.config.settings import settings
from standings.logging.setup import sensitive_data_filter


def make_record(message, **extra):
    return {"message": message, "extra": extra, "name": "standings.storage"}


class TestSensitiveDataFilter:
    """Tests for sensitive_data_filter."""

    def test_masks_sensitive_extra_keys(self):
        record = make_record("connecting", api_key="abcdefghijklmnop", table="teams")
        assert sensitive_data_filter(record) is True
        assert record["extra"]["api_key"] == "abcd****mnop"
        assert record["extra"]["table"] == "teams"

    def test_short_secret_fully_masked(self):
        record = make_record("connecting", token="abc")
        sensitive_data_filter(record)
        assert record["extra"]["token"] == "********"

    def test_masks_supabase_key_in_message(self, monkeypatch):
        monkeypatch.setattr(settings, "supabase_key", "eyJhbGciOiJIUzI1NiJ9.secret")
        record = make_record("using key eyJhbGciOiJIUzI1NiJ9.secret for requests")
        sensitive_data_filter(record)
        assert record["message"] == "using key ******** for requests"
