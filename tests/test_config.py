import json
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, OperationalError

from core.config import clear_override, load_settings, read_override, write_override
from core.dates import ceil_days, days_between, start_of_month, to_date, to_datetime
from core.errors import PERMANENT, TRANSIENT, classify_store_error


def test_override_beats_environment(tmp_path, monkeypatch):
    path = tmp_path / "override.json"
    monkeypatch.setenv("EXPIRY_WARNING_DAYS", "45")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    write_override({"EXPIRY_WARNING_DAYS": 60, "SECRET_KEY": "ignored"}, path)

    settings = load_settings(path)

    assert settings.EXPIRY_WARNING_DAYS == 60
    assert settings.LOG_LEVEL == "DEBUG"
    assert "SECRET_KEY" not in json.loads(path.read_text())


def test_missing_override_falls_back(tmp_path, monkeypatch):
    monkeypatch.delenv("EXPIRY_WARNING_DAYS", raising=False)

    settings = load_settings(tmp_path / "absent.json")

    assert settings.EXPIRY_WARNING_DAYS == 30
    assert settings.ALLOW_OVERPAYMENT is True


def test_corrupt_override_is_ignored(tmp_path):
    path = tmp_path / "override.json"
    path.write_text("{not json")

    assert read_override(path) == {}


def test_clear_override(tmp_path):
    path = tmp_path / "override.json"
    write_override({"LOG_LEVEL": "WARNING"}, path)

    assert clear_override(path) is True
    assert clear_override(path) is False
    assert read_override(path) == {}


def test_store_errors_are_classified():
    assert classify_store_error(OperationalError("SELECT 1", {}, Exception("database is locked"))) == TRANSIENT
    assert classify_store_error(IntegrityError("INSERT", {}, Exception("UNIQUE"))) == PERMANENT


def test_date_helpers():
    assert to_date("2024-06-07T10:00:00") == date(2024, 6, 7)
    assert to_datetime(date(2024, 6, 7)) == datetime(2024, 6, 7)
    aware = datetime(2024, 6, 7, 12, 0, tzinfo=timezone(timedelta(hours=6)))
    assert to_datetime(aware) == datetime(2024, 6, 7, 6, 0)
    assert ceil_days(date(2024, 6, 10), datetime(2024, 6, 7, 12)) == 3
    assert days_between(date(2024, 6, 10), datetime(2024, 6, 7, 23, 59)) == 3
    assert start_of_month(datetime(2024, 2, 29, 8)) == date(2024, 2, 1)
