# src/utils/time_utils.py
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Canonical stored form: UTC, microsecond precision, ``+00:00`` offset.

    Sort fields are compared as strings, so every timestamp written to the
    store must go through here.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def iso_now() -> str:
    return to_iso(utc_now())


def iso_days_ago(days: int) -> str:
    return to_iso(utc_now() - timedelta(days=days))


def iso_start_of_today() -> str:
    now = utc_now()
    return to_iso(now.replace(hour=0, minute=0, second=0, microsecond=0))
