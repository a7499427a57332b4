from datetime import datetime, timezone


def utc_now() -> datetime:
    # timestamps are stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def get_now() -> datetime:
    """Request-scoped time source, overridable in tests."""
    return utc_now()
