from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    # Calendar-day granularity; execution dates carry no time component.
    return utcnow().date()
