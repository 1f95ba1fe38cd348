from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_iso_date(value, field_name: str = "Date") -> str:
    """Normalise a date or YYYY-MM-DD string to its ISO form."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return parse_iso_date(str(value).strip()).isoformat()
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 timestamp as stored in created_at / approved_at columns."""
    moment = moment or now_utc()
    return moment.isoformat(timespec="milliseconds")


def today_local() -> date:
    """Calendar day used for default log dates and reporting windows."""
    return date.today()
