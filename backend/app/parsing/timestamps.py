from __future__ import annotations

import datetime


def normalize_timestamp(value: int | float | str | datetime.datetime) -> datetime.datetime:
    """Convert a provider timestamp to an aware UTC datetime.

    Numbers are Unix seconds; strings are ISO-8601 (a trailing ``Z`` is
    accepted); naive values are taken as UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("Invalid timestamp: empty string")
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        parsed = datetime.datetime.fromisoformat(raw)
    elif isinstance(value, datetime.datetime):
        parsed = value
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def to_iso8601(moment: datetime.datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    moment = moment.astimezone(datetime.timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def iso_timestamp(value: int | float | str | datetime.datetime) -> str:
    return to_iso8601(normalize_timestamp(value))


def utc_now_iso() -> str:
    return to_iso8601(datetime.datetime.now(datetime.timezone.utc))
