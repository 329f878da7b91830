from datetime import date, datetime, time, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: str, end_of_day: bool = False) -> datetime:
    """ISO date or timestamp as an aware datetime; naive values are UTC.

    A bare date reads as midnight, or as the last instant of that day when
    ``end_of_day`` is set, so a date-only upper bound covers the whole day.
    """
    try:
        day = date.fromisoformat(value)
    except ValueError:
        parsed = datetime.fromisoformat(value)
    else:
        parsed = datetime.combine(day, time.max if end_of_day else time.min)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def add_years(start: date, years: int) -> date:
    """Same month/day ``years`` later; Feb 29 rolls over to Mar 1."""
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return date(start.year + years, 3, 1)


def contract_period(years: int, start: date | None = None) -> tuple[str, str]:
    """Return (start, end) ISO dates for a new contract term."""
    start = start or date.today()
    return start.isoformat(), add_years(start, years).isoformat()
