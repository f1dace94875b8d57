import datetime as dt


def current_month(today: dt.date | None = None) -> str:
    today = today or dt.date.today()
    return f"{today.year:04d}-{today.month:02d}"


def resolve_month(month: str | None, today: dt.date | None = None) -> str:
    """Return a validated ``YYYY-MM`` key, defaulting to the current month.

    Month keys are compared as string prefixes of ISO dates; no timezone
    conversion is applied to either side.
    """
    if not month:
        return current_month(today)

    try:
        parsed = dt.datetime.strptime(month, "%Y-%m")
    except ValueError as exc:
        raise ValueError("Month must be in YYYY-MM format") from exc

    return f"{parsed.year:04d}-{parsed.month:02d}"
