import datetime as dt

import pytest

from financeflow.services.month import current_month, resolve_month


def test_current_month_formats_year_and_month() -> None:
    assert current_month(dt.date(2024, 6, 30)) == "2024-06"


def test_resolve_month_defaults_to_current_month() -> None:
    assert resolve_month(None, today=dt.date(2025, 1, 2)) == "2025-01"
    assert resolve_month("", today=dt.date(2025, 1, 2)) == "2025-01"


def test_resolve_month_normalizes_value() -> None:
    assert resolve_month("2024-6") == "2024-06"


def test_resolve_month_rejects_invalid_value() -> None:
    with pytest.raises(ValueError, match="YYYY-MM"):
        resolve_month("June 2024")
