"""Unit tests for stay pricing."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from hotelhub.services.pricing import compute_total, count_nights


@pytest.mark.unit
def test_three_nights_at_120() -> None:
    total = compute_total(120, date(2024, 1, 10), date(2024, 1, 13))

    assert total == Decimal("360")


@pytest.mark.unit
def test_decimal_rates_are_exact() -> None:
    total = compute_total(Decimal("99.99"), date(2024, 1, 10), date(2024, 1, 13))

    assert total == Decimal("299.97")


@pytest.mark.unit
def test_explicit_total_overrides_rate() -> None:
    total = compute_total(120, date(2024, 1, 10), date(2024, 1, 13), explicit_total=300)

    assert total == Decimal("300")


@pytest.mark.unit
@pytest.mark.parametrize("explicit", [None, 0])
def test_missing_or_zero_explicit_total_falls_back(explicit) -> None:
    total = compute_total(120, date(2024, 1, 10), date(2024, 1, 11), explicit_total=explicit)

    assert total == Decimal("120")


@pytest.mark.unit
def test_count_nights_across_month_end() -> None:
    assert count_nights(date(2024, 1, 30), date(2024, 2, 2)) == 3


@pytest.mark.unit
def test_count_nights_rounds_partial_days_up() -> None:
    assert count_nights(datetime(2024, 1, 10, 22, 0), datetime(2024, 1, 12, 11, 0)) == 2
