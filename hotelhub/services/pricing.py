"""Stay pricing: nightly rate times number of nights."""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

Number = Union[Decimal, int, float, str]


def count_nights(check_in: date, check_out: date) -> int:
    """
    Number of nights between arrival and departure, rounded up to whole days.

    Plain dates always differ by whole days; datetimes (e.g. late arrivals)
    round a partial day up to a full night.
    """
    if isinstance(check_in, datetime) and isinstance(check_out, datetime):
        return math.ceil((check_out - check_in).total_seconds() / 86400)
    return (check_out - check_in).days


def compute_total(
    price_per_night: Number,
    check_in: date,
    check_out: date,
    explicit_total: Optional[Number] = None,
) -> Decimal:
    """
    Total charge for a stay.

    An explicit total (e.g. a price negotiated by the voice agent) replaces the
    calculation. A zero or missing explicit total falls back to the nightly
    rate. No taxes, fees or currency conversion are applied.

    Example:
        >>> compute_total(120, date(2024, 1, 10), date(2024, 1, 13))
        Decimal('360')
    """
    if explicit_total:
        return Decimal(str(explicit_total))
    return Decimal(str(price_per_night)) * count_nights(check_in, check_out)
