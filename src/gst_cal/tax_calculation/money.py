"""Monetary rounding helpers shared by every stage of the tax pipeline."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Optional

MONEY_PLACES = Decimal("0.01")

# enough digits to quantize the largest finite float to cents
MONEY_PRECISION = 400


def round2(value: Any) -> float:
    """Round to 2 decimal places using ROUND_HALF_UP.

    Non-finite or non-numeric input yields 0.0. Floats are quantized from
    their shortest repr so that 2.675 rounds to 2.68 as it reads.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        rounded = float(Decimal(repr(number)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP))
    # normalise -0.0 so equality checks and output stay clean
    return rounded + 0.0


def parse_number(value: Any) -> Optional[float]:
    """Parse a number or numeric string, returning None when it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(Decimal(text))
        except (InvalidOperation, ValueError):
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_amount(value: Any) -> float:
    """Parse a monetary amount; empty, missing or unparsable input is 0.0."""
    number = parse_number(value)
    if number is None:
        return 0.0
    return round2(number)
