from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction


def round_half_up(value: Fraction, places: int = 0) -> Decimal:
    """
    Round an exact ratio half away from zero (12.5 -> 13), unlike the
    banker's rounding of the builtin round().
    """
    exp = Decimal(1).scaleb(-places)
    quotient = Decimal(value.numerator) / Decimal(value.denominator)
    return quotient.quantize(exp, rounding=ROUND_HALF_UP)
