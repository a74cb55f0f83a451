from decimal import Decimal, ROUND_HALF_UP
from typing import Union


Number = Union[int, float, Decimal]

CENT = Decimal("0.01")


def round_money(value: Number) -> float:
    """
    Round a monetary amount to 2 decimal places, halves away from zero.

    The value goes through its shortest string form first so that binary
    artefacts like 2.675 -> 2.67499999... still round to 2.68.
    """
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))
