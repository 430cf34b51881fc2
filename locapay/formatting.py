"""
Display formatting for amounts and readings.

Numbers are grouped the French way: a narrow no-break space between
thousands and a decimal comma, e.g. 150 000 or 22 058,5.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


GROUP_SEPARATOR = "\u202f"
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3


def format_number(value: Union[int, float, Decimal]) -> str:
    """Group thousands and keep at most three fraction digits."""
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    amount = amount.quantize(Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP)

    text = f"{amount:,.{MAX_FRACTION_DIGITS}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")

    whole = whole.replace(",", GROUP_SEPARATOR)
    return f"{whole}{DECIMAL_SEPARATOR}{fraction}" if fraction else whole


def format_amount(value: Union[int, float, Decimal], currency: str = "FCFA") -> str:
    return f"{format_number(value)} {currency}"


def format_kwh(value: int) -> str:
    return f"{format_number(value)} kWh"
