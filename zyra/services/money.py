"""
Money Utilities - Safe Decimal operations for monetary values.

Prices are stored in rupees with paise precision.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal, None]

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns Decimal("0") for None or unparseable input.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Via str() so 0.1 stays 0.1
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round monetary value to two decimal places (half up)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def line_total(price: Number, quantity: int) -> Decimal:
    """Price of one cart/order line."""
    return round_money(to_decimal(price) * quantity)


def sum_money(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable sums to 0.00."""
    total = Decimal("0")
    for value in values:
        total += to_decimal(value)
    return round_money(total)


def to_float(value: Number) -> float:
    """
    Convert to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def format_inr(value: Number) -> str:
    """Format an amount the way the storefront displays it (₹1,23,456)."""
    amount = round_money(value)
    whole, _, fraction = f"{amount:.2f}".partition(".")
    negative = whole.startswith("-")
    digits = whole.lstrip("-")

    # Indian digit grouping: last three, then pairs
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])

    text = f"₹{digits}"
    if fraction != "00":
        text += f".{fraction}"
    return f"-{text}" if negative else text


def discount_percent(price: Number, compare_at_price: Number) -> int | None:
    """
    Percentage saved against the compare-at price.

    Returns None when there is no compare-at price or it does not exceed
    the selling price.
    """
    if compare_at_price is None:
        return None
    compare = to_decimal(compare_at_price)
    current = to_decimal(price)
    if compare <= 0 or compare <= current:
        return None
    ratio = (compare - current) / compare * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
