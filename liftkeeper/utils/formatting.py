"""Number helpers shared by ledger descriptions, receipts and price updates."""
import math


def round_half_up(value: float) -> int:
    """Round .5 upwards (towards +inf), not to even."""
    return math.floor(value + 0.5)


def round_to_step(value: float, step: int = 50) -> int:
    """
    Round to the nearest multiple of `step`.

    >>> round_to_step(480.7)
    500
    """
    return round_half_up(value / step) * step


def format_amount(value: float) -> str:
    """
    Format with '.' thousands and ',' decimals, at most two decimals.

    >>> format_amount(1234.5)
    '1.234,5'
    """
    quantized = round(float(value), 2)
    whole, _, fraction = f"{abs(quantized):,.2f}".partition(".")
    whole = whole.replace(",", ".")
    fraction = fraction.rstrip("0")
    sign = "-" if quantized < 0 else ""
    if fraction:
        return f"{sign}{whole},{fraction}"
    return f"{sign}{whole}"


def format_money(value: float, symbol: str) -> str:
    return f"{format_amount(value)} {symbol}"
