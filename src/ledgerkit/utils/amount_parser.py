"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re
from typing import Any

CENTS = Decimal("0.01")

_CURRENCY_SYMBOLS = re.compile(r"[€$£¥\s]")
_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}|[A-Za-z]{3}$")


def _resolve_separators(number: str) -> str:
    """Turn a number using ',' and/or '.' separators into plain decimal text.

    The rightmost separator is the decimal mark, unless it is the only kind
    present and is followed by exactly three digits (a thousands group) or
    appears more than once.
    """
    last_comma = number.rfind(",")
    last_dot = number.rfind(".")

    if last_comma >= 0 and last_dot >= 0:
        decimal_mark = "," if last_comma > last_dot else "."
        thousands = "." if decimal_mark == "," else ","
        number = number.replace(thousands, "")
        return number.replace(decimal_mark, ".")

    separator = "," if last_comma >= 0 else "." if last_dot >= 0 else None
    if separator is None:
        return number

    if number.count(separator) > 1:
        return number.replace(separator, "")

    integer_part, fraction = number.split(separator)
    if len(fraction) == 3 and integer_part not in ("", "0"):
        return integer_part + fraction
    return f"{integer_part}.{fraction}"


def parse_amount(value: Any) -> Decimal:
    """Parse an amount into a signed Decimal rounded to cents.

    Handles various formats:
    - "123.45", "1,234.56" (US)
    - "123,45", "1.234,56" (EU)
    - "$123.45", "-123,45 €", "EUR 10"
    - "(123.45)" (negative in parentheses)
    - "42,00-" (trailing minus)
    - int, float and Decimal values from spreadsheet cells

    Args:
        value: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, (int, Decimal)):
        return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    if isinstance(value, float):
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

    if value is None or not str(value).strip():
        raise ValueError("Empty amount string")

    amount_str = _CURRENCY_SYMBOLS.sub("", str(value))
    amount_str = _CURRENCY_CODE.sub("", amount_str)
    if not re.fullmatch(r"[\d,.\-+()]+", amount_str):
        raise ValueError(f"Could not parse amount '{value}'")

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]
    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:]
    elif amount_str.endswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[:-1]
    amount_str = amount_str.lstrip("+")

    if not amount_str or not re.fullmatch(r"[\d.,]*\d[\d.,]*", amount_str):
        raise ValueError(f"Could not parse amount '{value}'")

    try:
        amount = Decimal(_resolve_separators(amount_str))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{value}': {e}") from e

    amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return -amount if is_negative else amount
