"""Money parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_CODE = "EGP"

_LOOSE_DISCARD = re.compile(r"[^\d.\-]")
_LOOSE_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "EGP 123.45" / "123.45 EGP"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(CURRENCY_CODE, "")

    amount_str = amount_str.replace(",", "")
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def parse_money(value) -> Decimal:
    """Leniently parse a user-typed money value.

    Every character other than digits, '-' and '.' is dropped, then the longest
    leading number of what remains is used. Stray separators after that number
    are ignored, so "12-34" gives 12 and "1.2.3" gives 1.2. Returns zero when
    nothing numeric is left. Never raises.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, (int, float)):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return Decimal("0")
        return number if number.is_finite() else Decimal("0")

    cleaned = _LOOSE_DISCARD.sub("", str(value))
    match = _LOOSE_NUMBER.match(cleaned)
    if match is None:
        return Decimal("0")
    return Decimal(match.group(0))


def format_money(value) -> str:
    """Render a value as currency text, e.g. ``1,234.50 EGP``.

    None, NaN and anything that is not a number render as the zero amount.
    """
    if value is None or isinstance(value, bool):
        amount = Decimal("0")
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            amount = Decimal("0")
        if not amount.is_finite():
            amount = Decimal("0")
    return f"{amount:,.2f} {CURRENCY_CODE}"
