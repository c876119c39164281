import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Number

from inkloop.errors import NOT_COMPUTABLE

CURRENCY_SYMBOL = "₹"
NOT_AVAILABLE = "N/A"


def _is_displayable_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def round_half_up(value, decimals: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-decimals)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def group_en_in(digits: str) -> str:
    """Group an unsigned digit string the en-IN way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount):
    if not _is_displayable_number(amount):
        return amount
    rounded = round_half_up(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{group_en_in(str(abs(int(rounded))))}"


def format_rate(amount):
    formatted = format_currency(amount)
    if formatted is amount:
        return display_value(amount)
    return f"{formatted}/h"


def format_percent(value, decimals: int = 1):
    if not _is_displayable_number(value):
        return display_value(value)
    return f"{round_half_up(value, decimals)}%"


def format_hours(value):
    if not _is_displayable_number(value):
        return display_value(value)
    rounded = round_half_up(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{group_en_in(str(abs(int(rounded))))}h"


def display_value(value):
    if value is NOT_COMPUTABLE:
        return NOT_AVAILABLE
    if isinstance(value, float) and math.isnan(value):
        return NOT_AVAILABLE
    return value
