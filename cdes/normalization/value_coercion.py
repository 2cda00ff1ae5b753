"""
Numeric coercion for raw measurement cells.

Lab exports carry percentages as numbers, numeric strings, blanks, NaN
or text such as "ND" and "<LOQ". Everything that is not a finite number
coerces to 0.0, which the parsers then drop.

Numeric strings follow the export format: plain decimals with an optional
sign and exponent, or 0x/0o/0b integer literals. Digit separators such as
"1_000" are not numbers.
"""

import math
import re
from numbers import Real
from typing import Any

DECIMAL_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$', re.ASCII)
RADIX_PATTERN = re.compile(r'^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$')


def coerce_percentage(value: Any) -> float:
    """
    Coerce a raw cell to a float percentage.

    Args:
        value: Raw cell value

    Returns:
        The numeric value, or 0.0 for missing/non-numeric/non-finite input

    Examples:
        >>> coerce_percentage(20)
        20.0
        >>> coerce_percentage(" 15.5 ")
        15.5
        >>> coerce_percentage("ND")
        0.0
        >>> coerce_percentage("0x1A")
        26.0
        >>> coerce_percentage(None)
        0.0
    """
    if value is None:
        return 0.0

    if isinstance(value, bool):
        return float(value)

    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if DECIMAL_PATTERN.match(text):
            number = float(text)
        elif RADIX_PATTERN.match(text):
            try:
                number = float(int(text, 0))
            except OverflowError:
                return 0.0
        else:
            return 0.0
    else:
        return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def is_positive_number(value: Any) -> bool:
    """
    Check that a record field is a real number (not bool) greater than 0.

    Unlike coerce_percentage, strings are rejected: batch records must
    carry typed numbers.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    number = float(value)
    return not math.isnan(number) and number > 0
