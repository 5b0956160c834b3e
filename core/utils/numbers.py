"""
Numeric Utilities

Quote pages render numbers in the requested locale ("R$ 1.234,56" for pt-BR,
"$1,234.56" for en-US). These helpers normalize such text into floats and
compute bounded change percentages.

"Not a number" is reported as ``math.nan`` so callers can test it with
``is_number`` without catching exceptions.
"""

import math
import re
from typing import Optional


_NON_NUMERIC = re.compile(r"[^\d.,+\-]")


def parse_locale_number(text: Optional[str]) -> float:
    """
    Convert locale-formatted numeric text to a float.

    Every character other than digits, ``,``, ``.``, ``+`` and ``-`` is
    dropped first. Then:

    - both separators present: the one appearing last is the decimal
      separator, the other one groups thousands and is removed
    - only a comma: it is the decimal separator
    - only periods or no separator: commas (if any) are removed and the
      remaining text is parsed as-is

    Args:
        text: Raw text, possibly containing currency symbols or a percent sign

    Returns:
        float: The parsed value, or ``math.nan`` when the text is empty or
        does not describe a finite number

    Examples:
        >>> parse_locale_number("1.234,56")
        1234.56
        >>> parse_locale_number("1,234.56")
        1234.56
        >>> parse_locale_number("R$ 12,30")
        12.3
        >>> parse_locale_number("abc")
        nan
    """
    if not text:
        return math.nan

    s = _NON_NUMERIC.sub("", text.strip())
    comma = s.rfind(",")
    dot = s.rfind(".")

    if comma > -1 and dot > -1:
        if comma > dot:
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif comma > -1:
        s = s.replace(".", "").replace(",", ".")
    else:
        s = s.replace(",", "")

    try:
        value = float(s)
    except ValueError:
        return math.nan

    return value if math.isfinite(value) else math.nan


def is_number(value: Optional[float]) -> bool:
    """True when *value* is a finite float (not None, NaN or infinite)."""
    return value is not None and math.isfinite(value)


def clamp(value: float, low: float, high: float) -> float:
    """
    Bound *value* to ``[low, high]``.

    Examples:
        >>> clamp(1000, -50, 50)
        50
        >>> clamp(-1000, -50, 50)
        -50
    """
    return max(low, min(high, value))


def percent_change(
    current: Optional[float],
    reference: Optional[float],
    limit: float = 50.0
) -> Optional[float]:
    """
    Percentage change from *reference* to *current*, clamped to ``[-limit, limit]``.

    Returns None when either value is missing or non-finite, or when the
    reference is zero.

    Examples:
        >>> round(percent_change(5.10, 5.00), 6)
        2.0
        >>> percent_change(30.0, 10.0)
        50.0
        >>> percent_change(10.0, 0.0) is None
        True
    """
    if not is_number(current) or not is_number(reference) or reference == 0:
        return None
    return clamp((current - reference) / reference * 100, -limit, limit)
