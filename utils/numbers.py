"""Numeric field parsing"""

import math
import re
from typing import Optional


_DECIMAL_COMMA = re.compile(r"^[+-]?\d*,\d+$")


def parse_number(raw: Optional[str]) -> Optional[float]:
    """
    Parse a spreadsheet number field

    Accepts a decimal comma (``0,5``) as exported by comma-locale
    spreadsheets.

    Returns:
        The finite float value, or None when the field is blank or unparseable
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    if _DECIMAL_COMMA.match(text):
        text = text.replace(",", ".")
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
