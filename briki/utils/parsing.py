import math
import re
import logging
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Leniently convert a catalog value to float.
    Accepts numbers, numeric strings and strings with a leading number
    ("4.5 estrellas" -> 4.5). Anything else falls back to the default.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            logger.debug(f"Could not parse number from {value!r}, using {default}")
            return default
        number = float(match.group(1))

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))
