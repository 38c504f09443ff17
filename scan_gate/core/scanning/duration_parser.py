"""Parsing of human-entered duration strings such as ``1d 2h 30m``."""

import re
from typing import Optional

from ..exceptions import InvalidDurationError


_TOKEN_PATTERN = re.compile(r'(\d+)\s*([a-zA-Z]+)')

_UNIT_SECONDS = {
    'd': 86400,
    'h': 3600,
    'm': 60,
}


def parse_duration(value: Optional[str]) -> Optional[int]:
    """Parse a duration string into seconds.

    Accepts whitespace-separated ``<number><unit>`` tokens with units
    ``d``, ``h`` and ``m``; each unit may appear once. Empty input means
    no limit and returns None.

    Args:
        value: Duration string, e.g. ``'1d 2h 30m'`` or ``'45m'``

    Returns:
        Duration in seconds, or None for empty input

    Raises:
        InvalidDurationError: If the string is malformed
    """
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    # Leftovers after removing valid tokens mean malformed input
    leftover = _TOKEN_PATTERN.sub('', text).strip()
    if leftover:
        raise InvalidDurationError(text, f"unexpected text '{leftover}'")

    seen = set()
    total = 0
    for amount, unit in _TOKEN_PATTERN.findall(text):
        unit = unit.lower()
        if unit not in _UNIT_SECONDS:
            raise InvalidDurationError(text, f"unknown unit '{unit}'")
        if unit in seen:
            raise InvalidDurationError(text, f"unit '{unit}' given more than once")
        seen.add(unit)
        total += int(amount) * _UNIT_SECONDS[unit]

    return total


def is_valid_duration(value: Optional[str]) -> bool:
    try:
        parse_duration(value)
        return True
    except InvalidDurationError:
        return False
