"""
Cursor pagination helpers shared by listing endpoints.
"""

from typing import Any, Optional

DEFAULT_LIMIT = 25
MAX_LIMIT = 100

# Ranges of INTEGER and BIGINT columns
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _coerce_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_int(value: Any, minimum: int = INT64_MIN, maximum: int = INT64_MAX) -> Optional[int]:
    """
    Leniently coerce a query value to an integer.

    Blank, non-numeric and non-integral input is treated as absent
    rather than rejected. Numbers beyond what the compared column can
    hold are clamped to its range, which keeps the comparison meaning
    the same.
    """
    number = _coerce_int(value)
    if number is None:
        return None
    return max(minimum, min(number, maximum))


def clamp_limit(raw: Any, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """
    Effective page size for a requested limit.

    Missing, non-numeric or non-positive values fall back to the default;
    anything above the maximum is capped.
    """
    limit = _coerce_int(raw)
    if limit is None or limit <= 0:
        limit = default
    return min(limit, maximum)
