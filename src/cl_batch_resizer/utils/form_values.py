import re
from typing import Final

_LEADING_INT: Final[re.Pattern[str]] = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: str | int | None, default: int) -> int:
    """Lenient integer parse for free-text form fields.

    Absent values fall back to ``default``. Present values keep their leading
    integer (``"640px"`` -> 640); anything unparsable becomes 0 so dimension
    validation rejects it instead of silently using the default.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value

    if not value.strip():
        return 0

    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    return int(match.group(1))
