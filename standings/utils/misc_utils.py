# standings/utils/misc_utils.py
import math
from typing import Any, Iterable, Mapping, Optional


def first_present(row: Mapping[str, Any], fields: Iterable[str]) -> Optional[Any]:
    """Returns the first value among `fields` that is present and not None."""
    for field in fields:
        value = row.get(field)
        if value is not None:
            return value
    return None


def first_truthy(row: Mapping[str, Any], fields: Iterable[str]) -> Optional[Any]:
    """Like first_present, but empty strings and zeros are skipped too."""
    for field in fields:
        value = row.get(field)
        if value:
            return value
    return None


def coerce_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Converts feed values like "112.4" or 58 to float; junk becomes `default`."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
