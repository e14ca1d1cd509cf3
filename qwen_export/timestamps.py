from __future__ import annotations

import math
from typing import Any, Dict, Optional


def sanitize_timestamp(value: Any) -> Optional[int]:
    """
    Coerce an export timestamp into whole seconds.

    Accepts numbers and numeric strings ("1700000000.25").
    Anything else (None, booleans, garbage, NaN, infinity) becomes None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return math.floor(number)


def comparable_timestamp(conversation: Dict[str, Any]) -> int:
    """
    Sort key for "most recent first": update_time, else create_time, else 0.
    """
    update_time = sanitize_timestamp(conversation.get("update_time"))
    if update_time is not None:
        return update_time

    create_time = sanitize_timestamp(conversation.get("create_time"))
    return create_time if create_time is not None else 0
