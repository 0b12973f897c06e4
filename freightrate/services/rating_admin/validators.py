# freightrate/services/rating_admin/validators.py
from __future__ import annotations

import math
from typing import Any, Dict, Optional

from freightrate.api.errors import InvalidArgument
from freightrate.models.rating_break_set import BREAK_METHODS, BREAK_METRICS, ROUNDING_DIRECTIONS
from freightrate.models.region import REGION_TYPES


def norm(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    s2 = str(s).strip()
    return s2 if s2 else None


def norm_required(s: Optional[str], field: str) -> str:
    s2 = norm(s)
    if not s2:
        raise InvalidArgument(f"{field} is required")
    return s2


def validate_choice(value: Optional[str], field: str, allowed: tuple[str, ...]) -> str:
    v = norm_required(value, field).lower()
    if v not in allowed:
        raise InvalidArgument(f"{field} must be one of: {', '.join(allowed)}")
    return v


def validate_region_type(value: Optional[str]) -> str:
    return validate_choice(value, "type", REGION_TYPES)


def validate_number(value: Any, field: str, *, positive: bool = False) -> float:
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be a number")
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"{field} must be a number") from e
    if math.isnan(f) or math.isinf(f):
        raise InvalidArgument(f"{field} must be a number")
    if positive and f <= 0:
        raise InvalidArgument(f"{field} must be > 0")
    return f


def normalize_break_set_meta(meta: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    取整规则默认：步长 1，向上取整。其余键原样保留（维护端自定义扩展）。
    """
    m = dict(meta or {})
    inc = m.get("rounding_increment")
    m["rounding_increment"] = 1 if inc in (None, "", 0) else validate_number(inc, "rounding_increment", positive=True)
    m["rounding_direction"] = validate_choice(
        m.get("rounding_direction") or "up", "rounding_direction", ROUNDING_DIRECTIONS
    )
    return m


__all__ = [
    "BREAK_METHODS",
    "BREAK_METRICS",
    "norm",
    "norm_required",
    "normalize_break_set_meta",
    "validate_choice",
    "validate_number",
    "validate_region_type",
]
