from __future__ import annotations

from .canonical import canonicalize, parse_postal
from .resolver import resolve_zone
from .types import PostalKey, ZoneResolution

__all__ = ["PostalKey", "ZoneResolution", "canonicalize", "parse_postal", "resolve_zone"]
