# freightrate/services/zone_resolve/canonical.py
from __future__ import annotations

import re

from sqlalchemy.orm import Session

from freightrate.api.errors import RegionNotFound, UnsupportedFormat
from freightrate.models.region import Region

from .types import PostalKey

_WS_RE = re.compile(r"\s+")
_FSA_RE = re.compile(r"^[A-Z]\d[A-Z]")
_ZIP_RE = re.compile(r"^\d{5}")


def parse_postal(raw_postal: str) -> PostalKey:
    """
    邮编 → 最小共享区域键：
    - 加拿大：字母-数字-字母 开头 → fsa（前 3 位）
    - 美国：5 位数字开头（允许 ZIP+4）→ zip3（前 3 位）
    其余格式一律拒绝。
    """
    clean = _WS_RE.sub("", str(raw_postal or "")).upper()

    if _FSA_RE.match(clean):
        return PostalKey(region_type="fsa", code=clean[:3], normalized=clean)
    if _ZIP_RE.match(clean):
        return PostalKey(region_type="zip3", code=clean[:3], normalized=clean)

    raise UnsupportedFormat(f"unsupported postal code format: {raw_postal!r}")


def canonicalize(db: Session, raw_postal: str) -> Region:
    key = parse_postal(raw_postal)

    region = (
        db.query(Region)
        .filter(
            Region.type == key.region_type,
            Region.code == key.code,
            Region.enabled.is_(True),
        )
        .first()
    )
    if region is None:
        raise RegionNotFound(f"region not found for {key.region_type}: {key.code}")
    return region
