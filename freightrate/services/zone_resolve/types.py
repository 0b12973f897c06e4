# freightrate/services/zone_resolve/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from freightrate.models.region import Region
from freightrate.models.zone_set import ZoneSet

# 区域层级：数值越小越细；兜底上卷时先卷更细的一侧
REGION_LEVEL: Dict[str, int] = {
    "city": 0,
    "fsa": 1,
    "zip3": 1,
    "state_province": 2,
    "country": 3,
}


@dataclass(frozen=True)
class PostalKey:
    region_type: str
    code: str
    normalized: str


@dataclass
class ZoneResolution:
    zone_code: str
    origin_region: Region
    dest_region: Region
    zone_set: ZoneSet
    cache_key: str

    # override | zone_map
    matched_via: str
    matched_origin_region_id: int
    matched_dest_region_id: int
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zone_code": self.zone_code,
            "origin_region": region_dict(self.origin_region),
            "dest_region": region_dict(self.dest_region),
            "zone_set": {
                "id": self.zone_set.id,
                "name": self.zone_set.name,
                "version": self.zone_set.version,
            },
            "cache_key": self.cache_key,
            "matched_via": self.matched_via,
            "matched_origin_region_id": self.matched_origin_region_id,
            "matched_dest_region_id": self.matched_dest_region_id,
            "reasons": list(self.reasons),
        }


def region_dict(r: Region) -> Dict[str, Any]:
    return {
        "id": r.id,
        "type": r.type,
        "code": r.code,
        "name": r.name,
        "parent_region_id": r.parent_region_id,
    }


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _s(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    t = str(v).strip()
    return t if t else None
