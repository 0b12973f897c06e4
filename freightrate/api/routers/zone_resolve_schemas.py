# freightrate/api/routers/zone_resolve_schemas.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class ZoneResolveIn(BaseModel):
    carrier_id: str = Field(..., min_length=1)
    service_id: str = Field(..., min_length=1)
    origin_postal: str = Field(..., min_length=1)
    dest_postal: str = Field(..., min_length=1)
    # 不传按当天（UTC）
    ship_date: Optional[date] = None


class RegionOut(BaseModel):
    id: int
    type: str
    code: str
    name: str
    parent_region_id: Optional[int] = None


class ZoneSetRefOut(BaseModel):
    id: int
    name: str
    version: int


class ZoneResolveOut(BaseModel):
    ok: bool = True
    zone_code: str
    origin_region: RegionOut
    dest_region: RegionOut
    zone_set: ZoneSetRefOut
    cache_key: str
    matched_via: str
    matched_origin_region_id: int
    matched_dest_region_id: int
    reasons: List[str] = Field(default_factory=list)
