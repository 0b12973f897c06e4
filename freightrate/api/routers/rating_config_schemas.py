# freightrate/api/routers/rating_config_schemas.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# regions
# ---------------------------------------------------------------------------
class RegionCreateIn(BaseModel):
    type: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    parent_region_id: Optional[int] = Field(None, ge=1)
    patterns: List[str] = Field(default_factory=list)
    enabled: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RegionItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    code: str
    name: str
    parent_region_id: Optional[int] = None
    patterns: List[str] = Field(default_factory=list)
    enabled: bool


class RegionListOut(BaseModel):
    ok: bool = True
    data: List[RegionItemOut]


# ---------------------------------------------------------------------------
# zone sets / zone maps
# ---------------------------------------------------------------------------
class ZoneSetCreateIn(BaseModel):
    name: str = Field(..., min_length=1)
    selected_zones: List[str] = Field(..., min_length=1)
    description: Optional[str] = None
    zone_count: Optional[int] = Field(None, ge=0)
    enabled: bool = True
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None


class ZoneSetItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    selected_zones: List[str]
    zone_count: int
    enabled: bool
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    version: int


class ZoneSetListOut(BaseModel):
    ok: bool = True
    data: List[ZoneSetItemOut]


class ZoneMapRowIn(BaseModel):
    origin_region_id: int = Field(..., ge=1)
    dest_region_id: int = Field(..., ge=1)
    zone_code: str = Field(..., min_length=1)


class ZoneMapReplaceIn(BaseModel):
    rows: List[ZoneMapRowIn]


class ZoneMapItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    zone_set_id: int
    origin_region_id: int
    dest_region_id: int
    zone_code: str


class ZoneMapListOut(BaseModel):
    ok: bool = True
    zone_set_id: int
    data: List[ZoneMapItemOut]


class ZoneMapReplaceOut(BaseModel):
    ok: bool = True
    zone_set_id: int
    replaced: int


# ---------------------------------------------------------------------------
# break sets / breaks
# ---------------------------------------------------------------------------
class BreakSetCreateIn(BaseModel):
    name: str = Field(..., min_length=1)
    metric: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1)
    method: str = Field(..., min_length=1)
    meta: Dict[str, Any] = Field(default_factory=dict)


class BreakSetItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    metric: str
    unit: str
    method: str
    meta: Dict[str, Any]
    enabled: bool


class BreakSetListOut(BaseModel):
    ok: bool = True
    data: List[BreakSetItemOut]


class BreakIn(BaseModel):
    min_metric: float = Field(..., ge=0)
    max_metric: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None


class BreaksAddIn(BaseModel):
    breaks: List[BreakIn] = Field(..., min_length=1)


class BreakItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    break_set_id: int
    min_metric: float
    max_metric: Optional[float] = None
    seq: int
    description: str


class BreaksAddOut(BaseModel):
    ok: bool = True
    created: int
    data: List[BreakItemOut]


class BreakListOut(BaseModel):
    ok: bool = True
    break_set_id: int
    data: List[BreakItemOut]
