# freightrate/services/zone_resolve/lookups.py
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from freightrate.models.carrier_zone_binding import CarrierZoneBinding
from freightrate.models.carrier_zone_override import CarrierZoneOverride
from freightrate.models.zone_map import ZoneMap
from freightrate.models.zone_set import ZoneSet

Pair = Tuple[int, int]


def get_active_zone_set(
    db: Session,
    carrier_id: str,
    service_id: str,
    ship_date: date,
) -> Optional[Tuple[CarrierZoneBinding, ZoneSet]]:
    """
    生效区间 [effective_from, effective_to] 闭区间命中 ship_date；
    多条命中取 priority 最大者，同 priority 取 id 最小（稳定）。
    绑定到已停用 ZoneSet 的行不参与。
    """
    row = (
        db.query(CarrierZoneBinding, ZoneSet)
        .join(ZoneSet, ZoneSet.id == CarrierZoneBinding.zone_set_id)
        .filter(
            CarrierZoneBinding.carrier_id == carrier_id,
            CarrierZoneBinding.service_id == service_id,
            CarrierZoneBinding.effective_from <= ship_date,
            CarrierZoneBinding.effective_to >= ship_date,
            ZoneSet.enabled.is_(True),
        )
        .order_by(CarrierZoneBinding.priority.desc(), CarrierZoneBinding.id.asc())
        .first()
    )
    if row is None:
        return None
    binding, zone_set = row
    return binding, zone_set


def load_overrides(
    db: Session,
    carrier_id: str,
    service_id: str,
    origin_ids: Iterable[int],
    dest_ids: Iterable[int],
) -> Dict[Pair, str]:
    """一次取回两条父链笛卡尔积范围内的覆盖，避免逐层查库。"""
    o_ids = list(origin_ids)
    d_ids = list(dest_ids)
    if not o_ids or not d_ids:
        return {}

    rows = (
        db.query(CarrierZoneOverride)
        .filter(
            CarrierZoneOverride.carrier_id == carrier_id,
            CarrierZoneOverride.service_id == service_id,
            CarrierZoneOverride.origin_region_id.in_(o_ids),
            CarrierZoneOverride.dest_region_id.in_(d_ids),
        )
        .order_by(CarrierZoneOverride.id.asc())
        .all()
    )
    out: Dict[Pair, str] = {}
    for r in rows:
        out.setdefault((r.origin_region_id, r.dest_region_id), r.zone_code)
    return out


def load_zone_maps(
    db: Session,
    zone_set_id: int,
    origin_ids: Iterable[int],
    dest_ids: Iterable[int],
) -> Dict[Pair, str]:
    o_ids = list(origin_ids)
    d_ids = list(dest_ids)
    if not o_ids or not d_ids:
        return {}

    rows = (
        db.query(ZoneMap)
        .filter(
            ZoneMap.zone_set_id == zone_set_id,
            ZoneMap.origin_region_id.in_(o_ids),
            ZoneMap.dest_region_id.in_(d_ids),
        )
        .order_by(ZoneMap.id.asc())
        .all()
    )
    out: Dict[Pair, str] = {}
    for r in rows:
        out.setdefault((r.origin_region_id, r.dest_region_id), r.zone_code)
    return out
