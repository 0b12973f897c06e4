# freightrate/api/routers/zone_resolve.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from freightrate.api.routers.zone_resolve_schemas import ZoneResolveIn, ZoneResolveOut
from freightrate.db.deps import get_db
from freightrate.services.zone_resolve import resolve_zone

router = APIRouter(tags=["zones"])


@router.post(
    "/zones/resolve",
    response_model=ZoneResolveOut,
    status_code=status.HTTP_200_OK,
)
def resolve_zone_endpoint(
    payload: ZoneResolveIn,
    db: Session = Depends(get_db),
):
    # BizError（InvalidArgument / RegionNotFound / NoActiveZoneSet / NoZoneMapping ...）
    # 统一交给 app 级 handler 渲染
    res = resolve_zone(
        db,
        carrier_id=payload.carrier_id,
        service_id=payload.service_id,
        origin_postal=payload.origin_postal,
        dest_postal=payload.dest_postal,
        ship_date=payload.ship_date,
    )
    return ZoneResolveOut(ok=True, **res.to_dict())
