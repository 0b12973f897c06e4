# freightrate/api/routers/rating_config_routes_zone_sets.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from freightrate.api.routers.rating_config_schemas import (
    ZoneMapItemOut,
    ZoneMapListOut,
    ZoneMapReplaceIn,
    ZoneMapReplaceOut,
    ZoneSetCreateIn,
    ZoneSetItemOut,
    ZoneSetListOut,
)
from freightrate.db.deps import get_db
from freightrate.services.rating_admin import (
    create_zone_set,
    delete_zone_set,
    list_zone_maps,
    list_zone_sets,
    replace_zone_maps,
)


def register(router: APIRouter) -> None:
    @router.get("/rating-config/zone-sets", response_model=ZoneSetListOut)
    def list_zone_sets_endpoint(db: Session = Depends(get_db)):
        rows = list_zone_sets(db)
        return ZoneSetListOut(ok=True, data=[ZoneSetItemOut.model_validate(r) for r in rows])

    @router.post(
        "/rating-config/zone-sets",
        response_model=ZoneSetItemOut,
        status_code=status.HTTP_201_CREATED,
    )
    def create_zone_set_endpoint(payload: ZoneSetCreateIn, db: Session = Depends(get_db)):
        row = create_zone_set(db, **payload.model_dump())
        return ZoneSetItemOut.model_validate(row)

    @router.delete(
        "/rating-config/zone-sets/{zone_set_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    def delete_zone_set_endpoint(
        zone_set_id: int = Path(..., ge=1),
        db: Session = Depends(get_db),
    ):
        delete_zone_set(db, zone_set_id)

    @router.get(
        "/rating-config/zone-sets/{zone_set_id}/zone-maps",
        response_model=ZoneMapListOut,
    )
    def list_zone_maps_endpoint(
        zone_set_id: int = Path(..., ge=1),
        db: Session = Depends(get_db),
    ):
        rows = list_zone_maps(db, zone_set_id)
        return ZoneMapListOut(
            ok=True,
            zone_set_id=zone_set_id,
            data=[ZoneMapItemOut.model_validate(r) for r in rows],
        )

    @router.put(
        "/rating-config/zone-sets/{zone_set_id}/zone-maps",
        response_model=ZoneMapReplaceOut,
    )
    def replace_zone_maps_endpoint(
        payload: ZoneMapReplaceIn,
        zone_set_id: int = Path(..., ge=1),
        db: Session = Depends(get_db),
    ):
        n = replace_zone_maps(db, zone_set_id, [r.model_dump() for r in payload.rows])
        return ZoneMapReplaceOut(ok=True, zone_set_id=zone_set_id, replaced=n)
