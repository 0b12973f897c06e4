# freightrate/api/routers/rating_config_routes_regions.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from freightrate.api.routers.rating_config_schemas import RegionCreateIn, RegionItemOut, RegionListOut
from freightrate.db.deps import get_db
from freightrate.services.rating_admin import create_region, list_regions


def register(router: APIRouter) -> None:
    @router.get("/rating-config/regions", response_model=RegionListOut)
    def list_regions_endpoint(
        type: Optional[str] = Query(None),
        db: Session = Depends(get_db),
    ):
        rows = list_regions(db, region_type=type)
        return RegionListOut(ok=True, data=[RegionItemOut.model_validate(r) for r in rows])

    @router.post(
        "/rating-config/regions",
        response_model=RegionItemOut,
        status_code=status.HTTP_201_CREATED,
    )
    def create_region_endpoint(
        payload: RegionCreateIn,
        db: Session = Depends(get_db),
    ):
        row = create_region(
            db,
            type=payload.type,
            code=payload.code,
            name=payload.name,
            parent_region_id=payload.parent_region_id,
            patterns=payload.patterns,
            enabled=payload.enabled,
            metadata=payload.metadata,
        )
        return RegionItemOut.model_validate(row)
