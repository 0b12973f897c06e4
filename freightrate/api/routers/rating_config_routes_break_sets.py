# freightrate/api/routers/rating_config_routes_break_sets.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from freightrate.api.routers.rating_config_schemas import (
    BreakItemOut,
    BreakListOut,
    BreakSetCreateIn,
    BreakSetItemOut,
    BreakSetListOut,
    BreaksAddIn,
    BreaksAddOut,
)
from freightrate.db.deps import get_db
from freightrate.services.rating_admin import add_breaks, create_break_set, list_break_sets, list_breaks


def register(router: APIRouter) -> None:
    @router.get("/rating-config/break-sets", response_model=BreakSetListOut)
    def list_break_sets_endpoint(
        metric: Optional[str] = Query(None),
        db: Session = Depends(get_db),
    ):
        rows = list_break_sets(db, metric=metric)
        return BreakSetListOut(ok=True, data=[BreakSetItemOut.model_validate(r) for r in rows])

    @router.post(
        "/rating-config/break-sets",
        response_model=BreakSetItemOut,
        status_code=status.HTTP_201_CREATED,
    )
    def create_break_set_endpoint(payload: BreakSetCreateIn, db: Session = Depends(get_db)):
        row = create_break_set(db, **payload.model_dump())
        return BreakSetItemOut.model_validate(row)

    @router.get(
        "/rating-config/break-sets/{break_set_id}/breaks",
        response_model=BreakListOut,
    )
    def list_breaks_endpoint(
        break_set_id: int = Path(..., ge=1),
        db: Session = Depends(get_db),
    ):
        rows = list_breaks(db, break_set_id)
        return BreakListOut(
            ok=True,
            break_set_id=break_set_id,
            data=[BreakItemOut.model_validate(r) for r in rows],
        )

    @router.post(
        "/rating-config/break-sets/{break_set_id}/breaks",
        response_model=BreaksAddOut,
        status_code=status.HTTP_201_CREATED,
    )
    def add_breaks_endpoint(
        payload: BreaksAddIn,
        break_set_id: int = Path(..., ge=1),
        db: Session = Depends(get_db),
    ):
        rows = add_breaks(db, break_set_id, [b.model_dump() for b in payload.breaks])
        return BreaksAddOut(
            ok=True,
            created=len(rows),
            data=[BreakItemOut.model_validate(r) for r in rows],
        )
