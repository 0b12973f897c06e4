# freightrate/api/routers/unified_rates.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from freightrate.api.deps import get_app_settings
from freightrate.api.routers.unified_rates_schemas import UnifiedRatesIn, UnifiedRatesOut
from freightrate.core.config import AppSettings
from freightrate.db.deps import get_db
from freightrate.services.unified_rating import calculate_unified_rates

router = APIRouter(tags=["rates"])


@router.post(
    "/rates/unified",
    response_model=UnifiedRatesOut,
    status_code=status.HTTP_200_OK,
)
def calculate_unified_rates_endpoint(
    payload: UnifiedRatesIn,
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
):
    outcome = calculate_unified_rates(
        db,
        tariff_id=payload.tariff_id,
        shipment=payload.shipment.to_shipment(),
        zone_code=payload.zone_code,
        freight_class=payload.freight_class,
        default_policy=settings.DEFAULT_COMPARE_POLICY,
    )
    return UnifiedRatesOut(ok=True, **outcome.to_dict())
