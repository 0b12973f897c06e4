# freightrate/api/routers/unified_rates_schemas.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from freightrate.services.unified_rating import Package, Shipment


class PackageIn(BaseModel):
    length: float = Field(0, ge=0)
    width: float = Field(0, ge=0)
    height: float = Field(0, ge=0)
    quantity: int = Field(1, ge=1)
    stackable: bool = False


class ShipmentIn(BaseModel):
    total_weight: Optional[float] = Field(None, ge=0)
    total_cube: Optional[float] = Field(None, ge=0)
    declared_lf: Optional[float] = Field(None, ge=0)
    packages: List[PackageIn] = Field(default_factory=list)

    def to_shipment(self) -> Shipment:
        return Shipment(
            total_weight=self.total_weight,
            total_cube=self.total_cube,
            declared_lf=self.declared_lf,
            packages=[Package(**p.model_dump()) for p in self.packages],
        )


class UnifiedRatesIn(BaseModel):
    tariff_id: int = Field(..., ge=1)
    shipment: ShipmentIn
    zone_code: str = Field(..., min_length=1)
    freight_class: Optional[str] = None


class UnifiedRatesOut(BaseModel):
    ok: bool = True
    winning_metric: str
    total_rate: float
    calculation: str
    details: Dict[str, Any]
    all_results: Dict[str, Optional[Dict[str, Any]]]
    tariff_info: Dict[str, Any]
    capacity_metrics: Optional[Dict[str, Any]] = None
