# tests/unit/test_capacity_metrics.py
from __future__ import annotations

import pytest

from freightrate.api.errors import InvalidArgument
from freightrate.services.unified_rating import Package, Shipment, derive_capacity_metrics
from freightrate.services.unified_rating.capacity import (
    derive_cube_utilization,
    derive_linear_feet,
    derive_skid_count,
)


def _pallets(qty: int, *, height: float = 48, stackable: bool = False) -> Package:
    return Package(length=48, width=40, height=height, quantity=qty, stackable=stackable)


def test_footprint_lf_rounds_up_to_half_foot():
    # 48*40*2 = 3840 sq in / (100 * 0.9) / 12 = 3.56 → 4.0
    s = Shipment(packages=[_pallets(2)])
    assert derive_linear_feet(s, {}) == 4.0


def test_rows_across_lf():
    # floor(100/40)=2 列；ceil(5/2)=3 排 × 48in = 12 ft
    s = Shipment(packages=[_pallets(5)])
    assert derive_linear_feet(s, {"method": "rows_across"}) == 12.0


def test_rows_across_rejects_pallet_wider_than_trailer():
    s = Shipment(packages=[_pallets(1)])
    with pytest.raises(InvalidArgument):
        derive_linear_feet(s, {"method": "rows_across", "avg_pallet_width_in": 120})


def test_declared_lf_without_packages():
    s = Shipment(declared_lf=7.2)
    assert derive_linear_feet(s, {"method": "declared"}) == 7.5


def test_declared_lf_missing_is_none():
    assert derive_linear_feet(Shipment(), {"method": "declared"}) is None


def test_lf_without_packages_is_none():
    assert derive_linear_feet(Shipment(total_weight=500), {}) is None


def test_unknown_lf_method_rejected():
    with pytest.raises(InvalidArgument):
        derive_linear_feet(Shipment(packages=[_pallets(1)]), {"method": "guess"})


def test_skid_count_applies_stack_factor_only_under_max_height():
    s = Shipment(
        packages=[
            _pallets(4, height=40, stackable=True),  # 4 * 0.5 = 2
            _pallets(1),  # 1
            _pallets(2, height=90, stackable=True),  # 超高不叠：2
        ]
    )
    assert derive_skid_count(s, {}) == 5


def test_skid_count_rounds_up():
    s = Shipment(packages=[_pallets(3, height=40, stackable=True)])
    assert derive_skid_count(s, {}) == 2


def test_quantity_defaults_to_one():
    s = Shipment(packages=[Package(length=48, width=40, height=48)])
    assert derive_skid_count(s, {}) == 1


def test_cube_utilization():
    assert derive_cube_utilization(Shipment(total_cube=1000), {}) == 0.25
    assert derive_cube_utilization(Shipment(total_cube=1000), {"trailer_cube": 2000}) == 0.5
    assert derive_cube_utilization(Shipment(), {}) is None


def test_derive_capacity_metrics_empty_shipment_is_all_none():
    m = derive_capacity_metrics(Shipment(total_weight=800), None)
    assert m.linear_feet is None
    assert m.skid_count is None
    assert m.cube_utilization is None


def test_derive_capacity_metrics_reads_per_metric_meta():
    s = Shipment(total_cube=400, packages=[_pallets(5)])
    m = derive_capacity_metrics(
        s,
        {
            "lf": {"method": "rows_across"},
            "skid": {"stack_factor": 0.5},
            "cube": {"trailer_cube": 4000},
        },
    )
    assert m.linear_feet == 12.0
    assert m.skid_count == 5
    assert m.cube_utilization == pytest.approx(0.1)
