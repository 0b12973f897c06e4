# tests/services/test_rating_admin.py
from __future__ import annotations

from datetime import date

import pytest

from freightrate.api.errors import Conflict, InvalidArgument, NotFound
from freightrate.models.zone_map import ZoneMap
from freightrate.models.zone_set import ZoneSet
from freightrate.services.rating_admin import (
    add_breaks,
    create_break_set,
    create_region,
    create_zone_set,
    delete_zone_set,
    list_break_sets,
    list_breaks,
    list_regions,
    list_zone_maps,
    list_zone_sets,
    replace_zone_maps,
)
from tests.factories import bind_zone_set, make_region_tree, make_zone_set


# ---------------------------------------------------------------------------
# regions
# ---------------------------------------------------------------------------
def test_create_region_normalizes_type_and_code(db):
    ca = create_region(db, type=" Country ", code="ca", name="Canada")
    on = create_region(db, type="state_province", code="on", name="Ontario", parent_region_id=ca.id)

    assert (ca.type, ca.code) == ("country", "CA")
    assert on.parent_region_id == ca.id
    assert on.enabled is True


def test_create_region_duplicate_conflict(db):
    create_region(db, type="fsa", code="M5V", name="Toronto DT")
    with pytest.raises(Conflict):
        create_region(db, type="FSA", code="m5v", name="again")


def test_create_region_validation(db):
    with pytest.raises(InvalidArgument):
        create_region(db, type="planet", code="X", name="X")
    with pytest.raises(InvalidArgument):
        create_region(db, type="fsa", code="  ", name="X")
    with pytest.raises(NotFound):
        create_region(db, type="fsa", code="M5V", name="X", parent_region_id=9999)


def test_list_regions_sorted_and_filtered(db):
    create_region(db, type="fsa", code="K1A", name="Ottawa")
    create_region(db, type="country", code="CA", name="Canada")
    create_region(db, type="fsa", code="H2X", name="Montreal")

    rows = list_regions(db)
    assert [(r.type, r.code) for r in rows] == [("country", "CA"), ("fsa", "H2X"), ("fsa", "K1A")]
    assert [r.code for r in list_regions(db, region_type="fsa")] == ["H2X", "K1A"]


# ---------------------------------------------------------------------------
# zone sets / zone maps
# ---------------------------------------------------------------------------
def test_create_zone_set_defaults_zone_count(db):
    zs = create_zone_set(db, name="Canada Std", selected_zones=["Z1", " Z2 ", ""])
    assert zs.selected_zones == ["Z1", "Z2"]
    assert zs.zone_count == 2
    assert zs.version == 1
    assert [z.id for z in list_zone_sets(db)] == [zs.id]


def test_create_zone_set_validation(db):
    with pytest.raises(InvalidArgument):
        create_zone_set(db, name="Empty", selected_zones=[])
    with pytest.raises(InvalidArgument):
        create_zone_set(
            db,
            name="Backwards",
            selected_zones=["Z1"],
            effective_from=date(2026, 6, 1),
            effective_to=date(2026, 1, 1),
        )

    create_zone_set(db, name="Dup", selected_zones=["Z1"])
    with pytest.raises(Conflict):
        create_zone_set(db, name="Dup", selected_zones=["Z1"])


def test_replace_zone_maps_swaps_all_rows_and_bumps_version(db):
    tree = make_region_tree(db)
    zs = make_zone_set(db)

    n = replace_zone_maps(
        db,
        zs.id,
        [
            {"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z2"},
            {"origin_region_id": tree.on.id, "dest_region_id": tree.qc.id, "zone_code": "Z3"},
        ],
    )
    assert n == 2
    assert db.get(ZoneSet, zs.id).version == 2

    n = replace_zone_maps(
        db,
        zs.id,
        [{"origin_region_id": tree.ca.id, "dest_region_id": tree.ca.id, "zone_code": "Z5"}],
    )
    assert n == 1
    assert [m.zone_code for m in list_zone_maps(db, zs.id)] == ["Z5"]
    assert db.get(ZoneSet, zs.id).version == 3


@pytest.mark.parametrize(
    "bad_row, exc",
    [
        ({"origin_region_id": 9999, "dest_region_id": 1, "zone_code": "Z1"}, NotFound),
        ({"origin_region_id": 1, "dest_region_id": 2, "zone_code": " "}, InvalidArgument),
        ({"dest_region_id": 2, "zone_code": "Z1"}, InvalidArgument),
    ],
)
def test_replace_zone_maps_is_all_or_nothing(db, bad_row, exc):
    tree = make_region_tree(db)
    zs = make_zone_set(db)
    replace_zone_maps(
        db, zs.id, [{"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z2"}]
    )

    good = {"origin_region_id": tree.on.id, "dest_region_id": tree.qc.id, "zone_code": "Z3"}
    with pytest.raises(exc):
        replace_zone_maps(db, zs.id, [good, bad_row])

    # 旧数据原样保留
    assert [m.zone_code for m in list_zone_maps(db, zs.id)] == ["Z2"]
    assert db.get(ZoneSet, zs.id).version == 2


def test_replace_zone_maps_rejects_duplicate_pairs(db):
    tree = make_region_tree(db)
    zs = make_zone_set(db)
    row = {"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z2"}
    with pytest.raises(InvalidArgument):
        replace_zone_maps(db, zs.id, [row, dict(row, zone_code="Z3")])


def test_replace_zone_maps_unknown_zone_set(db):
    with pytest.raises(NotFound):
        replace_zone_maps(db, 9999, [])


def test_delete_zone_set_refuses_while_bound(db):
    zs = make_zone_set(db)
    bind_zone_set(db, zs)
    with pytest.raises(Conflict):
        delete_zone_set(db, zs.id)


def test_delete_zone_set_removes_maps(db):
    tree = make_region_tree(db)
    zs = make_zone_set(db)
    replace_zone_maps(
        db, zs.id, [{"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z2"}]
    )

    delete_zone_set(db, zs.id)

    assert db.get(ZoneSet, zs.id) is None
    assert db.query(ZoneMap).count() == 0
    with pytest.raises(NotFound):
        delete_zone_set(db, zs.id)


# ---------------------------------------------------------------------------
# break sets / breaks
# ---------------------------------------------------------------------------
def test_create_break_set_defaults_rounding(db):
    bs = create_break_set(db, name="LTL-NA-Std v1", metric="Weight", unit="LBS", method="step")
    assert bs.metric == "weight"
    assert bs.unit == "lbs"
    assert bs.meta == {"rounding_increment": 1, "rounding_direction": "up"}


def test_create_break_set_keeps_custom_meta(db):
    bs = create_break_set(
        db,
        name="LF v1 (per-LF extend)",
        metric="lf",
        unit="ft",
        method="extend",
        meta={"rounding_increment": 0.5, "rounding_direction": "nearest", "note": "x"},
    )
    assert bs.meta == {"rounding_increment": 0.5, "rounding_direction": "nearest", "note": "x"}


@pytest.mark.parametrize(
    "kw",
    [
        {"metric": "volume", "method": "step"},
        {"metric": "weight", "method": "tiered"},
        {"metric": "weight", "method": "step", "meta": {"rounding_direction": "sideways"}},
        {"metric": "weight", "method": "step", "meta": {"rounding_increment": -5}},
    ],
)
def test_create_break_set_validation(db, kw):
    with pytest.raises(InvalidArgument):
        create_break_set(db, name="bad", unit="lbs", **kw)


def test_add_breaks_continues_seq(db):
    bs = create_break_set(db, name="w", metric="weight", unit="lbs", method="step")

    first = add_breaks(db, bs.id, [{"min_metric": 0, "max_metric": 499}, {"min_metric": 500, "max_metric": 999}])
    assert [b.seq for b in first] == [1, 2]

    second = add_breaks(db, bs.id, [{"min_metric": 1000, "description": "1000+"}])
    assert [b.seq for b in second] == [3]
    assert second[0].max_metric is None
    assert [b.seq for b in list_breaks(db, bs.id)] == [1, 2, 3]


@pytest.mark.parametrize(
    "bad",
    [
        {"min_metric": 500, "max_metric": 100},
        {"min_metric": -1},
        {"min_metric": "abc"},
        {"min_metric": None},
        {"min_metric": True},
    ],
)
def test_add_breaks_is_all_or_nothing(db, bad):
    bs = create_break_set(db, name="w", metric="weight", unit="lbs", method="step")

    with pytest.raises(InvalidArgument):
        add_breaks(db, bs.id, [{"min_metric": 0, "max_metric": 99}, bad])

    assert list_breaks(db, bs.id) == []


def test_add_breaks_rejects_empty_batch_and_unknown_set(db):
    bs = create_break_set(db, name="w", metric="weight", unit="lbs", method="step")
    with pytest.raises(InvalidArgument):
        add_breaks(db, bs.id, [])
    with pytest.raises(NotFound):
        add_breaks(db, 9999, [{"min_metric": 0}])


def test_list_break_sets_sorted_and_filtered(db):
    create_break_set(db, name="weight v1", metric="weight", unit="lbs", method="step")
    create_break_set(db, name="cube v1", metric="cube", unit="cube", method="step")

    assert [b.name for b in list_break_sets(db)] == ["cube v1", "weight v1"]
    assert [b.name for b in list_break_sets(db, metric="Weight")] == ["weight v1"]
    assert list_break_sets(db, metric="  ") == list_break_sets(db)
    with pytest.raises(InvalidArgument):
        list_break_sets(db, metric="volume")


def test_list_breaks_unknown_set(db):
    with pytest.raises(NotFound):
        list_breaks(db, 9999)
