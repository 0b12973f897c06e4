# tests/api/test_rating_config_api.py
from __future__ import annotations

from fastapi.testclient import TestClient

from tests.factories import bind_zone_set, make_region_tree, make_zone_set


# ---------------------------------------------------------------------------
# regions
# ---------------------------------------------------------------------------
def test_regions_create_and_list(client: TestClient) -> None:
    r = client.post("/rating-config/regions", json={"type": "country", "code": "ca", "name": "Canada"})
    assert r.status_code == 201, r.text
    ca = r.json()
    assert ca["code"] == "CA"

    r = client.post(
        "/rating-config/regions",
        json={"type": "state_province", "code": "ON", "name": "Ontario", "parent_region_id": ca["id"]},
    )
    assert r.status_code == 201, r.text

    r = client.get("/rating-config/regions", params={"type": "country"})
    assert r.status_code == 200, r.text
    assert [x["code"] for x in r.json()["data"]] == ["CA"]

    r = client.get("/rating-config/regions")
    assert len(r.json()["data"]) == 2


def test_regions_duplicate_conflict(client: TestClient) -> None:
    body = {"type": "fsa", "code": "M5V", "name": "Toronto DT"}
    assert client.post("/rating-config/regions", json=body).status_code == 201

    r = client.post("/rating-config/regions", json=body)
    assert r.status_code == 409, r.text
    assert r.json()["error"]["code"] == "CONFLICT"


def test_regions_invalid_type(client: TestClient) -> None:
    r = client.post("/rating-config/regions", json={"type": "planet", "code": "X", "name": "X"})
    assert r.status_code == 422, r.text
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


# ---------------------------------------------------------------------------
# zone sets / zone maps
# ---------------------------------------------------------------------------
def test_zone_set_lifecycle(client: TestClient, db) -> None:
    tree = make_region_tree(db)

    r = client.post("/rating-config/zone-sets", json={"name": "Canada Std", "selected_zones": ["Z1", "Z2"]})
    assert r.status_code == 201, r.text
    zs = r.json()
    assert zs["zone_count"] == 2
    assert zs["version"] == 1

    r = client.put(
        f"/rating-config/zone-sets/{zs['id']}/zone-maps",
        json={
            "rows": [
                {"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z1"},
                {"origin_region_id": tree.on.id, "dest_region_id": tree.qc.id, "zone_code": "Z2"},
            ]
        },
    )
    assert r.status_code == 200, r.text
    assert r.json()["replaced"] == 2

    r = client.get(f"/rating-config/zone-sets/{zs['id']}/zone-maps")
    assert r.status_code == 200, r.text
    assert [m["zone_code"] for m in r.json()["data"]] == ["Z1", "Z2"]

    r = client.get("/rating-config/zone-sets")
    assert r.json()["data"][0]["version"] == 2

    r = client.delete(f"/rating-config/zone-sets/{zs['id']}")
    assert r.status_code == 204, r.text

    r = client.get(f"/rating-config/zone-sets/{zs['id']}/zone-maps")
    assert r.status_code == 404, r.text


def test_zone_maps_bad_batch_keeps_previous(client: TestClient, db) -> None:
    tree = make_region_tree(db)
    zs = make_zone_set(db)
    url = f"/rating-config/zone-sets/{zs.id}/zone-maps"

    ok = {"origin_region_id": tree.m5v.id, "dest_region_id": tree.k1a.id, "zone_code": "Z1"}
    assert client.put(url, json={"rows": [ok]}).status_code == 200

    r = client.put(
        url,
        json={"rows": [dict(ok, zone_code="Z4"), {"origin_region_id": 9999, "dest_region_id": 1, "zone_code": "Z2"}]},
    )
    assert r.status_code == 404, r.text

    r = client.get(url)
    assert [m["zone_code"] for m in r.json()["data"]] == ["Z1"]


def test_zone_set_delete_refused_while_bound(client: TestClient, db) -> None:
    zs = make_zone_set(db)
    bind_zone_set(db, zs)

    r = client.delete(f"/rating-config/zone-sets/{zs.id}")
    assert r.status_code == 409, r.text


def test_zone_set_requires_zones(client: TestClient) -> None:
    r = client.post("/rating-config/zone-sets", json={"name": "Empty", "selected_zones": []})
    assert r.status_code == 422, r.text


# ---------------------------------------------------------------------------
# break sets / breaks
# ---------------------------------------------------------------------------
def test_break_set_and_breaks(client: TestClient) -> None:
    r = client.post(
        "/rating-config/break-sets",
        json={"name": "LTL-NA-Std v1", "metric": "weight", "unit": "lbs", "method": "extend"},
    )
    assert r.status_code == 201, r.text
    bs = r.json()
    assert bs["meta"] == {"rounding_increment": 1, "rounding_direction": "up"}

    r = client.post(
        f"/rating-config/break-sets/{bs['id']}/breaks",
        json={"breaks": [{"min_metric": 0, "max_metric": 999}, {"min_metric": 1000}]},
    )
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["created"] == 2
    assert [b["seq"] for b in data["data"]] == [1, 2]
    assert data["data"][1]["max_metric"] is None


def test_breaks_invalid_range_rejected(client: TestClient) -> None:
    r = client.post(
        "/rating-config/break-sets",
        json={"name": "skid v1", "metric": "skid", "unit": "skid", "method": "step"},
    )
    bs_id = r.json()["id"]

    r = client.post(
        f"/rating-config/break-sets/{bs_id}/breaks",
        json={"breaks": [{"min_metric": 10, "max_metric": 5}]},
    )
    assert r.status_code == 422, r.text
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_breaks_unknown_break_set(client: TestClient) -> None:
    r = client.post("/rating-config/break-sets/9999/breaks", json={"breaks": [{"min_metric": 0}]})
    assert r.status_code == 404, r.text


def test_break_set_invalid_metric(client: TestClient) -> None:
    r = client.post(
        "/rating-config/break-sets",
        json={"name": "bad", "metric": "volume", "unit": "cu", "method": "step"},
    )
    assert r.status_code == 422, r.text


def test_break_sets_list_and_filter(client: TestClient) -> None:
    for name, metric, unit in (("weight v1", "weight", "lbs"), ("skid v1", "skid", "skid"), ("LF v1", "lf", "ft")):
        r = client.post(
            "/rating-config/break-sets",
            json={"name": name, "metric": metric, "unit": unit, "method": "step"},
        )
        assert r.status_code == 201, r.text

    r = client.get("/rating-config/break-sets")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["ok"] is True
    assert [x["name"] for x in data["data"]] == ["LF v1", "skid v1", "weight v1"]

    r = client.get("/rating-config/break-sets", params={"metric": "skid"})
    assert r.status_code == 200, r.text
    assert [x["metric"] for x in r.json()["data"]] == ["skid"]

    r = client.get("/rating-config/break-sets", params={"metric": "volume"})
    assert r.status_code == 422, r.text
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_breaks_list_ordered_by_seq(client: TestClient) -> None:
    r = client.post(
        "/rating-config/break-sets",
        json={"name": "weight v1", "metric": "weight", "unit": "lbs", "method": "step"},
    )
    bs_id = r.json()["id"]
    client.post(f"/rating-config/break-sets/{bs_id}/breaks", json={"breaks": [{"min_metric": 0, "max_metric": 999}]})
    client.post(f"/rating-config/break-sets/{bs_id}/breaks", json={"breaks": [{"min_metric": 1000}]})

    r = client.get(f"/rating-config/break-sets/{bs_id}/breaks")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["break_set_id"] == bs_id
    assert [(b["seq"], b["min_metric"], b["max_metric"]) for b in data["data"]] == [(1, 0, 999), (2, 1000, None)]


def test_breaks_list_unknown_break_set(client: TestClient) -> None:
    r = client.get("/rating-config/break-sets/9999/breaks")
    assert r.status_code == 404, r.text
    assert r.json()["error"]["code"] == "NOT_FOUND"
