# backend/tests/test_routes_api.py
import httpx
import pytest
import respx

from conftest import MAPBOX, directions_body, geocode_feature


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "success"
    assert r.headers["X-Correlation-ID"]


def test_correlation_id_is_echoed(client):
    r = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert r.headers["X-Correlation-ID"] == "abc-123"


@pytest.mark.parametrize("params", [{"origin": "Mumbai"}, {"destination": "Pune"}, {"origin": " ", "destination": "Pune"}])
def test_routes_require_both_ends(client, params):
    r = client.get("/routes", params=params)
    assert r.status_code == 400
    assert r.json() == {"status": "error", "message": "origin and destination are required"}


def test_routes_rejects_unknown_mode(client):
    r = client.get("/routes", params={"origin": "Mumbai", "destination": "Pune", "mode": "teleport"})
    assert r.status_code == 422


def test_routes_live_plan(client):
    with respx.mock(assert_all_called=False) as router:
        router.get(url__startswith=f"{MAPBOX}/geocoding/v5/mapbox.places/Mumbai.json").mock(
            return_value=httpx.Response(200, json=geocode_feature("Mumbai", 72.8777, 19.076))
        )
        router.get(url__startswith=f"{MAPBOX}/geocoding/v5/mapbox.places/Pune.json").mock(
            return_value=httpx.Response(200, json=geocode_feature("Pune", 73.8567, 18.5204))
        )
        router.get(url__startswith=f"{MAPBOX}/directions/v5/mapbox/driving/").mock(
            return_value=httpx.Response(200, json=directions_body(150000, 10800))
        )
        router.get(url__startswith=f"{MAPBOX}/directions/v5/mapbox/driving-traffic/").mock(
            return_value=httpx.Response(200, json=directions_body(140000, 11400))
        )
        r = client.get(
            "/routes",
            params={"origin": "Mumbai", "destination": "Pune", "mode": "driving", "vehicle": "petrol_small"},
        )

    assert r.status_code == 200, r.text
    data = r.json()

    assert data["provenance"] == "remote"
    assert data["degraded"] is True  # remote emission API disabled in tests
    assert data["origin"]["name"] == "Mumbai"
    routes = data["routes"]
    assert [x["distance"] for x in routes] == [140000, 150000, 150000]
    assert all(x["vehicle_type"] == "petrol_small" for x in routes)
    assert routes[0]["emission"] == pytest.approx(140 * 0.120 * 0.9 * 1.1)
    assert routes[0]["emission_savings"] == pytest.approx(10 * 0.120 * 0.9 * 1.1)
    assert routes[-1]["emission_savings"] == 0

    cmp = data["comparison"]
    assert cmp["most_eco_friendly"]["distance"] == 140000
    assert cmp["least_eco_friendly"]["distance"] == 150000
    assert cmp["savings_percent"] == pytest.approx(6.7)


def test_routes_fall_back_to_demo_set(client):
    with respx.mock(assert_all_called=False) as router:
        router.get(url__startswith=f"{MAPBOX}/geocoding/").mock(
            return_value=httpx.Response(200, json={"features": []})
        )
        r = client.get(
            "/routes",
            params={"origin": "Atlantis", "destination": "El Dorado", "mode": "walking", "sort": "emission"},
        )

    assert r.status_code == 200, r.text
    data = r.json()
    assert data["provenance"] == "mock"
    assert data["degraded"] is True
    assert len(data["routes"]) == 3
    emissions = [x["emission"] for x in data["routes"]]
    assert emissions == sorted(emissions)
    assert all(x["mode"] == "walking" for x in data["routes"])
    assert data["routes"][0]["emission_savings_percent"] > 0
    assert data["comparison"] is not None
