import pytest
from httpx import AsyncClient, ASGITransport


async def get(app, path, **params):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.get(path, params=params)


@pytest.mark.asyncio
async def test_geocoding_returns_candidates(test_app, provider):
    provider.respond(
        "/direct",
        json=[
            {"name": "Casablanca", "country": "MA", "lat": 33.59, "lon": -7.62},
            {"name": "Casablanca", "country": "CL", "state": "Valparaíso", "lat": -33.32, "lon": -71.41},
        ],
    )

    r = await get(test_app, "/geocoding", q="Casa")

    assert r.status_code == 200, r.text
    data = r.json()
    assert [c["country"] for c in data] == ["MA", "CL"]
    assert data[1]["state"] == "Valparaíso"
    assert provider.requests[0].url.params["q"] == "Casa"


@pytest.mark.asyncio
async def test_geocoding_requires_query(test_app, provider):
    r = await get(test_app, "/geocoding")

    assert r.status_code == 400
    assert r.json() == {"error": "Query parameter 'q' is required"}
    assert provider.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, body",
    [(500, {"cod": 500}), (200, {"unexpected": "object"}), (200, ["Casablanca"])],
)
async def test_geocoding_upstream_failure_is_500(test_app, provider, status, body):
    provider.respond("/direct", status=status, json=body)

    r = await get(test_app, "/geocoding", q="Casa")

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch location suggestions"}


@pytest.mark.asyncio
async def test_geocoding_returns_candidates_unchanged(test_app, provider):
    candidates = [
        {"name": "Casablanca", "country": "MA", "lat": 33.59, "lon": -7.62},
        {"name": "Casa", "local_names": {"es": "Casa"}},
    ]
    provider.respond("/direct", json=candidates)

    r = await get(test_app, "/geocoding", q="Casa")

    assert r.status_code == 200, r.text
    assert r.json() == candidates
    assert "state" not in r.json()[0]
