import pytest
from httpx import ASGITransport, AsyncClient

from pybracket.api import create_app


@pytest.fixture
async def client():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _sample_roster() -> str:
    return """player_id,name,historical_average,show_odds
1,Mario,42.0,yes
2,Luigi,38.5,yes
3,Peach,40.0,yes
4,Yoshi,35.0,no
5,Toad,,yes
6,Bowser,45.5,yes
"""


def _schedule_request(**overrides) -> dict:
    payload = {
        "names": ["Mario", "Luigi", "Peach", "Yoshi", "Toad", "Bowser"],
        "group_size": 3,
        "round_count": 2,
        "match_minutes": 8,
        "break_minutes": 10,
        "start": "2024-05-01T19:00:00",
        "seed": 5,
    }
    payload.update(overrides)
    return payload


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_roster_preview(client: AsyncClient):
    files = {"roster": ("roster.csv", _sample_roster(), "text/csv")}
    resp = await client.post("/roster/preview", files=files)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_players"] == 6
    assert body["players_with_odds"] == 4
    assert body["players"][0]["name"] == "Mario"


@pytest.mark.anyio
async def test_roster_preview_rejects_bad_rows(client: AsyncClient):
    files = {"roster": ("roster.csv", "player_id,name\nx,Mario\n", "text/csv")}
    resp = await client.post("/roster/preview", files=files)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_create_schedule_and_fetch(client: AsyncClient):
    resp = await client.post("/schedules", json=_schedule_request())
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["rounds"]) == 2
    for round_payload in body["rounds"]:
        ids = [p["player_id"] for m in round_payload["matches"] for p in m["players"]]
        assert sorted(ids) == list(range(6))
    assert body["summary"]["pairs"] == 15
    assert body["summary"]["total"] == 12

    run_id = body["run_id"]
    fetched = await client.get(f"/runs/{run_id}")
    assert fetched.status_code == 200
    assert fetched.json()["rounds"] == body["rounds"]

    listing = await client.get("/runs")
    assert any(item["run_id"] == run_id for item in listing.json())

    text = await client.get(f"/runs/{run_id}/text")
    assert text.text.startswith("Round [1]")

    exported = await client.get(f"/runs/{run_id}/export.csv")
    assert exported.status_code == 200
    assert exported.text.splitlines()[0].startswith("round,match,time")


@pytest.mark.anyio
async def test_schedule_with_players_gets_odds(client: AsyncClient):
    players = [
        {"player_id": 1, "name": "Ann", "historical_average": 30.0},
        {"player_id": 2, "name": "Bob", "historical_average": 10.0},
    ]
    resp = await client.post(
        "/schedules",
        json=_schedule_request(names=None, players=players, group_size=2, round_count=1),
    )
    assert resp.status_code == 200
    odds = resp.json()["rounds"][0]["matches"][0]["fractional_odds"]
    assert odds["2"] == pytest.approx(3.0)


@pytest.mark.anyio
async def test_empty_roster_is_bad_request(client: AsyncClient):
    resp = await client.post("/schedules", json=_schedule_request(names=[]))
    assert resp.status_code == 400
    assert "empty" in resp.json()["detail"]


@pytest.mark.anyio
async def test_unknown_run_returns_404(client: AsyncClient):
    resp = await client.get("/runs/does-not-exist")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_schedule_honours_disabled_odds(client: AsyncClient):
    players = [
        {"player_id": 1, "name": "Ann", "historical_average": 30.0},
        {"player_id": 2, "name": "Bob", "historical_average": 10.0},
    ]
    resp = await client.post(
        "/schedules",
        json=_schedule_request(names=None, players=players, group_size=2, round_count=1, odds_enabled=False),
    )
    assert resp.status_code == 200
    assert resp.json()["rounds"][0]["matches"][0]["fractional_odds"] == {}


@pytest.mark.anyio
async def test_schedule_without_start_uses_current_time(client: AsyncClient):
    resp = await client.post("/schedules", json=_schedule_request(start=None))
    assert resp.status_code == 200
    assert len(resp.json()["rounds"]) == 2
