# tests/unit/server/test_http_app.py
import anyio
import httpx
import pytest

from batepapo.server.runtime.server import BatePapo
from batepapo.server.runtime.store import InMemoryStore
from batepapo.server.runtime.store.stores.sqlite_store import SqliteStore


@pytest.fixture
def server(clock, wall_clock):
    return BatePapo(
        InMemoryStore(),
        stale_threshold_ms=10_000,
        eviction_interval_ms=15_000,
        clock=clock,
        wall_clock=wall_clock,
    )


@pytest.fixture
async def http(server):
    transport = httpx.ASGITransport(app=server.http_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _join(http, name):
    return await http.post("/participants", json={"name": name})


@pytest.mark.anyio
async def test_register_then_broadcast_is_visible_to_everyone(http):
    assert (await _join(http, "Ana")).status_code == 201
    again = await _join(http, "Ana")
    assert again.status_code == 409
    assert again.json() == {"message": "Participant already exists"}

    posted = await http.post(
        "/messages",
        json={"to": "Todos", "text": "hi", "type": "message"},
        headers={"user": "Ana"},
    )
    assert posted.status_code == 201

    listed = await http.get("/messages", headers={"user": "Bob"})
    assert listed.status_code == 200
    assert listed.json() == [
        {"from": "Ana", "to": "Todos", "text": "hi", "type": "message", "time": "12:34:56"},
        {"from": "Ana", "to": "Todos", "text": "joined", "type": "status", "time": "12:34:56"},
    ]


@pytest.mark.anyio
async def test_private_message_visibility(http):
    await _join(http, "Caio")
    posted = await http.post(
        "/messages",
        json={"to": "Ana", "text": "secret", "type": "private_message"},
        headers={"user": "Caio"},
    )
    assert posted.status_code == 201

    as_bob = (await http.get("/messages", headers={"user": "Bob"})).json()
    as_ana = (await http.get("/messages", headers={"user": "Ana"})).json()
    anonymous = (await http.get("/messages")).json()

    assert "secret" not in [m["text"] for m in as_bob]
    assert "secret" not in [m["text"] for m in anonymous]
    assert "secret" in [m["text"] for m in as_ana]


@pytest.mark.anyio
async def test_silent_participant_is_evicted_on_next_tick(http, server, clock):
    await _join(http, "Dara")
    await _join(http, "Ana")

    clock.advance(8_000)
    assert (await http.post("/status", headers={"user": "Ana"})).status_code == 200
    clock.advance(7_000)
    await server.scheduler.tick()

    participants = (await http.get("/participants")).json()
    assert [p["name"] for p in participants] == ["Ana"]
    assert participants[0]["lastSeenAt"] == clock.now - 7_000

    messages = (await http.get("/messages", headers={"user": "Ana"})).json()
    assert {"from": "Dara", "to": "Todos", "text": "left", "type": "status", "time": "12:34:56"} in messages

    # evicted participants can no longer ping or post
    assert (await http.post("/status", headers={"user": "Dara"})).status_code == 404


@pytest.mark.anyio
async def test_invalid_participant_lists_every_violation(http):
    response = await http.post("/participants", json={"nome": ""})
    assert response.status_code == 422
    assert response.json() == ['"name" is required', '"nome" is not allowed']

    reserved = await _join(http, "Todos")
    assert reserved.status_code == 422

    garbage = await http.post("/participants", content=b"{not json", headers={"content-type": "application/json"})
    assert garbage.status_code == 422
    assert garbage.json() == ['"value" must be of type object']

    assert (await http.get("/participants")).json() == []


@pytest.mark.anyio
async def test_message_post_errors(http):
    await _join(http, "Ana")

    invalid = await http.post("/messages", json={"to": "Todos", "text": "", "type": "status"}, headers={"user": "Ana"})
    assert invalid.status_code == 422
    assert invalid.json() == [
        '"text" is not allowed to be empty',
        '"type" must be one of [message, private_message]',
    ]

    unknown = await http.post("/messages", json={"to": "Todos", "text": "hi", "type": "message"}, headers={"user": "Zed"})
    assert unknown.status_code == 422
    assert unknown.json() == {"message": "Participant not found"}

    anonymous = await http.post("/messages", json={"to": "Todos", "text": "hi", "type": "message"})
    assert anonymous.status_code == 422

    blank = await http.post("/messages", json={"to": "Todos", "text": "hi", "type": "message"}, headers={"user": ""})
    assert blank.status_code == 422
    assert [m["text"] for m in (await http.get("/messages")).json()] == ["joined"]


@pytest.mark.anyio
async def test_status_ping_for_unknown_participant(http):
    assert (await http.post("/status", headers={"user": "ghost"})).status_code == 404
    assert (await http.post("/status")).status_code == 404


@pytest.mark.anyio
async def test_messages_limit(http):
    await _join(http, "Ana")
    for text in ["one", "two", "three"]:
        await http.post("/messages", json={"to": "Todos", "text": text, "type": "message"}, headers={"user": "Ana"})

    limited = await http.get("/messages", params={"limit": "2"}, headers={"user": "Ana"})
    assert [m["text"] for m in limited.json()] == ["three", "two"]

    full = await http.get("/messages", headers={"user": "Ana"})
    assert [m["text"] for m in full.json()] == ["three", "two", "one", "joined"]

    bad = await http.get("/messages", params={"limit": "0"}, headers={"user": "Ana"})
    assert bad.status_code == 422
    assert bad.json() == ['"limit" must be a positive integer']


@pytest.mark.anyio
async def test_huge_limit_on_sqlite_store_returns_everything(tmp_path, clock, wall_clock):
    server = BatePapo(SqliteStore(tmp_path / "chat.db"), clock=clock, wall_clock=wall_clock)
    transport = httpx.ASGITransport(app=server.http_app())
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            await _join(http, "Ana")
            await http.post("/messages", json={"to": "Todos", "text": "oi", "type": "message"}, headers={"user": "Ana"})

            response = await http.get("/messages", params={"limit": str(2**63)}, headers={"user": "Ana"})
    finally:
        await server.store.close()

    assert response.status_code == 200
    assert [m["text"] for m in response.json()] == ["oi", "joined"]


class UnavailableStore(InMemoryStore):
    async def list_participants(self):
        raise ConnectionError("store is down")

    async def load_messages(self, *, visible_to, limit=None):
        raise TimeoutError("query timed out")


@pytest.mark.anyio
async def test_store_failures_map_to_500(clock, wall_clock, caplog):
    server = BatePapo(UnavailableStore(), clock=clock, wall_clock=wall_clock)
    transport = httpx.ASGITransport(app=server.http_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        participants = await http.get("/participants")
        messages = await http.get("/messages", headers={"user": "Ana"})

    assert participants.status_code == 500
    assert participants.json() == {"message": "Store failure during list participants"}
    assert messages.status_code == 500
    assert "Store call failed: load messages" in caplog.text


@pytest.mark.anyio
async def test_lifespan_runs_the_eviction_scheduler(clock, wall_clock):
    server = BatePapo(
        InMemoryStore(),
        stale_threshold_ms=10_000,
        eviction_interval_ms=10,
        clock=clock,
        wall_clock=wall_clock,
    )
    app = server.http_app()
    await server.registry.register("Dara")
    clock.advance(20_000)

    async with app.router.lifespan_context(app):
        assert server.scheduler.running
        with anyio.fail_after(5):
            while await server.registry.exists("Dara"):
                await anyio.sleep(0.01)

    assert not server.scheduler.running
