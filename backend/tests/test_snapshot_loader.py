"""
Snapshot loader.

Responses are recorded from the real API with the TestClient, then replayed
to the loader through httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from lems.live.snapshot import (
    FieldScheduleSnapshot,
    Redirect,
    SnapshotLoadError,
    load_field_schedule_snapshot,
    load_page_props,
)


def _replay(client, token=None):
    """MockTransport handler that forwards each request to the TestClient."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        headers = {"X-Auth-Token": token} if token else {}
        upstream = client.get(str(request.url.raw_path, "ascii"), headers=headers)
        return httpx.Response(upstream.status_code, content=upstream.content)

    return handler, seen


def _load(loader, handler):
    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test") as http:
            return await loader(http)

    return asyncio.run(_run())


def test_loads_full_snapshot(client, seeded_event, make_user):
    event = seeded_event["event"]
    user = make_user("referee", event_id=event.id)
    handler, seen = _replay(client, user.auth_token)

    result = _load(load_page_props, handler)

    assert isinstance(result, FieldScheduleSnapshot)
    assert result.user.id == user.id
    assert result.event.id == event.id
    assert [e.name for e in result.event.schedule] == ["Opening ceremony", "Judges briefing", "Referee lunch"]
    assert [t.number for t in result.teams] == [101, 202, 303]
    assert [t.name for t in result.tables] == ["Red", "Blue"]
    assert len(result.matches) == 6
    assert seen[0] == "/api/me"
    assert sorted(seen[1:]) == sorted(
        [
            f"/api/events/{event.id}",
            f"/api/events/{event.id}/teams",
            f"/api/events/{event.id}/tables",
            f"/api/events/{event.id}/matches",
        ]
    )


def test_missing_session_redirects_to_login(client, seeded_event):
    handler, _ = _replay(client)
    assert _load(load_page_props, handler) == Redirect(destination="/login", permanent=False)


def test_bad_token_redirects_to_login(client, seeded_event):
    handler, _ = _replay(client, "nope")
    assert isinstance(_load(load_page_props, handler), Redirect)


def test_user_without_event_redirects(client, seeded_event, make_user):
    user = make_user("referee", event_id=None, token="floating")
    handler, seen = _replay(client, user.auth_token)
    assert isinstance(_load(load_page_props, handler), Redirect)
    assert seen == ["/api/me"]


def test_missing_event_redirects(client, make_user):
    user = make_user("referee", event_id=404, token="ghost-event")
    handler, _ = _replay(client, user.auth_token)
    assert isinstance(_load(load_page_props, handler), Redirect)


def test_one_failed_read_fails_whole_load(client, seeded_event, make_user):
    user = make_user("referee", event_id=seeded_event["event"].id)
    forward, _ = _replay(client, user.auth_token)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/tables"):
            return httpx.Response(500)
        return forward(request)

    assert isinstance(_load(load_page_props, handler), Redirect)


def test_transport_error_raises_load_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SnapshotLoadError):
        _load(load_field_schedule_snapshot, handler)


def test_malformed_body_raises_load_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>login</html>")

    with pytest.raises(SnapshotLoadError):
        _load(load_field_schedule_snapshot, handler)


def test_failed_read_cancels_reads_in_flight(client, seeded_event, make_user):
    event = seeded_event["event"]
    user = make_user("referee", event_id=event.id)
    forward, _ = _replay(client, user.auth_token)
    started, cancelled = [], []

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/tables"):
            return httpx.Response(500)
        if request.url.path.endswith("/matches"):
            started.append(request.url.path)
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                cancelled.append(request.url.path)
                raise
        return forward(request)

    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test") as http:
            result = await load_page_props(http)
            # Collected before returning, not left to the event loop shutdown
            return result, list(cancelled)

    result, cancelled_on_return = asyncio.run(_run())

    assert isinstance(result, Redirect)
    assert started == [f"/api/events/{event.id}/matches"]
    assert cancelled_on_return == started
