from __future__ import annotations

import json

import httpx

from film_essays_site.contact import ContactClient


def test_submit_posts_json_to_relay() -> None:
    seen: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"ok": True})

    client = ContactClient(endpoint="https://relay.example/f/abc", transport=httpx.MockTransport(handler))
    result = client.submit(name=" Ema ", email="ema@example.sk", message="Pekný článok.")
    assert result.ok
    assert result.status_code == 200
    assert seen == [{"name": "Ema", "email": "ema@example.sk", "message": "Pekný článok."}]


def test_submit_rejects_invalid_input_without_sending() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not send")

    client = ContactClient(endpoint="https://relay.example/f/abc", transport=httpx.MockTransport(handler))
    result = client.submit(name="Ema", email="not-an-email", message="  ")
    assert not result.ok
    assert result.status_code is None
    assert "email" in (result.error or "")
    assert "message" in (result.error or "")


def test_submit_reports_relay_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422)

    client = ContactClient(endpoint="https://relay.example/f/abc", transport=httpx.MockTransport(handler))
    result = client.submit(name="Ema", email="ema@example.sk", message="Ahoj")
    assert not result.ok
    assert result.status_code == 422


def test_submit_reports_unreachable_relay() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    client = ContactClient(endpoint="https://relay.example/f/abc", transport=httpx.MockTransport(handler))
    result = client.submit(name="Ema", email="ema@example.sk", message="Ahoj")
    assert not result.ok
    assert result.error == "down"
