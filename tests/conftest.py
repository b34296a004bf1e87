"""Fixtures compartidas: cliente con transporte simulado (sin red)."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from webflow_client import Webflow

Handler = Callable[[httpx.Request], httpx.Response]

RATE_LIMIT_HEADERS = {"x-ratelimit-limit": "60", "x-ratelimit-remaining": "59"}


def json_response(
    payload: Any,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json", **(headers or {})},
    )


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def make_api() -> Callable[..., tuple[Webflow, list[httpx.Request]]]:
    """Devuelve `(api, requests)`; `requests` acumula cada petición enviada."""

    def _make(handler: Handler, **kwargs: Any) -> tuple[Webflow, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        kwargs.setdefault("token", "abc")
        api = Webflow(transport=httpx.MockTransport(_record), **kwargs)
        return api, requests

    return _make


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Sin `.env` del proyecto ni variables WEBFLOW_* del entorno real."""

    monkeypatch.chdir(tmp_path)
    for key in ("WEBFLOW_TOKEN", "WEBFLOW_ENDPOINT", "WEBFLOW_API_VERSION", "WEBFLOW_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)
