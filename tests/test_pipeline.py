"""Pipeline de peticiones: URL, headers, body, `_meta` y normalización de errores."""

from __future__ import annotations

import asyncio

import httpx
import pytest
import structlog

from conftest import RATE_LIMIT_HEADERS, json_response, request_json
from webflow_client.adapters.http_client import attach_meta, build_async_client, build_meta
from webflow_client.core.domain.entities import MetaList
from webflow_client.core.domain.errors import (
    UNKNOWN_ERROR_MESSAGE,
    RateLimitError,
    RemoteAPIError,
    ResponseDecodeError,
)
from webflow_client.core.domain.models import ClientOptions, RequestDescriptor, parse_int_header


def _ok(request: httpx.Request) -> httpx.Response:
    return json_response({"ok": True}, headers=RATE_LIMIT_HEADERS)


@pytest.mark.parametrize("query", [None, {}, {"offset": None}])
def test_empty_query_never_appends_question_mark(query):
    request = RequestDescriptor(method="GET", path="/sites", query=query)

    assert request.query_string() == ""
    assert request.url("https://api.webflow.com") == "https://api.webflow.com/sites"


def test_non_empty_query_is_encoded_after_single_question_mark():
    request = RequestDescriptor(method="GET", path="/collections/c1/items", query={"limit": 10, "live": True})

    url = request.url("https://api.webflow.com")
    assert url == "https://api.webflow.com/collections/c1/items?limit=10&live=true"
    assert url.count("?") == 1


def test_get_sends_static_headers_and_no_body(make_api):
    api, requests = make_api(_ok, version="2.0.0")

    asyncio.run(api.get("/info"))

    (request,) = requests
    assert request.method == "GET"
    assert str(request.url) == "https://api.webflow.com/info"
    assert request.headers["accept"] == "application/json"
    assert request.headers["authorization"] == "Bearer abc"
    assert request.headers["accept-version"] == "2.0.0"
    assert request.headers["content-type"] == "application/json"
    assert request.content == b""


def test_empty_query_mapping_keeps_url_clean_on_the_wire(make_api):
    api, requests = make_api(_ok)

    asyncio.run(api.get("/sites", {}))

    assert "?" not in str(requests[0].url)


def test_custom_endpoint_is_prefixed_verbatim(make_api):
    api, requests = make_api(_ok, endpoint="http://localhost:8080/v1")

    asyncio.run(api.delete("/sites/s1/webhooks/w1", {"dry": "yes"}))

    assert requests[0].method == "DELETE"
    assert str(requests[0].url) == "http://localhost:8080/v1/sites/s1/webhooks/w1?dry=yes"
    assert requests[0].content == b""


def test_post_serializes_body_as_json(make_api):
    api, requests = make_api(_ok)

    asyncio.run(api.post("/sites/s1/publish", {"domains": ["example.com"]}))

    assert requests[0].method == "POST"
    assert request_json(requests[0]) == {"domains": ["example.com"]}


def test_put_and_patch_use_their_verbs(make_api):
    api, requests = make_api(_ok)

    asyncio.run(api.put("/x", {"a": 1}))
    asyncio.run(api.patch("/x", {"a": 2}))

    assert [r.method for r in requests] == ["PUT", "PATCH"]
    assert [request_json(r) for r in requests] == [{"a": 1}, {"a": 2}]


def test_success_object_gets_rate_limit_meta(make_api):
    api, _ = make_api(_ok)

    body = asyncio.run(api.get("/info"))

    assert body["ok"] is True
    assert body["_meta"] == {"rateLimit": {"limit": 60, "remaining": 59}}


def test_success_array_is_wrapped_with_meta(make_api):
    api, _ = make_api(lambda request: json_response([{"_id": "a"}, {"_id": "b"}], headers=RATE_LIMIT_HEADERS))

    body = asyncio.run(api.get("/sites"))

    assert isinstance(body, MetaList)
    assert list(body) == [{"_id": "a"}, {"_id": "b"}]
    assert body.meta == {"rateLimit": {"limit": 60, "remaining": 59}}
    assert body._meta is body.meta


def test_missing_rate_limit_headers_yield_none_values(make_api):
    api, _ = make_api(lambda request: json_response({"ok": True}))

    body = asyncio.run(api.get("/info"))

    assert body["_meta"] == {"rateLimit": {"limit": None, "remaining": None}}


def test_build_meta_without_headers_is_empty_mapping():
    assert build_meta(None) == {}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("60", 60), (" 59", 59), ("12abc", 12), ("abc", None), ("", None), (None, None)],
)
def test_parse_int_header_behaves_like_parse_int(raw, expected):
    assert parse_int_header(raw) == expected


def test_attach_meta_leaves_scalars_untouched():
    assert attach_meta("pong", {"rateLimit": {}}) == "pong"


def test_error_status_uses_err_field_and_code(make_api):
    api, _ = make_api(
        lambda request: json_response({"err": "Not Found", "code": 404}, status_code=404, headers=RATE_LIMIT_HEADERS)
    )

    with pytest.raises(RemoteAPIError) as excinfo:
        asyncio.run(api.get("/sites/missing"))

    error = excinfo.value
    assert str(error) == "Not Found"
    assert error.message == "Not Found"
    assert error.code == 404
    assert error.status_code == 404
    assert error.problems is None
    assert error.meta == {"rateLimit": {"limit": 60, "remaining": 59}}


def test_error_keeps_problems_and_msg_verbatim(make_api):
    problems = ["Field 'name': Field is required", "Field 'slug': Field is required"]
    payload = {"err": "ValidationError", "code": "validation_error", "msg": "Validation Failure", "problems": problems}
    api, _ = make_api(lambda request: json_response(payload, status_code=400))

    with pytest.raises(RemoteAPIError) as excinfo:
        asyncio.run(api.post("/collections/c1/items", {"fields": {}}))

    assert excinfo.value.msg == "Validation Failure"
    assert excinfo.value.code == "validation_error"
    assert excinfo.value.problems == problems


def test_error_without_err_uses_generic_message_and_drops_empty_problems(make_api):
    api, _ = make_api(lambda request: json_response({"code": 500, "problems": []}, status_code=500))

    with pytest.raises(RemoteAPIError) as excinfo:
        asyncio.run(api.get("/info"))

    assert excinfo.value.message == UNKNOWN_ERROR_MESSAGE == "Unknown error occured"
    assert excinfo.value.problems is None


def test_rate_limited_status_is_a_remote_error_subclass(make_api):
    headers = {"x-ratelimit-limit": "60", "x-ratelimit-remaining": "0"}
    api, requests = make_api(lambda request: json_response({"err": "Rate limit hit"}, status_code=429, headers=headers))

    with pytest.raises(RateLimitError) as excinfo:
        asyncio.run(api.get("/sites"))

    assert isinstance(excinfo.value, RemoteAPIError)
    assert excinfo.value.meta["rateLimit"]["remaining"] == 0
    assert len(requests) == 1


@pytest.mark.parametrize("status_code", [200, 502])
def test_non_json_body_is_a_decode_error(make_api, status_code):
    api, _ = make_api(lambda request: httpx.Response(status_code, content=b"<html>oops</html>"))

    with pytest.raises(ResponseDecodeError) as excinfo:
        asyncio.run(api.get("/info"))

    assert not isinstance(excinfo.value, RemoteAPIError)
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.meta == {}


def test_transport_errors_propagate_unchanged(make_api):
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api, _ = make_api(_boom)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(api.get("/info"))


def test_async_client_carries_only_the_static_headers():
    options = ClientOptions(token="abc", version="1.0.0")

    client = build_async_client(options)
    try:
        for name, value in options.headers().items():
            assert client.headers[name] == value
        assert client.timeout.read == options.timeout_seconds
    finally:
        asyncio.run(client.aclose())

    with pytest.raises(TypeError):
        build_async_client(options, extra_headers={"x-extra": "1"})  # type: ignore[call-arg]


def test_library_requests_never_configure_structlog(make_api):
    structlog.reset_defaults()
    api, _ = make_api(lambda request: json_response({"err": "Nope"}, status_code=400))

    try:
        asyncio.run(api.get("/info"))
        with pytest.raises(RemoteAPIError):
            asyncio.run(api.get("/sites/missing"))

        assert not structlog.is_configured()
    finally:
        structlog.reset_defaults()
