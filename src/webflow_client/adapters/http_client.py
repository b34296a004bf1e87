"""Pipeline de peticiones sobre httpx.

Por qué un wrapper:
- Estandariza headers de auth, timeouts, construcción de URL y el manejo
  de la respuesta (éxito con `_meta`, error normalizado) para todos los
  endpoints.
- Facilita testeo: se inyecta un `httpx.MockTransport` y no hay red.

Cada llamada abre y cierra su propio `httpx.AsyncClient`: no hay estado
mutable compartido entre peticiones concurrentes, solo `ClientOptions`.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx
import structlog

from webflow_client.core.domain.entities import MetaList
from webflow_client.core.domain.errors import ResponseDecodeError, build_remote_error
from webflow_client.core.domain.models import ClientOptions, HttpMethod, RequestDescriptor, ResponseMeta

logger = structlog.get_logger(__name__)


def build_async_client(
    options: ClientOptions,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los headers estáticos del cliente.

    Por qué un builder:
    - Centraliza timeout/headers para que todos los endpoints se comporten igual.
    - Permite inyectar el transporte en tests.
    """

    return httpx.AsyncClient(
        timeout=httpx.Timeout(options.timeout_seconds),
        follow_redirects=True,
        headers=options.headers(),
        transport=transport,
    )


def build_meta(response: httpx.Response | None) -> dict[str, Any]:
    """Metadatos de rate-limit (best-effort).

    Si la respuesta no expone cabeceras devolvemos `{}` en lugar de fallar.
    """

    headers = getattr(response, "headers", None)
    if headers is None:
        return {}
    return ResponseMeta.from_headers(headers).as_envelope_meta()


def attach_meta(body: Any, meta: dict[str, Any]) -> Any:
    """Adjunta `_meta` al body decodificado.

    - objeto JSON: se agrega la clave `_meta` al mismo dict.
    - array JSON: se envuelve en `MetaList` (misma secuencia, `_meta` como atributo).
    - escalares: se devuelven tal cual.
    """

    if isinstance(body, dict):
        body["_meta"] = meta
        return body
    if isinstance(body, list):
        return MetaList(body, meta=meta)
    return body


def handle_response(response: httpx.Response, *, method: str = "", path: str = "") -> Any:
    """Interpreta la respuesta cruda: payload con `_meta` o excepción normalizada."""

    try:
        body = response.json()
    except ValueError as exc:
        logger.warning("response_decode_failed", method=method, path=path, error=str(exc))
        raise ResponseDecodeError(f"Could not decode response body as JSON: {exc}") from exc

    meta = build_meta(response)
    rate_limit = meta.get("rateLimit") or {}

    if response.status_code >= 400:
        error = build_remote_error(response.status_code, body, meta)
        logger.warning(
            "remote_api_error",
            method=method,
            path=path,
            status=response.status_code,
            code=error.code,
            message=error.message,
            rate_limit_remaining=rate_limit.get("remaining"),
        )
        raise error

    logger.debug(
        "request_completed",
        method=method,
        path=path,
        status=response.status_code,
        rate_limit_remaining=rate_limit.get("remaining"),
    )
    return attach_meta(body, meta)


class RequestPipeline:
    """Un intercambio HTTP autenticado por llamada.

    `execute` es la operación central; `get/post/put/patch/delete` fijan el
    método y el orden de parámetros.
    """

    def __init__(self, options: ClientOptions, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._options = options
        self._transport = transport

    @property
    def options(self) -> ClientOptions:
        return self._options

    def build_request(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            method=method,
            path=path,
            body=body,
            query=dict(query) if query else None,
        )

    async def execute(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        request = self.build_request(method, path, body, query)
        url = request.url(self._options.endpoint)

        kwargs: dict[str, Any] = {}
        if request.body is not None:
            kwargs["content"] = json.dumps(request.body)

        async with build_async_client(self._options, transport=self._transport) as client:
            response = await client.request(request.method, url, **kwargs)

        return handle_response(response, method=request.method, path=request.path)

    async def get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("GET", path, None, query)

    async def post(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("POST", path, body, query)

    async def put(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("PUT", path, body, query)

    async def patch(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("PATCH", path, body, query)

    async def delete(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("DELETE", path, None, query)
