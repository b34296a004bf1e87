"""Cliente de alto nivel: un método por endpoint documentado.

Cada operación:
1. valida los identificadores obligatorios (sin tocar la red si falta alguno),
2. arma el path sustituyendo identificadores en una plantilla fija,
3. delega en `RequestPipeline`,
4. pasa el resultado por `ResponseWrapper` cuando devuelve entidades.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx
import pydantic

from webflow_client.adapters.http_client import RequestPipeline
from webflow_client.core.config import DEFAULT_API_VERSION, DEFAULT_ENDPOINT, ClientSettings
from webflow_client.core.domain.entities import Collection, Item, MetaList, Site, Webhook
from webflow_client.core.domain.errors import ConfigurationError, MissingArgumentError, WebflowError
from webflow_client.core.domain.models import ClientOptions
from webflow_client.core.interfaces.api import Query
from webflow_client.core.services.response_wrapper import ResponseWrapper


def _require_id(name: str, value: str | None) -> None:
    # Identificadores string: "faltante" = None o "".
    if value is None or value == "":
        raise MissingArgumentError(name)


def _require_value(name: str, value: Any) -> None:
    # Payloads: solo None es faltante (una lista vacía de dominios es válida).
    if value is None:
        raise MissingArgumentError(name)


class Webflow:
    """Cliente async de la API de Webflow.

    Ejemplo:
        api = Webflow(token="...")
        page = await api.items(collection_id="...")
        await page["items"][0].patch({"name": "Nuevo"})
    """

    def __init__(
        self,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        token: str | None = "",
        version: str = DEFAULT_API_VERSION,
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError("token")

        try:
            self.options = ClientOptions(
                endpoint=endpoint,
                token=token,
                version=version,
                timeout_seconds=timeout_seconds,
            )
        except pydantic.ValidationError as exc:
            first = exc.errors()[0]
            field = str(first["loc"][0]) if first.get("loc") else "options"
            raise ConfigurationError(field, f"invalid {field}: {first['msg']}") from exc
        self.pipeline = RequestPipeline(self.options, transport=transport)
        self.response_wrapper = ResponseWrapper(self)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Webflow":
        settings = settings or ClientSettings()
        return cls(
            endpoint=settings.endpoint,
            token=settings.token,
            version=settings.api_version,
            timeout_seconds=settings.http_timeout_seconds,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self.options.endpoint

    @property
    def headers(self) -> dict[str, str]:
        return self.options.headers()

    # Generic HTTP request handlers

    async def get(self, path: str, query: Query = None) -> Any:
        return await self.pipeline.get(path, query)

    async def post(self, path: str, data: Any = None, query: Query = None) -> Any:
        return await self.pipeline.post(path, data, query)

    async def put(self, path: str, data: Any = None, query: Query = None) -> Any:
        return await self.pipeline.put(path, data, query)

    async def patch(self, path: str, data: Any = None, query: Query = None) -> Any:
        return await self.pipeline.patch(path, data, query)

    async def delete(self, path: str, query: Query = None) -> Any:
        return await self.pipeline.delete(path, query)

    # Meta

    async def info(self, query: Query = None) -> Any:
        return await self.get("/info", query)

    # Sites

    async def sites(self, query: Query = None) -> MetaList:
        sites = await self.get("/sites", query)
        return self.response_wrapper.many(sites, self.response_wrapper.site)

    async def site(self, *, site_id: str | None, query: Query = None) -> Site:
        _require_id("site_id", site_id)

        site = await self.get(f"/sites/{site_id}", query)
        return self.response_wrapper.site(site)

    async def publish_site(self, *, site_id: str | None, domains: Sequence[str] | None) -> Any:
        _require_id("site_id", site_id)
        _require_value("domains", domains)
        # Un str suelto es un solo dominio, no una secuencia de caracteres.
        if isinstance(domains, str):
            domains = [domains]

        return await self.post(f"/sites/{site_id}/publish", {"domains": list(domains)})

    # Domains

    async def domains(self, *, site_id: str | None) -> MetaList:
        _require_id("site_id", site_id)

        domains = await self.get(f"/sites/{site_id}/domains")
        return self.response_wrapper.many(domains, self.response_wrapper.domain)

    # Collections

    async def collections(self, *, site_id: str | None, query: Query = None) -> MetaList:
        _require_id("site_id", site_id)

        collections = await self.get(f"/sites/{site_id}/collections", query)
        return self.response_wrapper.many(collections, self.response_wrapper.collection)

    async def collection(self, *, collection_id: str | None, query: Query = None) -> Collection:
        _require_id("collection_id", collection_id)

        collection = await self.get(f"/collections/{collection_id}", query)
        return self.response_wrapper.collection(collection)

    # Items

    async def items(self, *, collection_id: str | None, query: Query = None) -> dict[str, Any]:
        """Página de items: mismo envelope (`count`, `total`, `_meta`...) con `items` aumentados."""

        _require_id("collection_id", collection_id)

        res = await self.get(f"/collections/{collection_id}/items", query)
        return {
            **res,
            "items": [self.response_wrapper.item(item, collection_id) for item in res.get("items") or []],
        }

    async def item(self, *, collection_id: str | None, item_id: str | None, query: Query = None) -> Item:
        _require_id("collection_id", collection_id)
        _require_id("item_id", item_id)

        res = await self.get(f"/collections/{collection_id}/items/{item_id}", query)
        items = res.get("items") or []
        if not items:
            raise WebflowError(f"Item {item_id} not found in collection {collection_id}")
        return self.response_wrapper.item(items[0], collection_id)

    async def create_item(
        self,
        *,
        collection_id: str | None,
        fields: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Item:
        _require_id("collection_id", collection_id)
        _require_value("fields", fields)

        item = await self.post(f"/collections/{collection_id}/items", {"fields": dict(fields)}, query)
        return self.response_wrapper.item(item, collection_id)

    async def update_item(
        self,
        *,
        collection_id: str | None,
        item_id: str | None,
        fields: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Any:
        _require_id("collection_id", collection_id)
        _require_id("item_id", item_id)
        _require_value("fields", fields)

        return await self.put(f"/collections/{collection_id}/items/{item_id}", {"fields": dict(fields)}, query)

    async def remove_item(self, *, collection_id: str | None, item_id: str | None, query: Query = None) -> Any:
        """Borra un item. Respuesta: `{"deleted": <n>, "_meta": ...}`."""

        _require_id("collection_id", collection_id)
        _require_id("item_id", item_id)

        return await self.delete(f"/collections/{collection_id}/items/{item_id}", query)

    async def patch_item(
        self,
        *,
        collection_id: str | None,
        item_id: str | None,
        fields: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Any:
        _require_id("collection_id", collection_id)
        _require_id("item_id", item_id)
        _require_value("fields", fields)

        return await self.patch(f"/collections/{collection_id}/items/{item_id}", {"fields": dict(fields)}, query)

    # Webhooks

    async def webhooks(self, *, site_id: str | None, query: Query = None) -> MetaList:
        _require_id("site_id", site_id)

        webhooks = await self.get(f"/sites/{site_id}/webhooks", query)
        return self.response_wrapper.many(webhooks, lambda webhook: self.response_wrapper.webhook(webhook, site_id))

    async def webhook(self, *, site_id: str | None, webhook_id: str | None, query: Query = None) -> Webhook:
        _require_id("site_id", site_id)
        _require_id("webhook_id", webhook_id)

        webhook = await self.get(f"/sites/{site_id}/webhooks/{webhook_id}", query)
        return self.response_wrapper.webhook(webhook, site_id)

    async def create_webhook(
        self,
        *,
        site_id: str | None,
        data: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Webhook:
        """Registra un webhook (`data` típico: `{"triggerType": ..., "url": ...}`)."""

        _require_id("site_id", site_id)
        _require_value("data", data)

        webhook = await self.post(f"/sites/{site_id}/webhooks", dict(data), query)
        return self.response_wrapper.webhook(webhook, site_id)

    async def remove_webhook(self, *, site_id: str | None, webhook_id: str | None, query: Query = None) -> Any:
        _require_id("site_id", site_id)
        _require_id("webhook_id", webhook_id)

        return await self.delete(f"/sites/{site_id}/webhooks/{webhook_id}", query)
