"""Contrato de la capa de endpoints.

Por qué Protocol:
- Las operaciones ligadas de cada entidad (`item.remove()`, `site.webhooks()`)
  solo necesitan "algo que sepa hablar con la API".
- En tests se puede pasar un doble sin red.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

Query = Mapping[str, Any] | None


@runtime_checkable
class WebflowAPI(Protocol):
    """Operaciones de alto nivel que usan las entidades aumentadas."""

    async def domains(self, *, site_id: str | None) -> Any: ...

    async def collections(self, *, site_id: str | None, query: Query = None) -> Any: ...

    async def publish_site(self, *, site_id: str | None, domains: Sequence[str] | None) -> Any: ...

    async def items(self, *, collection_id: str | None, query: Query = None) -> Any: ...

    async def item(self, *, collection_id: str | None, item_id: str | None, query: Query = None) -> Any: ...

    async def create_item(self, *, collection_id: str | None, fields: Mapping[str, Any] | None, query: Query = None) -> Any: ...

    async def update_item(
        self,
        *,
        collection_id: str | None,
        item_id: str | None,
        fields: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Any: ...

    async def patch_item(
        self,
        *,
        collection_id: str | None,
        item_id: str | None,
        fields: Mapping[str, Any] | None,
        query: Query = None,
    ) -> Any: ...

    async def remove_item(self, *, collection_id: str | None, item_id: str | None, query: Query = None) -> Any: ...

    async def webhooks(self, *, site_id: str | None, query: Query = None) -> Any: ...

    async def webhook(self, *, site_id: str | None, webhook_id: str | None, query: Query = None) -> Any: ...

    async def create_webhook(self, *, site_id: str | None, data: Mapping[str, Any] | None, query: Query = None) -> Any: ...

    async def remove_webhook(self, *, site_id: str | None, webhook_id: str | None, query: Query = None) -> Any: ...
