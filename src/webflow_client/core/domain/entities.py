"""Entidades aumentadas: registro crudo + operaciones ligadas.

Cada entidad guarda el dict decodificado *por referencia* (sin copiarlo) y
los identificadores que necesitan sus operaciones (`collection_id`,
`site_id`, ...), capturados al momento de aumentar. Así `item.remove()`
no necesita que el caller vuelva a pasar nada.

No se cachean: dos fetch del mismo recurso producen dos entidades
independientes (iguales campo a campo, pero no idénticas).
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Sequence

from webflow_client.core.interfaces.api import Query, WebflowAPI


class MetaList(list):
    """Lista con `_meta` adjunto (las listas de Python no admiten claves extra)."""

    def __init__(self, items: Any = (), meta: dict[str, Any] | None = None) -> None:
        super().__init__(items)
        self._meta: dict[str, Any] = meta if meta is not None else {}

    @property
    def meta(self) -> dict[str, Any]:
        return self._meta


class AugmentedEntity:
    """Base común: acceso de lectura tipo mapping sobre el registro crudo."""

    def __init__(self, data: dict[str, Any], api: WebflowAPI) -> None:
        self.data = data
        self._api = api

    @property
    def id(self) -> str | None:
        return self.data.get("_id")

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self):
        return self.data.keys()

    def to_dict(self) -> dict[str, Any]:
        return self.data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AugmentedEntity):
            return type(self) is type(other) and self.data == other.data
        if isinstance(other, Mapping):
            return self.data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class Domain(AugmentedEntity):
    """Dominio publicado de un sitio (sin operaciones ligadas)."""


class Site(AugmentedEntity):
    """Sitio con accesos directos a sus colecciones, dominios y webhooks."""

    @property
    def site_id(self) -> str | None:
        return self.id

    async def collections(self, query: Query = None) -> Any:
        return await self._api.collections(site_id=self.site_id, query=query)

    async def webhooks(self, query: Query = None) -> Any:
        return await self._api.webhooks(site_id=self.site_id, query=query)

    async def domains(self) -> Any:
        return await self._api.domains(site_id=self.site_id)

    async def webhook(self, webhook_id: str | None, query: Query = None) -> Any:
        return await self._api.webhook(site_id=self.site_id, webhook_id=webhook_id, query=query)

    async def create_webhook(self, data: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.create_webhook(site_id=self.site_id, data=data, query=query)

    async def remove_webhook(self, webhook_id: str | None, query: Query = None) -> Any:
        return await self._api.remove_webhook(site_id=self.site_id, webhook_id=webhook_id, query=query)

    async def publish(self, domains: Sequence[str] | None) -> Any:
        return await self._api.publish_site(site_id=self.site_id, domains=domains)


class Collection(AugmentedEntity):
    """Colección con CRUD de items ya ligado a su `_id`."""

    @property
    def collection_id(self) -> str | None:
        return self.id

    async def items(self, query: Query = None) -> Any:
        return await self._api.items(collection_id=self.collection_id, query=query)

    async def item(self, item_id: str | None, query: Query = None) -> Any:
        return await self._api.item(collection_id=self.collection_id, item_id=item_id, query=query)

    async def create_item(self, fields: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.create_item(collection_id=self.collection_id, fields=fields, query=query)

    async def update_item(self, item_id: str | None, fields: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.update_item(
            collection_id=self.collection_id, item_id=item_id, fields=fields, query=query
        )

    async def patch_item(self, item_id: str | None, fields: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.patch_item(
            collection_id=self.collection_id, item_id=item_id, fields=fields, query=query
        )

    async def remove_item(self, item_id: str | None, query: Query = None) -> Any:
        return await self._api.remove_item(collection_id=self.collection_id, item_id=item_id, query=query)


class Item(AugmentedEntity):
    """Item de una colección: `update` (PUT), `patch` (PATCH), `remove` (DELETE)."""

    def __init__(self, data: dict[str, Any], api: WebflowAPI, collection_id: str | None) -> None:
        super().__init__(data, api)
        self.collection_id = collection_id

    @property
    def item_id(self) -> str | None:
        return self.id

    async def update(self, fields: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.update_item(
            collection_id=self.collection_id, item_id=self.item_id, fields=fields, query=query
        )

    async def patch(self, fields: Mapping[str, Any] | None, query: Query = None) -> Any:
        return await self._api.patch_item(
            collection_id=self.collection_id, item_id=self.item_id, fields=fields, query=query
        )

    async def remove(self, query: Query = None) -> Any:
        return await self._api.remove_item(collection_id=self.collection_id, item_id=self.item_id, query=query)


class Webhook(AugmentedEntity):
    def __init__(self, data: dict[str, Any], api: WebflowAPI, site_id: str | None) -> None:
        super().__init__(data, api)
        self.site_id = site_id

    @property
    def webhook_id(self) -> str | None:
        return self.id

    async def remove(self, query: Query = None) -> Any:
        return await self._api.remove_webhook(site_id=self.site_id, webhook_id=self.webhook_id, query=query)
