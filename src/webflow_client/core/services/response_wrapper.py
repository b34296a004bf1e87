"""Aumentado de respuestas: registros crudos -> entidades con operaciones ligadas.

Reglas:
- Nunca muta ni copia el registro; la entidad lo referencia tal cual.
- Los identificadores padre (collection_id, site_id) se capturan aquí, al
  aumentar, no al invocar la operación.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from webflow_client.core.domain.entities import (
    AugmentedEntity,
    Collection,
    Domain,
    Item,
    MetaList,
    Site,
    Webhook,
)
from webflow_client.core.interfaces.api import WebflowAPI

E = TypeVar("E", bound=AugmentedEntity)


class ResponseWrapper:
    """Una operación de aumentado por tipo de recurso."""

    def __init__(self, api: WebflowAPI) -> None:
        self.api = api

    def site(self, site: dict[str, Any]) -> Site:
        return Site(site, self.api)

    def domain(self, domain: dict[str, Any]) -> Domain:
        return Domain(domain, self.api)

    def collection(self, collection: dict[str, Any]) -> Collection:
        return Collection(collection, self.api)

    def item(self, item: dict[str, Any], collection_id: str) -> Item:
        return Item(item, self.api, collection_id)

    def webhook(self, webhook: dict[str, Any], site_id: str) -> Webhook:
        return Webhook(webhook, self.api, site_id)

    def many(self, records: Iterable[dict[str, Any]], wrap: Callable[[dict[str, Any]], E]) -> MetaList:
        """Aumenta una lista conservando el `_meta` de la respuesta (si lo hay)."""

        meta = records.meta if isinstance(records, MetaList) else {}
        return MetaList((wrap(record) for record in records), meta=meta)
