"""Cliente async tipado para la API REST de Webflow."""

from webflow_client.core.config import ClientSettings
from webflow_client.core.domain.entities import Collection, Domain, Item, MetaList, Site, Webhook
from webflow_client.core.domain.errors import (
    ConfigurationError,
    MissingArgumentError,
    RateLimitError,
    RemoteAPIError,
    ResponseDecodeError,
    WebflowError,
)
from webflow_client.core.log import configure_logging
from webflow_client.core.services.webflow import Webflow

__all__ = [
    "ClientSettings",
    "Collection",
    "ConfigurationError",
    "Domain",
    "Item",
    "MetaList",
    "MissingArgumentError",
    "RateLimitError",
    "RemoteAPIError",
    "ResponseDecodeError",
    "Site",
    "Webflow",
    "WebflowError",
    "Webhook",
    "configure_logging",
]
