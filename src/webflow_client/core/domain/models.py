"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de la configuración y de cada petición sin acoplar
  el Core a httpx.
- Los modelos describen *qué* se envía y se recibe, no *cómo*.
"""

from __future__ import annotations

import re
from typing import Any, Literal, Mapping

import httpx
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from webflow_client.core.config import DEFAULT_API_VERSION, DEFAULT_ENDPOINT

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")


class ClientOptions(BaseModel):
    """Configuración inmutable de un cliente.

    Se crea una vez en el constructor y solo se lee después, así que se
    puede compartir entre tareas concurrentes sin locks.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=1,
        description="Base URL; los paths se concatenan tal cual.",
    )
    token: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Bearer token.",
    )
    version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Versión de API enviada en `accept-version`.",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout del transporte por request (segundos).",
    )

    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.token}",
            "accept-version": self.version,
            "Content-Type": "application/json",
        }


class RequestDescriptor(BaseModel):
    """Una petición concreta: método, path, body y query opcionales."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    body: Any = None
    query: dict[str, Any] | None = None

    def query_string(self) -> str:
        """`?a=1&b=2` si hay query no vacía; `""` en cualquier otro caso."""

        if not self.query:
            return ""
        params = {k: v for k, v in self.query.items() if v is not None}
        encoded = str(httpx.QueryParams(params))
        return f"?{encoded}" if encoded else ""

    def url(self, endpoint: str) -> str:
        return f"{endpoint}{self.path}{self.query_string()}"


class RateLimit(BaseModel):
    """Cuota informada por `x-ratelimit-*`. `None` si la cabecera falta o no es numérica."""

    model_config = ConfigDict(populate_by_name=True)

    limit: int | None = None
    remaining: int | None = None


class ResponseMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rate_limit: RateLimit = Field(default_factory=RateLimit, alias="rateLimit")

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ResponseMeta":
        return cls(
            rate_limit=RateLimit(
                limit=parse_int_header(headers.get("x-ratelimit-limit")),
                remaining=parse_int_header(headers.get("x-ratelimit-remaining")),
            )
        )

    def as_envelope_meta(self) -> dict[str, Any]:
        """Forma pública de `_meta`: `{"rateLimit": {"limit": .., "remaining": ..}}`."""

        return self.model_dump(by_alias=True)


def parse_int_header(value: str | None) -> int | None:
    """Parsea el prefijo entero de una cabecera (`"59"` -> 59, `"abc"` -> None)."""

    if value is None:
        return None
    match = _LEADING_INT_RE.match(value)
    if not match:
        return None
    return int(match.group(1))

