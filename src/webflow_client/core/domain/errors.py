"""Jerarquía de errores del cliente.

Por qué una jerarquía cerrada:
- El caller necesita distinguir "nunca se envió" (argumento faltante) de
  "se envió y la API lo rechazó" y de "se envió pero la respuesta no se
  entiende": la política de reintento es distinta en cada caso.
- Todos comparten el mismo set fijo de campos opcionales, así no hay
  atributos ad-hoc según quién lance el error.
"""

from __future__ import annotations

from typing import Any

UNKNOWN_ERROR_MESSAGE = "Unknown error occured"


class WebflowError(Exception):
    """Base de todos los errores de la librería.

    Attributes:
        message: Mensaje legible.
        code: Código de error devuelto por la API (si existe).
        msg: Mensaje secundario devuelto por la API (si existe).
        problems: Lista de problemas de validación (solo si la API la envía no vacía).
        meta: Metadatos de rate-limit de la respuesta (`{}` si no aplica).
        status_code: Status HTTP (solo errores remotos).
    """

    def __init__(
        self,
        message: str,
        *,
        code: Any = None,
        msg: str | None = None,
        problems: list[Any] | None = None,
        meta: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.msg = msg
        self.problems = problems
        self.meta = meta if meta is not None else {}
        self.status_code = status_code


class ConfigurationError(WebflowError):
    """Falta configuración obligatoria al construir el cliente (p.ej. token)."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(message or f"{argument} is required")
        self.argument = argument


class MissingArgumentError(WebflowError):
    """Falta un identificador obligatorio; la petición nunca se envió."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} is required")
        self.argument = argument


class ResponseDecodeError(WebflowError):
    """El body de la respuesta no es JSON válido.

    La excepción original queda encadenada en `__cause__`.
    """


class RemoteAPIError(WebflowError):
    """La API respondió con status >= 400."""


class RateLimitError(RemoteAPIError):
    """429: cuota agotada. No se reintenta; `meta` trae el estado del rate-limit."""


def build_remote_error(status_code: int, body: Any, meta: dict[str, Any]) -> RemoteAPIError:
    """Normaliza un body de error de la API a `RemoteAPIError`."""

    payload = body if isinstance(body, dict) else {}
    message = payload.get("err") or UNKNOWN_ERROR_MESSAGE

    problems = payload.get("problems")
    if not isinstance(problems, list) or not problems:
        problems = None

    error_cls = RateLimitError if status_code == 429 else RemoteAPIError
    return error_cls(
        str(message),
        code=payload.get("code"),
        msg=payload.get("msg"),
        problems=problems,
        meta=meta,
        status_code=status_code,
    )
