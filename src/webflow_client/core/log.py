"""Logging estructurado (structlog).

Por qué structlog:
- Eventos con campos (method, path, status) en vez de strings formateados.
- Se apoya en `logging` de la stdlib para niveles y handlers, así la app
  que usa la librería decide el destino y el nivel de los logs.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _configure_structlog(*, json_output: bool) -> None:
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "WARNING", *, json_output: bool = False) -> None:
    """Configura structlog + logging stdlib para todo el proceso.

    Pensado para entrypoints (CLI, scripts). La librería por sí sola nunca
    toca los handlers del root logger.
    """

    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric, format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(numeric)
    _configure_structlog(json_output=json_output)

