"""Exportación JSON de respuestas.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (`jq`, scripts).
- Las entidades aumentadas se serializan como su registro crudo; las
  operaciones ligadas no forman parte de la salida.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from webflow_client.core.domain.entities import AugmentedEntity, MetaList


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, AugmentedEntity):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_envelope(payload: Any) -> str:
    """Serializa un envelope con formato estable (UTF-8, indentado, claves ordenadas).

    Una `MetaList` se exporta como `{"items": [...], "_meta": {...}}` para no
    perder los metadatos de rate-limit.
    """

    if isinstance(payload, MetaList):
        payload = {"items": list(payload), "_meta": payload.meta}
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True, default=_to_jsonable)


def export_envelope_json(*, payload: Any, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_envelope(payload) + "\n", encoding="utf-8")
    return output_path
