"""Documento de contexto en disco (JSON).

Por qué JSON:
- Es el formato que lee el stack de despliegue (`cdk.context.json`).
- Merge de un nivel: las claves que no produce este run se conservan tal cual.

Reglas:
- Fichero inexistente == documento vacío.
- Fichero existente pero no decodificable o que no es un objeto -> `ContextParseError`
  (sin auto-reparación).
- Se escribe completo en un fichero temporal hermano y se reemplaza con
  `os.replace`, así nunca queda un documento a medias.
- Errores de E/S (permisos, disco lleno) -> `ContextFileError`; el temporal se borra.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from core.errors import ContextFileError, ContextParseError
from core.interfaces.context_store import ContextStore

logger = logging.getLogger(__name__)


class JsonContextFile(ContextStore):
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            raise ContextParseError(str(self._path), str(exc)) from exc
        except OSError as exc:
            raise ContextFileError(str(self._path), "read", exc) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ContextParseError(str(self._path), str(exc)) from exc
        if not isinstance(data, dict):
            raise ContextParseError(str(self._path), f"expected an object, got {type(data).__name__}")
        return data

    def merge(self, new_fields: Mapping[str, str]) -> dict[str, Any]:
        existing = self.load()
        result = {**existing, **new_fields}
        self._write(result)
        logger.info("Context saved to %s (%d keys)", self._path, len(result))
        return result

    def _write(self, data: Mapping[str, Any]) -> None:
        tmp = self._path.with_name(f".{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise ContextFileError(str(self._path), "write", exc) from exc
