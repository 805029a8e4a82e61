"""Contrato del documento de contexto persistido."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ContextStore(Protocol):
    def load(self) -> dict[str, Any]:
        """Documento actual; `{}` si no existe. `ContextParseError` si está corrupto."""

        ...

    def merge(self, new_fields: Mapping[str, str]) -> dict[str, Any]:
        """Fusiona `new_fields` sobre el documento (un nivel) y lo reescribe entero."""

        ...
