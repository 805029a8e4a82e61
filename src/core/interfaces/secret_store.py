"""Contrato del secret store (parámetros con nombre).

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- SSM en producción, un dict en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.lookup import SecretLookup


@runtime_checkable
class SecretStore(Protocol):
    """Lectura/escritura de parámetros string con nombre."""

    def get(self, name: str) -> SecretLookup:
        """Devuelve `Found`, `NotFound` o `LookupFailed`; nunca lanza por ausencia."""

        ...

    def put(self, name: str, value: str, *, overwrite: bool = True) -> None:
        """Escribe el parámetro. Lanza `SecretStoreError` si falla."""

        ...
