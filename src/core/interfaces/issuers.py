"""Contratos de los emisores de credenciales.

Reglas de diseño:
- Ningún emisor tiene un "get-or-create" idempotente: cada llamada a
  `issue_*` crea material nuevo. Solo el ensurer decide cuándo llamarlas.
- Los errores se lanzan (`RemoteApiError` / `ControlPlaneError`); no hay
  reintentos.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AccountInfo, LocalIdentity, RemoteDeviceIdentity


@runtime_checkable
class RemoteAccountApi(Protocol):
    """API REST de nRF Cloud autenticada con la API key del run."""

    def fetch_account_info(self) -> AccountInfo:
        ...

    def issue_device_identity(self, account: AccountInfo) -> RemoteDeviceIdentity:
        """Emite una identidad de dispositivo nueva (cert + key + client id)."""

        ...


@runtime_checkable
class LocalIdentityAuthority(Protocol):
    """Control plane del broker local (AWS IoT)."""

    def describe_endpoint(self) -> str:
        ...

    def issue_local_identity(self) -> LocalIdentity:
        """Crea política + certificado activo, adjunta la política y devuelve el par."""

        ...
