"""Cliente REST de nRF Cloud.

Implementación:
- `GET /v1/account` -> `mqttEndpoint`, `mqttTopicPrefix`.
- Emisión del dispositivo de cuenta, según `device_issuance`:
  - `mqtt-team`: `POST /v1/devices/mqtt-team` -> `clientId`, `clientCert`, `privateKey`.
  - `account-certificates`: `POST /v1/account/certificates` -> `clientCert`,
    `privateKey`; el client id es `account-<tenantId>`.

Notas:
- Cada POST crea un dispositivo/certificado nuevo en nRF Cloud.
- Cualquier status no 2xx, error de red o JSON inesperado -> `RemoteApiError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import AccountInfo, CliInput, RemoteDeviceIdentity
from core.errors import RemoteApiError
from core.interfaces.issuers import RemoteAccountApi

logger = logging.getLogger(__name__)

_ISSUANCE_PATHS = {
    "mqtt-team": "/v1/devices/mqtt-team",
    "account-certificates": "/v1/account/certificates",
}


class NrfCloudClient(RemoteAccountApi):
    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        settings: AppSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._endpoint = endpoint.rstrip("/")
        self._client = build_client(
            self._settings,
            extra_headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        )

    @classmethod
    def from_input(
        cls,
        request: CliInput,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "NrfCloudClient":
        return cls(
            api_key=request.api_key.get_secret_value(),
            endpoint=request.endpoint,
            settings=settings,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "NrfCloudClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_account_info(self) -> AccountInfo:
        data = self._request("GET", "/v1/account")
        mqtt_endpoint = _require_str(data, "mqttEndpoint")
        topic_prefix = _require_str(data, "mqttTopicPrefix")
        try:
            return AccountInfo.from_topic_prefix(
                mqtt_endpoint=mqtt_endpoint,
                topic_prefix=topic_prefix,
            )
        except ValueError as exc:
            raise RemoteApiError(f"Unexpected account info from nRF Cloud: {exc}") from exc

    def issue_device_identity(self, account: AccountInfo) -> RemoteDeviceIdentity:
        variant = self._settings.device_issuance
        data = self._request("POST", _ISSUANCE_PATHS[variant])

        if variant == "mqtt-team":
            client_id = _require_str(data, "clientId")
        else:
            client_id = account.account_client_id

        identity = RemoteDeviceIdentity(
            client_id=client_id,
            client_cert=_require_str(data, "clientCert"),
            private_key=_require_str(data, "privateKey"),
        )
        logger.debug("nRF Cloud issued device identity %s", identity.client_id)
        return identity

    def _request(self, method: str, path: str) -> dict[str, Any]:
        url = f"{self._endpoint}{path}"
        try:
            resp = self._client.request(method, url)
        except httpx.HTTPError as exc:
            raise RemoteApiError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise RemoteApiError(
                f"{method} {url} returned HTTP {resp.status_code}: {resp.text[:500]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteApiError(
                f"{method} {url} returned a non-JSON body",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise RemoteApiError(
                f"{method} {url} returned {type(data).__name__}, expected an object",
                status_code=resp.status_code,
            )
        return data


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise RemoteApiError(f"nRF Cloud response is missing {key!r}")
    return value
