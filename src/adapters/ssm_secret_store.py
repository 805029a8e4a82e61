"""Secret store sobre AWS Systems Manager Parameter Store.

Notas:
- `ParameterNotFound` -> `NotFound` (dispara la emisión de credenciales).
- Cualquier otro error (AccessDenied, throttling, red) -> `LookupFailed`;
  nunca se confunde con ausencia.
- Una respuesta sin `Value` tampoco es ausencia -> `LookupFailed`.
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.domain.lookup import Found, LookupFailed, NotFound, SecretLookup
from core.errors import SecretStoreError
from core.interfaces.secret_store import SecretStore

logger = logging.getLogger(__name__)


class SsmSecretStore(SecretStore):
    def __init__(self, client: Any, *, parameter_type: str = "String") -> None:
        self._client = client
        self._parameter_type = parameter_type

    def get(self, name: str) -> SecretLookup:
        try:
            resp = self._client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ParameterNotFound":
                return NotFound(name)
            logger.debug("SSM get_parameter %s failed: %s", name, exc)
            return LookupFailed(name, exc)
        except BotoCoreError as exc:
            logger.debug("SSM get_parameter %s failed: %s", name, exc)
            return LookupFailed(name, exc)

        value = resp.get("Parameter", {}).get("Value")
        if value is None:
            logger.debug("SSM get_parameter %s returned no value", name)
            return LookupFailed(name, "response carried no parameter value")
        return Found(name, value)

    def put(self, name: str, value: str, *, overwrite: bool = True) -> None:
        try:
            self._client.put_parameter(
                Name=name,
                Value=value,
                Type=self._parameter_type,
                Overwrite=overwrite,
            )
        except (ClientError, BotoCoreError) as exc:
            raise SecretStoreError(name, exc) from exc
        logger.debug("SSM parameter %s written", name)
