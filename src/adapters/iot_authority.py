"""Control plane de AWS IoT como autoridad de identidades locales.

Implementación:
- `describe_endpoint` -> endpoint de datos (por defecto `iot:Data-ATS`).
- `issue_local_identity`:
  1. crea una política `<prefijo>-<uuid4>` con `iot:*` sobre `*` (el bridge
     necesita acceso completo al broker local);
  2. crea claves + certificado activo;
  3. adjunta la política al certificado.

Notas:
- Cada emisión deja una política nueva; las anteriores no se borran.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.domain.models import LocalIdentity
from core.errors import ControlPlaneError
from core.interfaces.issuers import LocalIdentityAuthority

logger = logging.getLogger(__name__)

BRIDGE_POLICY_DOCUMENT: dict[str, Any] = {
    "Version": "2012-10-17",
    "Statement": [
        {
            "Effect": "Allow",
            "Action": "iot:*",
            "Resource": "*",
        }
    ],
}


def new_policy_name(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


class IotIdentityAuthority(LocalIdentityAuthority):
    def __init__(
        self,
        client: Any,
        *,
        endpoint_type: str = "iot:Data-ATS",
        policy_prefix: str = "nrfcloud-mqtt-bridge-policy",
    ) -> None:
        self._client = client
        self._endpoint_type = endpoint_type
        self._policy_prefix = policy_prefix

    def describe_endpoint(self) -> str:
        resp = self._call("DescribeEndpoint", self._client.describe_endpoint, endpointType=self._endpoint_type)
        address = resp.get("endpointAddress")
        if not address:
            raise ControlPlaneError("DescribeEndpoint", "response has no endpointAddress")
        return address

    def issue_local_identity(self) -> LocalIdentity:
        policy_name = new_policy_name(self._policy_prefix)
        logger.info("Creating iot policy %s", policy_name)
        self._call(
            "CreatePolicy",
            self._client.create_policy,
            policyName=policy_name,
            policyDocument=json.dumps(BRIDGE_POLICY_DOCUMENT),
        )

        credentials = self._call(
            "CreateKeysAndCertificate",
            self._client.create_keys_and_certificate,
            setAsActive=True,
        )
        certificate_arn = credentials.get("certificateArn")
        certificate_pem = credentials.get("certificatePem")
        private_key = (credentials.get("keyPair") or {}).get("PrivateKey")
        if not (certificate_arn and certificate_pem and private_key):
            raise ControlPlaneError("CreateKeysAndCertificate", "response is missing certificate material")

        self._call(
            "AttachPolicy",
            self._client.attach_policy,
            policyName=policy_name,
            target=certificate_arn,
        )
        logger.debug("Attached policy %s to %s", policy_name, certificate_arn)

        return LocalIdentity(client_cert=certificate_pem, private_key=private_key)

    @staticmethod
    def _call(operation: str, fn: Any, **kwargs: Any) -> dict[str, Any]:
        try:
            return fn(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise ControlPlaneError(operation, exc) from exc
