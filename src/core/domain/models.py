"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a boto3/httpx.
- Los pares certificado/clave se validan como unidad: un modelo a medio
  construir no existe.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict


class CliInput(BaseModel):
    """Parámetros de una ejecución. Inmutable durante todo el run."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = Field(
        ...,
        description="API key de nRF Cloud (bearer token).",
    )
    endpoint: str = Field(
        ...,
        min_length=8,
        description="Host de la API REST de nRF Cloud.",
    )
    reset: bool = Field(
        default=False,
        description="Fuerza la regeneración de ambas identidades.",
    )


class CertificateCredentials(BaseModel):
    """Par certificado + clave privada (PEM). Nunca parcialmente válido."""

    model_config = ConfigDict(frozen=True)

    client_cert: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Certificado de cliente en PEM.",
    )
    private_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Clave privada en PEM.",
    )


class RemoteDeviceIdentity(CertificateCredentials):
    """Identidad del dispositivo en nRF Cloud (tripleta atómica)."""

    client_id: str = Field(
        ...,
        min_length=1,
        description="Client id MQTT con el que el bridge se conecta a nRF Cloud.",
    )


class LocalIdentity(CertificateCredentials):
    """Identidad de cliente del broker local (AWS IoT).

    La política adjunta es un efecto lateral de la emisión; no se guarda.
    """


class AccountInfo(BaseModel):
    """Metadatos de la cuenta/tenant en nRF Cloud. Se pide en cada run."""

    model_config = ConfigDict(frozen=True)

    mqtt_endpoint: str = Field(..., min_length=1)
    topic_prefix: str = Field(..., min_length=1)
    tenant_id: str = Field(..., min_length=1)

    @classmethod
    def from_topic_prefix(cls, *, mqtt_endpoint: str, topic_prefix: str) -> "AccountInfo":
        """Deriva `tenant_id` del segundo segmento de `topic_prefix` (p.ej. `prod/<tenant>/`)."""

        parts = topic_prefix.split("/")
        if len(parts) < 2 or not parts[1]:
            raise ValueError(f"Topic prefix {topic_prefix!r} has no tenant segment")
        return cls(mqtt_endpoint=mqtt_endpoint, topic_prefix=topic_prefix, tenant_id=parts[1])

    @property
    def account_client_id(self) -> str:
        return f"account-{self.tenant_id}"


class ProvisioningContext(BaseModel):
    """Campos que el run escribe en el documento de contexto.

    Los alias son las claves que lee el stack de despliegue.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mqtt_team_device_cert_param: str = Field(..., alias="mqttTeamDeviceCertSSMParam")
    mqtt_team_device_key_param: str = Field(..., alias="mqttTeamDeviceKeySSMParam")
    mqtt_team_device_client_id: str = Field(..., alias="mqttTeamDeviceClientId")
    local_client_cert_param: str = Field(..., alias="localIotClientCertSSMParam")
    local_client_key_param: str = Field(..., alias="localIotClientKeySSMParam")
    mqtt_endpoint: str = Field(..., alias="mqttEndpoint")
    mqtt_topic_prefix: str = Field(..., alias="mqttTopicPrefix")
    nrfcloud_mqtt_endpoint: str = Field(..., alias="nrfCloudMqttEndpoint")

    def to_document(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
