"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/AWS/fichero de contexto) lean config de forma
  consistente.

Los nombres de parámetros SSM por defecto son los que consume el stack de
despliegue; cambiarlos solo tiene sentido si el stack también cambia.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigValidationError

DeviceIssuance = Literal["mqtt-team", "account-certificates"]


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="NRFCLOUD_BRIDGE_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request contra la API de nRF Cloud (segundos).",
    )
    user_agent: str = Field(
        default="nrfcloud-bridge-init/0.1",
        min_length=1,
        description="User-Agent para peticiones a nRF Cloud.",
    )
    default_endpoint: str = Field(
        default="https://api.nrfcloud.com",
        min_length=8,
        description="Host de la API REST de nRF Cloud si no se pasa --endpoint.",
    )
    device_issuance: DeviceIssuance = Field(
        default="mqtt-team",
        description=(
            "Endpoint de emisión del dispositivo remoto: 'mqtt-team' "
            "(POST /v1/devices/mqtt-team) o 'account-certificates' "
            "(POST /v1/account/certificates)."
        ),
    )

    context_file: Path = Field(
        default=Path("cdk.context.json"),
        description="Documento de contexto persistido entre ejecuciones.",
    )

    # Parámetros SSM
    nrfcloud_client_cert_param: str = Field(default="NrfCloudClientCert", min_length=1)
    nrfcloud_client_key_param: str = Field(default="NrfCloudClientKey", min_length=1)
    nrfcloud_client_id_param: str = Field(default="NrfCloudMqttTeamDeviceId", min_length=1)
    local_client_cert_param: str = Field(default="LocalIotClientCert", min_length=1)
    local_client_key_param: str = Field(default="LocalIotClientKey", min_length=1)
    ssm_parameter_type: Literal["String", "SecureString"] = Field(
        default="String",
        description="Tipo con el que se escriben los parámetros SSM.",
    )

    # AWS IoT
    iot_endpoint_type: str = Field(
        default="iot:Data-ATS",
        min_length=1,
        description="endpointType para DescribeEndpoint.",
    )
    iot_policy_prefix: str = Field(
        default="nrfcloud-mqtt-bridge-policy",
        min_length=1,
        max_length=90,
        description="Prefijo de las políticas IoT creadas (se añade un uuid4).",
    )
    aws_region: str | None = Field(
        default=None,
        description="Región AWS; si falta se usa la cadena por defecto de boto3.",
    )
    aws_profile: str | None = Field(
        default=None,
        description="Perfil de credenciales AWS (opcional).",
    )


def load_settings(**overrides: object) -> AppSettings:
    """Construye `AppSettings` traduciendo errores de validación al dominio."""

    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return AppSettings(**values)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid configuration: {exc}") from exc
