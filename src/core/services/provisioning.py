"""Bootstrap orchestration for the nRF Cloud <-> AWS IoT MQTT bridge.

The CLI delegates the whole run to `provision`, which sequences the steps
strictly in order and stops at the first failure:

1. validate the persisted context document (a corrupt file aborts the run
   before any credential is issued);
2. fetch the nRF Cloud account info;
3. fetch the AWS IoT data endpoint;
4. ensure the nRF Cloud device identity;
5. ensure the local AWS IoT client identity;
6. merge the derived fields into the context document.

Nothing is rolled back. A run that fails after step 4 leaves the remote
identity updated and the context untouched; re-running without `reset`
reuses that identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from core.config import AppSettings
from core.domain.models import (
    AccountInfo,
    CliInput,
    LocalIdentity,
    ProvisioningContext,
    RemoteDeviceIdentity,
)
from core.interfaces.context_store import ContextStore
from core.interfaces.issuers import LocalIdentityAuthority, RemoteAccountApi
from core.interfaces.secret_store import SecretStore
from core.services.credential_ensurer import EnsureOutcome, IdentitySlot, ensure_identity

logger = logging.getLogger(__name__)


@dataclass
class ProvisioningResult:
    """Output of a bootstrap run."""

    account: AccountInfo
    iot_endpoint: str
    remote: EnsureOutcome[RemoteDeviceIdentity]
    local: EnsureOutcome[LocalIdentity]
    context: ProvisioningContext
    document: dict[str, Any]


def remote_identity_slot(settings: AppSettings) -> IdentitySlot[RemoteDeviceIdentity]:
    return IdentitySlot(
        label="MQTT Team Device",
        model=RemoteDeviceIdentity,
        params={
            "client_cert": settings.nrfcloud_client_cert_param,
            "private_key": settings.nrfcloud_client_key_param,
            "client_id": settings.nrfcloud_client_id_param,
        },
    )


def local_identity_slot(settings: AppSettings) -> IdentitySlot[LocalIdentity]:
    return IdentitySlot(
        label="local IoT client",
        model=LocalIdentity,
        params={
            "client_cert": settings.local_client_cert_param,
            "private_key": settings.local_client_key_param,
        },
    )


def build_context(
    *,
    settings: AppSettings,
    account: AccountInfo,
    iot_endpoint: str,
    remote: RemoteDeviceIdentity,
) -> ProvisioningContext:
    return ProvisioningContext(
        mqtt_team_device_cert_param=settings.nrfcloud_client_cert_param,
        mqtt_team_device_key_param=settings.nrfcloud_client_key_param,
        mqtt_team_device_client_id=remote.client_id,
        local_client_cert_param=settings.local_client_cert_param,
        local_client_key_param=settings.local_client_key_param,
        mqtt_endpoint=iot_endpoint,
        mqtt_topic_prefix=account.topic_prefix,
        nrfcloud_mqtt_endpoint=account.mqtt_endpoint,
    )


def provision(
    *,
    settings: AppSettings,
    request: CliInput,
    secrets: SecretStore,
    remote_api: RemoteAccountApi,
    authority: LocalIdentityAuthority,
    context_store: ContextStore,
) -> ProvisioningResult:
    logger.info("Validating context document")
    context_store.load()

    logger.info("Retrieving nRF Cloud account info")
    account = remote_api.fetch_account_info()
    logger.info(
        "nRF Cloud account: tenant=%s mqtt_endpoint=%s topic_prefix=%s",
        account.tenant_id,
        account.mqtt_endpoint,
        account.topic_prefix,
    )

    logger.info("Retrieving AWS IoT endpoint")
    iot_endpoint = authority.describe_endpoint()
    logger.info("AWS IoT endpoint: %s", iot_endpoint)

    logger.info("Ensuring MQTT Team Device credentials")
    remote = ensure_identity(
        slot=remote_identity_slot(settings),
        store=secrets,
        issue=lambda: remote_api.issue_device_identity(account),
        reset=request.reset,
    )

    logger.info("Ensuring local IoT client credentials")
    local = ensure_identity(
        slot=local_identity_slot(settings),
        store=secrets,
        issue=authority.issue_local_identity,
        reset=request.reset,
    )

    logger.info("Saving context info")
    context = build_context(
        settings=settings,
        account=account,
        iot_endpoint=iot_endpoint,
        remote=remote.identity,
    )
    document = context_store.merge(context.to_document())

    return ProvisioningResult(
        account=account,
        iot_endpoint=iot_endpoint,
        remote=remote,
        local=local,
        context=context,
        document=document,
    )
