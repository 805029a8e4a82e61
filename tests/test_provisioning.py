from __future__ import annotations

import json
from pathlib import Path

import pytest

from adapters.context_file import JsonContextFile
from core.config import AppSettings
from core.domain.models import CliInput
from core.errors import ContextParseError, ControlPlaneError, SecretStoreError
from core.services.provisioning import provision
from fakes import FakeAuthority, FakeRemoteApi, InMemorySecretStore

CONTEXT_KEYS = {
    "mqttTeamDeviceCertSSMParam",
    "mqttTeamDeviceKeySSMParam",
    "mqttTeamDeviceClientId",
    "localIotClientCertSSMParam",
    "localIotClientKeySSMParam",
    "mqttEndpoint",
    "mqttTopicPrefix",
    "nrfCloudMqttEndpoint",
}


def _request(reset: bool = False) -> CliInput:
    return CliInput(api_key="secret-api-key", endpoint="https://api.nrfcloud.com", reset=reset)


def _run(
    settings: AppSettings,
    secrets: InMemorySecretStore,
    remote_api: FakeRemoteApi,
    authority: FakeAuthority,
    context_store: JsonContextFile,
    *,
    reset: bool = False,
):
    return provision(
        settings=settings,
        request=_request(reset),
        secrets=secrets,
        remote_api=remote_api,
        authority=authority,
        context_store=context_store,
    )


def test_empty_store_issues_both_identities(settings, secrets, remote_api, authority, context_store, context_path):
    result = _run(settings, secrets, remote_api, authority, context_store)

    assert len(remote_api.issued) == 1
    assert len(authority.issued) == 1
    assert result.remote.issued and result.local.issued

    saved = json.loads(context_path.read_text(encoding="utf-8"))
    assert set(saved) == CONTEXT_KEYS
    assert saved["mqttEndpoint"] == authority.endpoint
    assert saved["mqttTopicPrefix"] == "prod/tenant-1234/"
    assert saved["nrfCloudMqttEndpoint"] == "mqtt.nrfcloud.com"
    assert saved["mqttTeamDeviceCertSSMParam"] == "NrfCloudClientCert"
    assert saved["mqttTeamDeviceKeySSMParam"] == "NrfCloudClientKey"
    assert saved["localIotClientCertSSMParam"] == "LocalIotClientCert"
    assert saved["localIotClientKeySSMParam"] == "LocalIotClientKey"
    assert saved["mqttTeamDeviceClientId"] == remote_api.issued[0].client_id

    assert secrets.values == {
        "NrfCloudClientCert": "REMOTE CERT 1",
        "NrfCloudClientKey": "REMOTE KEY 1",
        "NrfCloudMqttTeamDeviceId": remote_api.issued[0].client_id,
        "LocalIotClientCert": "LOCAL CERT 1",
        "LocalIotClientKey": "LOCAL KEY 1",
    }


def test_second_run_is_idempotent(settings, secrets, remote_api, authority, context_store):
    _run(settings, secrets, remote_api, authority, context_store)
    before = dict(secrets.values)
    puts_before = len(secrets.puts)

    result = _run(settings, secrets, remote_api, authority, context_store)

    assert secrets.values == before
    assert len(secrets.puts) == puts_before
    assert len(remote_api.issued) == 1
    assert len(authority.issued) == 1
    assert not result.remote.issued and not result.local.issued


def test_reset_regenerates_both_identities(settings, secrets, remote_api, authority, context_store):
    _run(settings, secrets, remote_api, authority, context_store)
    old_cert = secrets.values["NrfCloudClientCert"]

    result = _run(settings, secrets, remote_api, authority, context_store, reset=True)

    assert secrets.values["NrfCloudClientCert"] != old_cert
    assert len(remote_api.issued) == 2
    assert len(authority.issued) == 2
    assert result.remote.issued and result.local.issued


def test_prepopulated_local_identity_is_not_reissued(settings, remote_api, authority, context_store):
    secrets = InMemorySecretStore({"LocalIotClientCert": "C", "LocalIotClientKey": "K"})

    result = _run(settings, secrets, remote_api, authority, context_store)

    assert len(remote_api.issued) == 1
    assert authority.issued == []
    assert result.local.identity.client_cert == "C"


def test_existing_context_entries_survive(settings, secrets, remote_api, authority, context_store, context_path):
    context_path.write_text(
        json.dumps({"acknowledged-issue-numbers": "19836", "mqttEndpoint": "stale.example.com"}),
        encoding="utf-8",
    )

    result = _run(settings, secrets, remote_api, authority, context_store)

    saved = json.loads(context_path.read_text(encoding="utf-8"))
    assert saved["acknowledged-issue-numbers"] == "19836"
    assert saved["mqttEndpoint"] == authority.endpoint
    assert result.document == saved


def test_malformed_context_aborts_before_issuing(settings, secrets, remote_api, authority, context_store, context_path):
    context_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ContextParseError):
        _run(settings, secrets, remote_api, authority, context_store)

    assert remote_api.issued == []
    assert authority.issued == []
    assert secrets.puts == []
    assert context_path.read_text(encoding="utf-8") == "{not json"


def test_local_failure_keeps_remote_identity_and_skips_context(settings, secrets, remote_api, context_store, context_path):
    failing_authority = FakeAuthority(fail_issue=True)

    with pytest.raises(ControlPlaneError):
        _run(settings, secrets, remote_api, failing_authority, context_store)

    assert secrets.values["NrfCloudClientCert"] == "REMOTE CERT 1"
    assert not context_path.exists()

    # A plain re-run reuses the remote identity issued above.
    _run(settings, secrets, remote_api, FakeAuthority(), context_store)
    assert len(remote_api.issued) == 1


def test_secret_lookup_failure_is_not_treated_as_missing(settings, remote_api, authority, context_store, context_path):
    secrets = InMemorySecretStore(failing={"NrfCloudClientKey"})

    with pytest.raises(SecretStoreError):
        _run(settings, secrets, remote_api, authority, context_store)

    assert remote_api.issued == []
    assert secrets.puts == []
    assert not context_path.exists()


def test_custom_parameter_names_flow_into_context(tmp_path: Path, secrets, remote_api, authority):
    settings = AppSettings(
        context_file=tmp_path / "ctx.json",
        nrfcloud_client_cert_param="/bridge/nrf/cert",
        local_client_key_param="/bridge/local/key",
    )

    result = _run(settings, secrets, remote_api, authority, JsonContextFile(settings.context_file))

    assert result.document["mqttTeamDeviceCertSSMParam"] == "/bridge/nrf/cert"
    assert result.document["localIotClientKeySSMParam"] == "/bridge/local/key"
    assert "/bridge/nrf/cert" in secrets.values
