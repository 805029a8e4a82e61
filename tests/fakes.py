"""In-memory stand-ins for the secret store and both issuers."""

from __future__ import annotations

import itertools
from typing import Iterable

from core.domain.lookup import Found, LookupFailed, NotFound, SecretLookup
from core.domain.models import AccountInfo, LocalIdentity, RemoteDeviceIdentity
from core.errors import ControlPlaneError, RemoteApiError


class InMemorySecretStore:
    def __init__(self, values: dict[str, str] | None = None, *, failing: Iterable[str] = ()) -> None:
        self.values: dict[str, str] = dict(values or {})
        self.failing = set(failing)
        self.puts: list[tuple[str, str]] = []

    def get(self, name: str) -> SecretLookup:
        if name in self.failing:
            return LookupFailed(name, PermissionError(f"AccessDenied on {name}"))
        if name in self.values:
            return Found(name, self.values[name])
        return NotFound(name)

    def put(self, name: str, value: str, *, overwrite: bool = True) -> None:
        assert overwrite
        self.puts.append((name, value))
        self.values[name] = value


class FakeRemoteApi:
    def __init__(
        self,
        *,
        mqtt_endpoint: str = "mqtt.nrfcloud.com",
        topic_prefix: str = "prod/tenant-1234/",
        fail_issue: bool = False,
    ) -> None:
        self.account = AccountInfo.from_topic_prefix(mqtt_endpoint=mqtt_endpoint, topic_prefix=topic_prefix)
        self.fail_issue = fail_issue
        self.issued: list[RemoteDeviceIdentity] = []
        self.closed = False
        self._counter = itertools.count(1)

    def fetch_account_info(self) -> AccountInfo:
        return self.account

    def issue_device_identity(self, account: AccountInfo) -> RemoteDeviceIdentity:
        if self.fail_issue:
            raise RemoteApiError("POST /v1/devices/mqtt-team returned HTTP 500", status_code=500)
        n = next(self._counter)
        identity = RemoteDeviceIdentity(
            client_id=f"mqtt-team-{account.tenant_id}-{n}",
            client_cert=f"REMOTE CERT {n}",
            private_key=f"REMOTE KEY {n}",
        )
        self.issued.append(identity)
        return identity

    def close(self) -> None:
        self.closed = True


class FakeAuthority:
    def __init__(self, *, endpoint: str = "abc123-ats.iot.eu-west-1.amazonaws.com", fail_issue: bool = False) -> None:
        self.endpoint = endpoint
        self.fail_issue = fail_issue
        self.issued: list[LocalIdentity] = []
        self._counter = itertools.count(1)

    def describe_endpoint(self) -> str:
        return self.endpoint

    def issue_local_identity(self) -> LocalIdentity:
        if self.fail_issue:
            raise ControlPlaneError("CreatePolicy", "AccessDeniedException")
        n = next(self._counter)
        identity = LocalIdentity(client_cert=f"LOCAL CERT {n}", private_key=f"LOCAL KEY {n}")
        self.issued.append(identity)
        return identity
