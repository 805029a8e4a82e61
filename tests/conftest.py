from __future__ import annotations

from pathlib import Path

import pytest

from adapters.context_file import JsonContextFile
from core.config import AppSettings
from fakes import FakeAuthority, FakeRemoteApi, InMemorySecretStore


@pytest.fixture
def context_path(tmp_path: Path) -> Path:
    return tmp_path / "cdk.context.json"


@pytest.fixture
def settings(context_path: Path) -> AppSettings:
    return AppSettings(context_file=context_path)


@pytest.fixture
def secrets() -> InMemorySecretStore:
    return InMemorySecretStore()


@pytest.fixture
def remote_api() -> FakeRemoteApi:
    return FakeRemoteApi()


@pytest.fixture
def authority() -> FakeAuthority:
    return FakeAuthority()


@pytest.fixture
def context_store(context_path: Path) -> JsonContextFile:
    return JsonContextFile(context_path)
