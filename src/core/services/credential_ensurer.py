"""Ensure-or-create for credential triples kept in the secret store.

A single parameterized procedure covers both the nRF Cloud device identity
and the local AWS IoT client identity. The stored fields are read together,
treated as one atomic unit (a partial triple counts as absent), and either
returned untouched or replaced as a whole by a freshly issued identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, Optional, TypeVar

from core.domain.lookup import Found, LookupFailed, NotFound
from core.domain.models import CertificateCredentials
from core.errors import SecretStoreError
from core.interfaces.secret_store import SecretStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
IdentityT = TypeVar("IdentityT", bound=CertificateCredentials)

StoredFields = dict[str, Optional[str]]


def ensure(
    *,
    lookup: Callable[[], T],
    issue: Callable[[], T],
    persist: Callable[[T], None],
    is_complete: Callable[[T], bool],
    reset: bool,
) -> tuple[T, bool]:
    """Return `(identity, issued)`.

    The existing value is returned unchanged (no side effects) when it is
    complete and no reset was requested. Otherwise a new one is issued and
    persisted before being returned.
    """

    existing = lookup()
    if is_complete(existing) and not reset:
        return existing, False

    fresh = issue()
    persist(fresh)
    return fresh, True


@dataclass(frozen=True)
class IdentitySlot(Generic[IdentityT]):
    """Where an identity lives in the secret store.

    `params` maps each model field (`client_cert`, `private_key`, ...) to the
    name of the parameter holding it.
    """

    label: str
    model: type[IdentityT]
    params: Mapping[str, str]

    def lookup(self, store: SecretStore) -> StoredFields:
        values: StoredFields = {}
        for field, name in self.params.items():
            result = store.get(name)
            if isinstance(result, Found):
                values[field] = result.value
            elif isinstance(result, NotFound):
                logger.debug("Parameter %s not found", name)
                values[field] = None
            elif isinstance(result, LookupFailed):
                raise SecretStoreError(name, result.cause)
            else:  # pragma: no cover
                raise TypeError(f"Unexpected lookup result: {result!r}")
        return values

    @staticmethod
    def is_complete(values: StoredFields) -> bool:
        # Empty strings count as missing.
        return all(values.values())

    def persist(self, store: SecretStore, identity: IdentityT) -> None:
        # Every field is rewritten, including the ones that did not change.
        for field, name in self.params.items():
            store.put(name, getattr(identity, field), overwrite=True)

    def to_identity(self, values: StoredFields) -> IdentityT:
        return self.model.model_validate(values)

    def describe(self) -> str:
        return " and ".join(self.params.values())


@dataclass(frozen=True)
class EnsureOutcome(Generic[IdentityT]):
    slot: IdentitySlot[IdentityT]
    identity: IdentityT
    issued: bool


def ensure_identity(
    *,
    slot: IdentitySlot[IdentityT],
    store: SecretStore,
    issue: Callable[[], IdentityT],
    reset: bool,
) -> EnsureOutcome[IdentityT]:
    """Ensure the identity behind `slot` exists, issuing one if needed."""

    def _issue() -> StoredFields:
        logger.info("Generating new %s credentials", slot.label)
        identity = issue()
        return {field: getattr(identity, field) for field in slot.params}

    def _persist(values: StoredFields) -> None:
        slot.persist(store, slot.to_identity(values))

    values, issued = ensure(
        lookup=lambda: slot.lookup(store),
        issue=_issue,
        persist=_persist,
        is_complete=slot.is_complete,
        reset=reset,
    )

    if issued:
        logger.info("Saved new %s credentials to %s", slot.label, slot.describe())
    else:
        logger.info("Existing %s credentials were present in %s", slot.label, slot.describe())

    return EnsureOutcome(slot=slot, identity=slot.to_identity(values), issued=issued)
