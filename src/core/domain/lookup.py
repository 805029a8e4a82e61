"""Resultado tri-estado de una lectura del secret store.

`NotFound` es el único resultado que habilita la regeneración de una
identidad. `LookupFailed` (permisos, red, throttling) debe propagarse: tratarlo
como ausencia regeneraría credenciales que sí existen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Found:
    name: str
    value: str


@dataclass(frozen=True)
class NotFound:
    name: str


@dataclass(frozen=True)
class LookupFailed:
    name: str
    cause: Union[BaseException, str]


SecretLookup = Union[Found, NotFound, LookupFailed]
