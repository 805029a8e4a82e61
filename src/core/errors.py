"""Taxonomía de errores del bootstrap.

Por qué un módulo propio:
- El Core y los adaptadores lanzan los mismos tipos sin importarse entre sí.
- La CLI captura `BootstrapError` en un solo punto y decide el exit code.

Regla: fail fast. Ningún error se reintenta ni se recupera en silencio; la
única ausencia tolerada es `NotFound` en el secret store.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base de todos los errores esperados del bootstrap."""


class ConfigValidationError(BootstrapError):
    """La configuración (env vars / .env / flags) no pasa la validación."""


class ContextParseError(BootstrapError):
    """El documento de contexto existe pero no es un objeto JSON válido."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Couldn't parse context file: {path} ({reason})")
        self.path = path
        self.reason = reason


class ContextFileError(BootstrapError):
    """El documento de contexto no se pudo leer o escribir (permisos, disco)."""

    def __init__(self, path: str, operation: str, cause: BaseException | str) -> None:
        super().__init__(f"Couldn't {operation} context file: {path} ({cause})")
        self.path = path
        self.operation = operation
        self.cause = cause


class SecretStoreError(BootstrapError):
    """Fallo de transporte/permisos del secret store (nunca es un 'not found')."""

    def __init__(self, name: str, cause: BaseException | str) -> None:
        super().__init__(f"Secret store operation failed for parameter {name!r}: {cause}")
        self.name = name
        self.cause = cause


class RemoteApiError(BootstrapError):
    """Respuesta no exitosa o ilegible de la API remota (nRF Cloud)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ControlPlaneError(BootstrapError):
    """Fallo del control plane de AWS IoT."""

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        super().__init__(f"AWS IoT {operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
