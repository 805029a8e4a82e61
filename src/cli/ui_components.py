"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El logging también sale por Rich para que progreso y resumen compartan consola.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.provisioning import ProvisioningResult


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    """Instala un `RichHandler` en el root logger.

    `verbose` baja el nivel a DEBUG; botocore/httpx se quedan en WARNING para no
    inundar la salida.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, rich_tracebacks=verbose)],
        force=True,
    )
    for noisy in ("botocore", "boto3", "urllib3", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def print_banner(console: Console) -> None:
    title = Text("nRF Cloud MQTT Bridge", style="bold cyan")
    subtitle = Text("Bootstrap de credenciales • AWS IoT • contexto CDK", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_identities_table(result: ProvisioningResult) -> Table:
    """Tabla con el estado de cada identidad (reutilizada/emitida)."""

    table = Table(title="Identities")
    table.add_column("Identity", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("SSM parameters", style="magenta")

    for outcome in (result.remote, result.local):
        status = Text("issued", style="yellow") if outcome.issued else Text("reused", style="green")
        table.add_row(outcome.slot.label, status, ", ".join(outcome.slot.params.values()))
    return table


def build_context_table(result: ProvisioningResult) -> Table:
    """Tabla con los campos escritos en el documento de contexto."""

    table = Table(title="Context info")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in result.context.to_document().items():
        table.add_row(key, value)
    return table
