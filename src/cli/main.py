"""CLI entry point (typer).

Single command: initialize the bridge context for one nRF Cloud account.

    nrfcloud-bridge-init <API_KEY> [--endpoint URL] [--reset]

All orchestration lives in `core.services.provisioning`; this module wires
the adapters and turns a `BootstrapError` into exit code 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from botocore.exceptions import BotoCoreError
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.aws_session import build_session
from adapters.context_file import JsonContextFile
from adapters.iot_authority import IotIdentityAuthority
from adapters.nrfcloud_client import NrfCloudClient
from adapters.ssm_secret_store import SsmSecretStore
from cli.ui_components import (
    build_context_table,
    build_identities_table,
    configure_logging,
    print_banner,
)
from core.config import AppSettings, load_settings
from core.domain.models import CliInput
from core.errors import BootstrapError, ConfigValidationError
from core.services.provisioning import provision

app = typer.Typer(
    add_completion=False,
    help="Initialize context for the nRF Cloud <-> AWS IoT MQTT bridge.",
)

_console = Console()


@dataclass
class Adapters:
    secrets: SsmSecretStore
    remote_api: NrfCloudClient
    authority: IotIdentityAuthority
    context_store: JsonContextFile


def build_adapters(settings: AppSettings, request: CliInput) -> Adapters:
    try:
        session = build_session(settings)
        ssm = session.client("ssm")
        iot = session.client("iot")
    except BotoCoreError as exc:
        raise ConfigValidationError(f"AWS configuration error: {exc}") from exc

    return Adapters(
        secrets=SsmSecretStore(ssm, parameter_type=settings.ssm_parameter_type),
        remote_api=NrfCloudClient.from_input(request, settings),
        authority=IotIdentityAuthority(
            iot,
            endpoint_type=settings.iot_endpoint_type,
            policy_prefix=settings.iot_policy_prefix,
        ),
        context_store=JsonContextFile(settings.context_file),
    )


@app.command()
def init(
    api_key: str = typer.Argument(..., help="Your nRF Cloud API key.", show_default=False),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="The nRF Cloud REST API host endpoint [default: https://api.nrfcloud.com].",
    ),
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Regenerate all credentials. This will regenerate your MQTT Team Device certificate.",
    ),
    context_file: Optional[Path] = typer.Option(
        None,
        "--context-file",
        help="Context document to update [default: ./cdk.context.json].",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Ensure bridge credentials exist in SSM and save the context info."""

    configure_logging(_console, verbose=verbose)
    print_banner(_console)

    try:
        settings = load_settings(context_file=context_file)
        try:
            request = CliInput(
                api_key=api_key,
                endpoint=endpoint or settings.default_endpoint,
                reset=reset,
            )
        except ValidationError as exc:
            raise ConfigValidationError(f"Invalid arguments: {exc}") from exc

        adapters = build_adapters(settings, request)
        try:
            result = provision(
                settings=settings,
                request=request,
                secrets=adapters.secrets,
                remote_api=adapters.remote_api,
                authority=adapters.authority,
                context_store=adapters.context_store,
            )
        finally:
            adapters.remote_api.close()
    except BootstrapError as exc:
        _console.print(f"[bold red]Bootstrap failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_identities_table(result))
    _console.print(build_context_table(result))
    _console.print(f"[green]Context saved to:[/green] {settings.context_file}")


def run() -> None:
    app(prog_name="nrfcloud-bridge-init")
