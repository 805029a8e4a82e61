"""Lanzador local de `nrfcloud-bridge-init` desde un checkout.

Uso:
    python -m main <API_KEY> [--endpoint URL] [--reset] [--context-file PATH]

Escribe `cdk.context.json` en el directorio actual (o en `--context-file`),
igual que el script instalado. Solo añade `src/` al path antes de importar la
CLI, porque los paquetes `cli`, `core` y `adapters` viven ahí.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
