"""Main CLI application entry point."""

from __future__ import annotations

from typing import Annotated

import typer

from partman_wizard import __version__
from partman_wizard.cli.common import console, setup_logging
from partman_wizard.cli.display import ConsoleDisplay
from partman_wizard.cli.prompts import ConsolePrompter
from partman_wizard.core.config import Settings, get_settings
from partman_wizard.core.logging import get_logger
from partman_wizard.wizard.sequencer import PartitionWizard

logger = get_logger(__name__)

app = typer.Typer(
    name="partman-wizard",
    help=(
        "This utility will help you with partitioning your tables in PostgreSQL databases.\n\n"
        "Your postgres instance must have pg_partman extension installed."
    ),
    add_completion=False,
)


def build_wizard(settings: Settings) -> PartitionWizard:
    return PartitionWizard(
        ConsolePrompter(console),
        ConsoleDisplay(console, extension_schema=settings.extension_schema),
        default_connection_string=settings.default_connection_string,
        schema=settings.schema_name,
        extension_schema=settings.extension_schema,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"partman-wizard {__version__}")
        raise typer.Exit()


@app.command()
def wizard(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """This utility will help you with partitioning your tables in PostgreSQL databases.

    Your postgres instance must have pg_partman extension installed.
    """
    settings = get_settings()
    setup_logging(settings)

    partition_wizard = build_wizard(settings)
    try:
        outcome = partition_wizard.run()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Aborted.[/yellow]")
        raise typer.Exit(1) from None
    except Exception as e:
        logger.error("wizard_failed", error=str(e), exc_info=True)
        console.print(f"\nError: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1) from e
    finally:
        partition_wizard.close()

    raise typer.Exit(outcome.exit_code)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
