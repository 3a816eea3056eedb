"""Terminal output for the wizard."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from partman_wizard.wizard.base import PartitioningPlan


def maintenance_query(extension_schema: str = "partman") -> str:
    """Statement the operator should schedule to keep partitions ahead of the data."""
    return f"SELECT {extension_schema}.run_maintenance();"


class ConsoleDisplay:
    """Renders wizard messages with rich.

    Neutral messages are plain, successes green, failures red.
    """

    def __init__(self, console: Console | None = None, extension_schema: str = "partman"):
        self.console = console or Console()
        self.extension_schema = extension_schema

    def welcome(self) -> None:
        self.console.print("\n[green]Welcome to the PostgreSQL Partition Wizard![/green]\n")
        self.console.print(
            "This tool will assist you in partitioning tables in your PostgreSQL database."
        )
        self.console.print("\n[bold]IMPORTANT:[/bold]")
        self.console.print(
            "[yellow] - Your PostgreSQL instance must have pg_partman available "
            "for this wizard to work.[/yellow]"
        )
        self.console.print(
            "[yellow] - The selected table is copied into a new partitioned table "
            "based on your settings.[/yellow]"
        )
        self.console.print(
            "[yellow] - No existing foreign keys or indices will be altered. "
            "Migrating data empties the original table.[/yellow]\n"
        )
        self.console.print(
            "[red]WARNING: This tool could potentially damage your database. "
            "Ensure you have backups before proceeding![/red]\n"
        )

    def info(self, message: str) -> None:
        self.console.print(f"\n{message}", markup=False, highlight=False)

    def success(self, message: str) -> None:
        self.console.print(f"\n{message}", style="green", markup=False, highlight=False)

    def failure(self, message: str) -> None:
        self.console.print(f"\n{message}", style="red", markup=False, highlight=False)

    def change_set(self, plan: PartitioningPlan) -> None:
        """Summarise what the wizard is about to create."""
        self.console.print("\n[green]Proposed Changes:[/green]\n")
        rows = [
            ("Source Table:", plan.source_table),
            ("Partitioned Table:", plan.destination_table),
            ("Partitioning Column:", plan.partition_column),
            ("Partition Interval:", plan.interval),
        ]
        for label, value in rows:
            self.console.print(f"{label:<21}[cyan]{escape(str(value))}[/cyan]", highlight=False)
        self.console.print("\n[yellow]Please review the proposed changes carefully.[/yellow]")

    def footer(self) -> None:
        """Remind the operator that pg_partman needs scheduled maintenance."""
        self.console.print(
            "\n[yellow]IMPORTANT: To ensure proper operation, pg_partman requires regular "
            "maintenance. Don't forget to set up a cron job to run at least once per day "
            "(or more frequently) to keep your partitions up-to-date. "
            "Use the following command:[/yellow]"
        )
        query = maintenance_query(self.extension_schema)
        self.console.print(f"\n[yellow]{escape(query)}[/yellow]\n")
        self.console.print("[blue]I hope you enjoyed your partitioning experience![/blue]")
