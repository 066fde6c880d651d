"""Rich output formatting helpers for the depindex CLI.

Provides consistent terminal output for resolution results and version
listings.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from depindex.core.index import CandidateConflict, Configuration, VersionList

console = Console()


def print_resolution_summary(
    root: str,
    configuration: Configuration | None,
    conflicts: list[CandidateConflict],
) -> None:
    """Print dependency resolution results.

    Args:
        root: The library that was resolved.
        configuration: The resolved configuration, or None on failure.
        conflicts: Rejected candidates, in the order they were tried.
    """
    if configuration is not None:
        console.print(
            Panel(
                f"[bold green]Resolved {root} at {configuration.root_version}[/bold green]",
                title="Dependency Resolution",
            )
        )
        table = Table(show_header=True)
        table.add_column("Library", style="bold")
        table.add_column("Version")
        for name in sorted(configuration):
            style = "bold" if name == root else None
            table.add_row(name, str(configuration[name]), style=style)
        console.print(table)
        if conflicts:
            console.print(f"[dim]{len(conflicts)} lower candidate(s) rejected:[/dim]")
            for conflict in conflicts:
                console.print(f"  [dim]- {conflict.describe()}[/dim]")
    else:
        console.print(
            Panel(
                f"[bold red]No consistent configuration for {root}[/bold red]",
                title="Dependency Resolution",
            )
        )
        for conflict in conflicts:
            console.print(f"  [red]- {conflict.describe()}[/red]")


def print_versions(name: str, versions: VersionList) -> None:
    """Print the registered versions of one library, oldest first."""
    if not versions:
        console.print(f"[dim]No versions registered for {name}.[/dim]")
        return
    table = Table(title=f"{name} versions", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Version")
    for position, version in enumerate(versions, start=1):
        table.add_row(str(position), str(version))
    console.print(table)
