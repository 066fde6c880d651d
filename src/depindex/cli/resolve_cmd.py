"""``depindex resolve <manifest> <root>`` - Resolve a consistent configuration.

Loads the pins declared in MANIFEST, tries each registered version of ROOT
in ascending order, and reports the first one whose transitive closure
pins every library to a single version.

Exit Codes:
    0 - Configuration resolved.
    1 - No candidate version of ROOT yields a consistent configuration.
    2 - ROOT has no registered versions, or the manifest is invalid.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from depindex.core.index import Resolution
from depindex.exceptions import ManifestError, NoSuchLibraryError
from depindex.manifest import load_manifest


def _resolution_to_json(resolution: Resolution) -> dict:
    """Convert a Resolution to a JSON-serializable dict."""
    data: dict = {
        "root": resolution.root,
        "success": resolution.success,
        "conflicts": [c.describe() for c in resolution.conflicts],
    }
    if resolution.configuration is not None:
        data["configuration"] = resolution.configuration.to_dict()["libraries"]
    return data


def _fail(message: str, output_format: str) -> NoReturn:
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}")
    sys.exit(2)


@click.command("resolve")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("root")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the resolved configuration as JSON to this path.",
)
@click.option(
    "--strict/--no-strict",
    default=False,
    help="Reject pins to versions the manifest does not declare.",
)
def resolve_command(
    manifest: str,
    root: str,
    output_format: str,
    output: str | None,
    strict: bool,
) -> None:
    """Resolve one consistent version per library reachable from ROOT.

    Exit code 0 on success, 1 if the pins are unsatisfiable, 2 if ROOT is
    unknown or MANIFEST is invalid.
    """
    try:
        index = load_manifest(manifest, strict=strict)
    except ManifestError as exc:
        _fail(str(exc), output_format)

    try:
        resolution = index.attempt(root)
    except NoSuchLibraryError as exc:
        _fail(str(exc), output_format)

    if output_format == "json":
        click.echo(json.dumps(_resolution_to_json(resolution), indent=2))
    else:
        from depindex.cli.output import print_resolution_summary
        print_resolution_summary(root, resolution.configuration, resolution.conflicts)

    if resolution.configuration is None:
        sys.exit(1)

    if output:
        out_path = Path(output)
        out_path.write_text(resolution.configuration.to_json() + "\n", encoding="utf-8")
        if output_format != "json":
            click.echo(f"\nConfiguration written to: {out_path}")
    sys.exit(0)
