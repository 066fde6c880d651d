"""``depindex versions <manifest> <name>`` - List registered versions.

Exit Codes:
    0 - At least one version is registered for NAME.
    2 - NAME has no registered versions, or the manifest is invalid.
"""

from __future__ import annotations

import json
import sys

import click

from depindex.exceptions import ManifestError
from depindex.manifest import load_manifest


@click.command("versions")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def versions_command(manifest: str, name: str, output_format: str) -> None:
    """List the versions of NAME declared in MANIFEST, oldest first."""
    try:
        index = load_manifest(manifest)
    except ManifestError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(2)

    versions = index.versions(name)
    if output_format == "json":
        click.echo(json.dumps({"name": name, "versions": [str(v) for v in versions]}))
    else:
        from depindex.cli.output import print_versions
        print_versions(name, versions)

    sys.exit(0 if versions else 2)
