import sys

import click
from flask.cli import AppGroup

from pagebuilder.application.catalog.sync_catalog import run_catalog_sync

catalog_cli = AppGroup("catalog", help="Template and section catalog commands.")


@catalog_cli.command("sync")
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Templates root (defaults to PAGEBUILDER_TEMPLATES_ROOT).",
)
def sync_command(root):
    """Sync templates, pages and sections from the template directories."""
    result = run_catalog_sync(root=root)

    if not result["success"]:
        click.echo(f"Catalog sync failed: {result['message']}", err=True)
        sys.exit(1)

    click.echo(f"Synced {result['templates']} templates.")
    for name, count in sorted(result["changes"].items()):
        click.echo(f"  {name}: {count}")
    for error in result["errors"]:
        click.echo(f"  skipped: {error}", err=True)
