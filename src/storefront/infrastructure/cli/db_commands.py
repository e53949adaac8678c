"""CLI commands for the database and catalog import."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.import_catalog import CatalogImporter
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap


@click.command("init")
def db_init() -> None:
    """Create the tables if they do not exist yet."""
    with bootstrap.session() as db:
        click.echo(f"Database ready at {db.db_path}")


@click.command("import")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, default=False, help="Re-import existing entities.")
def db_import(file: Path, force: bool) -> None:
    """Import categories and products from a JSON seed FILE."""
    with bootstrap.session() as db:
        importer = CatalogImporter(
            category_repo=bootstrap.category_repository(db),
            product_repo=bootstrap.product_repository(db),
            transaction=db.transaction,
            force=force,
        )
        if not force and not importer.is_import_needed():
            click.echo("Catalog already populated; use --force to import anyway.")
            return

        try:
            report = importer.handle(CatalogImporter.load(file))
        except DomainException as exc:
            raise click.ClickException(str(exc))

    for message in report.messages:
        click.echo(f"  {message}")
    click.echo(
        f"Imported {report.imported}, skipped {report.skipped}, failed {report.failed}"
    )
    if not report.succeeded:
        raise click.ClickException("Import finished with errors")


@click.command("stats")
def db_stats() -> None:
    """Show row counts per table."""
    with bootstrap.session() as db:
        counts = db.table_counts()

    click.echo(f"{'Table':<20} {'Rows':>8}")
    click.echo("-" * 29)
    for table, count in counts.items():
        click.echo(f"{table:<20} {count:>8}")
