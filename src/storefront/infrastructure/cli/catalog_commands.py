"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.domain.model.product import Product
from storefront.infrastructure import bootstrap


@click.command("list")
def category_list() -> None:
    """List all categories."""
    with bootstrap.session() as db:
        categories = bootstrap.category_repository(db).find_all()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<16} {'Type':<10} {'Display name':<20}")
    click.echo("-" * 55)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<16} {c.type:<10} {c.display_name():<20}")


@click.command("list")
@click.option("--category", default=None, help="Only products in this category.")
@click.option("--search", default=None, help="Match name, brand or description.")
@click.option("--in-stock", is_flag=True, default=False, help="Only products in stock.")
def product_list(category: str | None, search: str | None, in_stock: bool) -> None:
    """List products, optionally filtered (search wins over category)."""
    with bootstrap.session() as db:
        repo = bootstrap.product_repository(db)
        if search is not None:
            products = repo.search_by_text(search)
        elif category is not None:
            products = repo.find_by_category(category)
        elif in_stock:
            products = repo.find_in_stock()
        else:
            products = repo.find_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<28} {'Name':<28} {'Type':<13} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 89)
    for p in products:
        price = p.prices[0].formatted() if p.prices else "-"
        stock = "yes" if p.in_stock else "no"
        click.echo(f"{p.id:<28} {p.name:<28} {p.type:<13} {price:>10} {stock:>6}")


def _display_product(product: Product) -> None:
    click.echo(f"{product.name}  ({product.id})")
    click.echo(f"Brand:    {product.brand}")
    click.echo(f"Category: {product.category}")
    click.echo(f"Type:     {product.process_for_display()['displayType']}")
    click.echo(f"In stock: {'yes' if product.in_stock else 'no'}")
    for price in product.prices:
        click.echo(f"Price:    {price.formatted_with_label()}")

    options = product.available_options()
    if options:
        click.echo()
        click.echo("Options:")
        for name, values in options.items():
            click.echo(f"  {name:<16} {', '.join(values)}")

    if product.gallery:
        click.echo()
        click.echo("Gallery:")
        for url in product.gallery:
            click.echo(f"  {url}")


@click.command("show")
@click.argument("product_id")
def product_show(product_id: str) -> None:
    """Show details of one product."""
    with bootstrap.session() as db:
        product = bootstrap.product_repository(db).find_by_id(product_id)

    if product is None:
        raise click.ClickException(f"Product not found: '{product_id}'")
    _display_product(product)
