import click

from storefront.infrastructure.cli.catalog_commands import (
    category_list,
    product_list,
    product_show,
)
from storefront.infrastructure.cli.db_commands import db_import, db_init, db_stats
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_place,
    order_process,
    order_show,
)
from storefront.infrastructure.cli.server_commands import query, serve
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog, orders and the GraphQL API."""
    configure_logging(Settings.from_env().log_level)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def category() -> None:
    """Browse categories."""


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
db.add_command(db_init)
db.add_command(db_import)
db.add_command(db_stats)
category.add_command(category_list)
product.add_command(product_list)
product.add_command(product_show)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_process)
order.add_command(order_cancel)
cli.add_command(query)
cli.add_command(serve)
