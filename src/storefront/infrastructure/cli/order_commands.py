"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.process_order import ProcessOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap


def _parse_items(raw: str) -> list[str]:
    """Parse 'p1,p2,p2' into a list of product ids (repeats allowed)."""
    items = [part.strip() for part in raw.split(",") if part.strip()]
    if not items:
        raise click.BadParameter("Expected at least one product id.", param_hint="--items")
    return items


@click.command("place")
@click.option("--items", required=True, help="Product ids as 'id,id,...'.")
@click.option("--total", required=True, help="Order total (e.g. 99.99).")
@click.option("--email", default=None, help="Customer email.")
def order_place(items: str, total: str, email: str | None) -> None:
    """Place a new pending order."""
    product_ids = _parse_items(items)

    with bootstrap.session() as db:
        handler = PlaceOrderHandler(
            order_repo=bootstrap.order_repository(db),
            product_repo=bootstrap.product_repository(db),
        )
        try:
            order = handler.handle(
                items=product_ids, total_amount=total, customer_email=email
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} placed  (status={order.status.value})")
    click.echo(f"Total: {order.total}")
    click.echo(f"Items: {', '.join(order.items)}")


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_email}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'#':>3}  {'Product':<30}")
    click.echo(f"  {'-'*35}")
    for position, product_id in enumerate(dto.items, start=1):
        click.echo(f"  {position:>3}  {product_id:<30}")
    click.echo(f"  {'-'*35}")
    click.echo(f"  {'Order Total':<16} {dto.total:>17}")
    click.echo()
    click.echo(f"Actions: {', '.join(dto.actions) or '-'}")


@click.command("show")
@click.argument("order_id", type=int)
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    with bootstrap.session() as db:
        handler = ShowOrderHandler(order_repo=bootstrap.order_repository(db))
        try:
            dto = handler.handle(order_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("process")
@click.argument("order_id", type=int)
def order_process(order_id: int) -> None:
    """Complete a pending order."""
    with bootstrap.session() as db:
        handler = ProcessOrderHandler(order_repo=bootstrap.order_repository(db))
        try:
            processed = handler.handle(order_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if not processed:
        raise click.ClickException(f"Order #{order_id} could not be processed")
    click.echo(f"Order #{order_id} processed.")


@click.command("cancel")
@click.argument("order_id", type=int)
def order_cancel(order_id: int) -> None:
    """Cancel a pending order."""
    with bootstrap.session() as db:
        handler = CancelOrderHandler(order_repo=bootstrap.order_repository(db))
        try:
            cancelled = handler.handle(order_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if not cancelled:
        raise click.ClickException(f"Order #{order_id} could not be cancelled")
    click.echo(f"Order #{order_id} cancelled.")
