"""CLI commands for checkout and placed orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    catalog_reader,
    order_repository,
    shopper_session,
)
from storefront.infrastructure.cli.options import fail
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import bind_session


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}")
    click.echo(f"Session:  {dto.session_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Options':<18} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*66}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.variants:<18} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Order Total (' + dto.currency + ')':<45} {dto.total:>21}")


@click.command("checkout")
@click.option("--session", "session_id", required=True, help="Shopper session ID.")
@click.pass_obj
def checkout(settings: Settings, session_id: str) -> None:
    """Turn the cart into an order."""
    bind_session(session_id)
    try:
        with shopper_session(settings, session_id) as session:
            dto = session.checkout()
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show details of a placed order."""
    catalog = catalog_reader(settings)
    handler = ShowOrderHandler(order_repo=order_repository(settings), catalog=catalog)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise fail(exc)
    finally:
        catalog.close()

    _display_order(dto)
