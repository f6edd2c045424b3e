"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import open_session


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart."""
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<6} {'Product':<24} {'Qty':>5} {'Stock':>6} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*74}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<6} {line.name:<24} {line.quantity:>5} "
            f"{line.available_stock:>6} {line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*74}")
    click.echo(f"  {'Items':<10} {dto.item_count:>5}")
    click.echo(f"  {'Cart Total':<45} {dto.total:>29}")


@click.command("add")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price in VND (e.g. 100000).")
@click.option("--stock", required=True, type=int, help="Units available.")
@click.option("--image", "images", multiple=True, help="Image path (repeatable).")
@click.option("--category", default=None, help="Category name.")
def cart_add(
    product_id: int,
    name: str,
    price: str,
    stock: int,
    images: tuple[str, ...],
    category: str | None,
) -> None:
    """Add one unit of a product to the cart."""
    session = open_session()

    try:
        product = Product(
            id=product_id,
            name=name,
            price=Money.of(price),
            stock=stock,
            image_urls=tuple(images),
            category_name=category,
        )
        session.cart_store.add_to_cart(product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    line = session.cart_store.cart.find(product_id)
    click.echo(f"Added '{name}' to cart (quantity {line.quantity})")


@click.command("list")
def cart_list() -> None:
    """Show the cart contents and total."""
    session = open_session()
    display_cart(session.cart_store.snapshot())


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes the line).")
def cart_update(product_id: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    session = open_session()
    if not session.cart_store.is_in_cart(product_id):
        raise click.ClickException(f"Product #{product_id} is not in the cart")

    applied = session.cart_store.update_quantity(product_id, quantity)

    if applied == 0:
        click.echo(f"Product #{product_id} removed from cart")
    elif applied < quantity:
        click.echo(f"Only {applied} left in stock! Quantity set to {applied}")
    else:
        click.echo(f"Quantity of product #{product_id} set to {applied}")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def cart_remove(product_id: int) -> None:
    """Remove a product from the cart."""
    session = open_session()
    session.cart_store.remove_from_cart(product_id)
    click.echo(f"Product #{product_id} removed from cart")


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    session = open_session()
    session.cart_store.clear_cart()
    click.echo("Cart cleared.")
