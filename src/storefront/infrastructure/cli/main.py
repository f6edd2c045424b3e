import logging

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_list,
    cart_remove,
    cart_update,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.payment_commands import payment_return
from storefront.infrastructure.cli.profile_commands import (
    profile_clear,
    profile_set,
    profile_show,
)
from storefront.infrastructure.config import load_settings


@click.group()
def cli() -> None:
    """Storefront — cart, checkout and payment client"""
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def profile() -> None:
    """Manage the logged-in profile used to pre-fill checkout."""


@cli.group()
def payment() -> None:
    """Handle payment gateway returns."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_list)
cart.add_command(cart_remove)
cart.add_command(cart_update)
profile.add_command(profile_clear)
profile.add_command(profile_set)
profile.add_command(profile_show)
payment.add_command(payment_return)
cli.add_command(checkout)
