"""CLI command driving the checkout wizard.

Walks the draft through ADDRESS -> PAYMENT_SHIPPING -> REVIEW and then
places the order. Contact and address fields not given as options are
prompted for, pre-filled from the stored profile.
"""

from __future__ import annotations

import click

from storefront.application.dto import OrderOutcome, OrderResult
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.session import Session
from storefront.domain.exceptions import DomainException, ValidationError
from storefront.domain.model.checkout import CheckoutDraft
from storefront.domain.model.payment import PaymentMethod, ShippingMethod
from storefront.infrastructure.bootstrap import open_session, place_order_handler
from storefront.infrastructure.cli.cart_commands import display_cart


def _value(given: str | None, label: str, current: str = "") -> str:
    if given is not None:
        return given
    return click.prompt(label, default=current or None, show_default=bool(current))


def _display_field_errors(errors: dict[str, str]) -> None:
    for field_name, message in errors.items():
        click.echo(f"  {field_name}: {message}", err=True)


def _display_review(session: Session, draft: CheckoutDraft) -> None:
    cart = session.cart_store.cart
    click.echo("Review your order")
    click.echo(f"  Name:     {draft.contact.full_name}")
    click.echo(f"  Email:    {draft.contact.email}")
    click.echo(f"  Phone:    {draft.contact.phone}")
    click.echo(f"  Address:  {draft.shipping.full_address}")
    if draft.shipping.note:
        click.echo(f"  Note:     {draft.shipping.note}")
    click.echo(f"  Payment:  {draft.payment_method.backend_code}")
    click.echo(f"  Shipping: {draft.shipping_method.value} ({draft.shipping_fee})")
    click.echo()
    display_cart(session.cart_store.snapshot())
    click.echo(f"  {'Order Total':<45} {str(draft.total_amount(cart)):>29}")


def _place(handler: PlaceOrderHandler, draft: CheckoutDraft) -> OrderResult:
    try:
        return handler.handle(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("checkout")
@click.option("--full-name", default=None, help="Customer full name.")
@click.option("--email", default=None, help="Customer email.")
@click.option("--phone", default=None, help="Phone number (10-11 digits).")
@click.option("--address", default=None, help="Street address.")
@click.option("--city", default=None, help="City or province.")
@click.option("--district", default="", help="District (optional).")
@click.option("--ward", default="", help="Ward (optional).")
@click.option("--note", default="", help="Delivery note (optional).")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method.",
)
@click.option(
    "--shipping",
    type=click.Choice([m.value for m in ShippingMethod]),
    default=ShippingMethod.STANDARD.value,
    show_default=True,
    help="Shipping method.",
)
@click.option("--yes", is_flag=True, default=False, help="Place the order without confirming.")
@click.option("--no-browser", is_flag=True, default=False, help="Only print the payment URL.")
def checkout(
    full_name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
    city: str | None,
    district: str,
    ward: str,
    note: str,
    payment: str,
    shipping: str,
    yes: bool,
    no_browser: bool,
) -> None:
    """Check out the current cart."""
    session = open_session()
    draft = session.start_checkout()

    if draft.needs_cart_redirect(session.cart_store.cart):
        click.echo("Nothing to check out.")
        display_cart(session.cart_store.snapshot())
        return

    # Step 1: contact and address
    draft.update_contact(
        full_name=_value(full_name, "Full name", draft.contact.full_name),
        email=_value(email, "Email", draft.contact.email),
        phone=_value(phone, "Phone"),
    )
    draft.update_shipping(
        address=_value(address, "Address"),
        city=_value(city, "City"),
        district=district,
        ward=ward,
        note=note,
    )
    try:
        draft.next_step()
    except ValidationError as exc:
        _display_field_errors(exc.field_errors)
        raise click.ClickException(str(exc))

    # Step 2: payment and shipping
    try:
        draft.select_payment_method(payment)
        draft.select_shipping_method(shipping)
        draft.next_step()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    # Step 3: review
    _display_review(session, draft)
    if not yes:
        click.confirm("Place this order?", abort=True)

    handler = place_order_handler(session)
    result = _place(handler, draft)
    # The draft keeps the created order id, so a retry only asks for a new link.
    while (
        result.outcome == OrderOutcome.PAYMENT_LINK_FAILED
        and not yes
        and click.confirm(f"{result.message}. Retry the payment link for order #{result.order_id}?", default=True)
    ):
        result = _place(handler, draft)

    if result.outcome == OrderOutcome.CONFIRMED:
        click.echo(f"{result.message} Order #{result.order_id}, total {result.total}")
    elif result.outcome == OrderOutcome.REDIRECT:
        click.echo(f"Order #{result.order_id} created, total {result.total}")
        click.echo(f"Complete the payment at: {result.redirect_url}")
        if not no_browser:
            click.launch(result.redirect_url)
    else:
        raise click.ClickException(result.message)
