"""CLI command for the payment gateway's return redirect."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import click

from storefront.application.dto import PaymentStatus
from storefront.infrastructure.bootstrap import open_session, payment_return_reconciler


def parse_return_params(raw: str) -> dict[str, str]:
    """Accept a full return URL or just its query string."""
    raw = raw.strip()
    query = urlsplit(raw).query if "://" in raw else raw.lstrip("?")
    return dict(parse_qsl(query, keep_blank_values=True))


@click.command("return")
@click.argument("query")
def payment_return(query: str) -> None:
    """Verify a gateway return (URL or query string) with the backend."""
    session = open_session()
    reconciler = payment_return_reconciler(session)
    result = reconciler.reconcile(parse_return_params(query))

    if result.status == PaymentStatus.SUCCESS:
        click.echo("Payment successful!")
        click.echo(result.message)
        if result.amount:
            click.echo(f"Amount: {result.amount}")
        click.echo("Next: `storefront checkout` for a new order, or view your orders online.")
        return

    click.echo("Your cart was kept: run `storefront checkout` to try again.", err=True)
    raise click.ClickException(f"Payment failed. {result.message}")
