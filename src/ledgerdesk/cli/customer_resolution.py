"""CLI helpers for customer resolution and error handling."""

from __future__ import annotations

import click
from ledgerdesk.domain.customer import CustomerService
from ledgerdesk.utils.customer_resolver import resolve_customer


def resolve_customer_or_exit(
    ctx: click.Context, customer_service: CustomerService, customer: str | int
) -> int:
    """Resolve customer name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_customer(customer_service, customer)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
