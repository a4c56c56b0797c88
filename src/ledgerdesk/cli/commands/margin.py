"""Service margin calculator command."""

import click
from ledgerdesk.domain import margins
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.currency import format_currency


@click.command("margin")
@click.option("--pan-cards", type=click.IntRange(min=0), default=0, help="PAN cards processed")
@click.option("--passports", type=click.IntRange(min=0), default=0, help="Passports processed")
@click.option("--banking-amount", default="0", help="Amount handled through banking services")
@click.pass_context
def margin(ctx, pan_cards: int, passports: int, banking_amount: str):
    """Calculate the margin earned on counter services.

    Examples:
        ledgerdesk margin --pan-cards 4 --passports 1
        ledgerdesk margin --banking-amount 250000
    """
    try:
        amount = parse_amount(banking_amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    pan_margin = margins.pan_card_margin(pan_cards)
    passport_margin = margins.passport_margin(passports)
    banking_margin = margins.banking_services_margin(amount)

    click.echo(f"PAN cards:        {format_currency(pan_margin)}")
    click.echo(f"Passports:        {format_currency(passport_margin)}")
    click.echo(f"Banking services: {format_currency(banking_margin)}")
    click.echo(f"Total margin:     {format_currency(pan_margin + passport_margin + banking_margin)}")


def register_commands(cli):
    """Register margin command with main CLI."""
    cli.add_command(margin)
