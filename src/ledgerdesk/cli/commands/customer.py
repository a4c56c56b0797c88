"""Customer management commands."""

import click
from ledgerdesk.cli.customer_resolution import resolve_customer_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.customer import CustomerService
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.ledger import LedgerService
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.currency import format_currency
from ledgerdesk.utils.date_parser import parse_date


@click.group()
def customer_group():
    """Manage ledger customers."""
    pass


def _parse_opening(ctx, opening_balance: str | None, opening_date: str | None):
    balance = None
    when = None
    try:
        if opening_balance is not None:
            balance = parse_amount(opening_balance)
        if opening_date is not None:
            when = parse_date(opening_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    return balance, when


@customer_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--phone", required=True, help="Phone number")
@click.option("--address", default="", help="Address")
@click.option("--description", help="Notes about the customer")
@click.option("--opening-balance", help="Balance carried in (e.g. 1500 or -250)")
@click.option("--opening-date", help="Date of the opening balance (defaults to today)")
@click.pass_context
def create_customer(
    ctx,
    name: str,
    phone: str,
    address: str,
    description: str | None,
    opening_balance: str | None,
    opening_date: str | None,
):
    """Create a new customer.

    Examples:
        ledgerdesk customer create "Ramesh Kumar" --phone 9876543210
        ledgerdesk customer create "Sita Devi" --phone 9123456780 --opening-balance 500
    """
    service = CustomerService(ctx.obj["db"])
    balance, when = _parse_opening(ctx, opening_balance, opening_date)

    try:
        customer_id = service.create_customer(
            name=name,
            phone=phone,
            address=address,
            description=description,
            opening_balance=balance if balance is not None else 0,
            opening_date=when,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created customer '{name.strip()}' (ID: {customer_id})")


@customer_group.command("list")
@click.option("--search", help="Filter by name or phone")
@click.pass_context
def list_customers(ctx, search: str | None):
    """List customers with their balances."""
    db = ctx.obj["db"]
    customers = CustomerService(db).list_customers(search=search)
    if not customers:
        click.echo("No customers found.")
        return

    ledger = LedgerService(db)
    click.echo("\nCustomers:")
    click.echo("-" * 72)
    for customer in customers:
        balance = ledger.get_balance(customer.id)
        click.echo(
            f"ID: {customer.id:3d} | {customer.name:24s} | {customer.phone:12s} | "
            f"{format_currency(balance):>12s}"
        )


@customer_group.command("show")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def show_customer(ctx, customer: str):
    """Show customer details and ledger totals.

    CUSTOMER can be a customer name or ID.
    """
    db = ctx.obj["db"]
    service = CustomerService(db)
    customer_id = resolve_customer_or_exit(ctx, service, customer)
    customer_obj = service.require_customer(customer_id)
    ledger = LedgerService(db)
    totals = ledger.get_totals(customer_id)

    click.echo(f"\n{customer_obj.name} (ID: {customer_obj.id})")
    click.echo("-" * 40)
    click.echo(f"  Phone: {customer_obj.phone}")
    if customer_obj.address:
        click.echo(f"  Address: {customer_obj.address}")
    if customer_obj.description:
        click.echo(f"  Description: {customer_obj.description}")
    click.echo(
        f"  Opening balance: {format_currency(customer_obj.opening_balance)} "
        f"on {customer_obj.opening_date}"
    )
    click.echo(f"  Total debit: {format_currency(totals.debit_total)}")
    click.echo(f"  Total credit: {format_currency(totals.credit_total)}")
    click.echo(f"  Net balance: {format_currency(totals.net_balance)} ({totals.status.value})")
    click.echo(f"  Closing balance: {format_currency(ledger.get_balance(customer_id))}")


@customer_group.command("update")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.option("--description", help="New description")
@click.option("--opening-balance", help="New opening balance")
@click.option("--opening-date", help="New opening date")
@click.pass_context
def update_customer(
    ctx,
    customer: str,
    name: str | None,
    phone: str | None,
    address: str | None,
    description: str | None,
    opening_balance: str | None,
    opening_date: str | None,
):
    """Update customer details.

    Only the options given are changed.

    Examples:
        ledgerdesk customer update "Ramesh Kumar" --phone 9000000000
        ledgerdesk customer update 3 --opening-balance 0
    """
    service = CustomerService(ctx.obj["db"])
    customer_id = resolve_customer_or_exit(ctx, service, customer)
    balance, when = _parse_opening(ctx, opening_balance, opening_date)

    try:
        service.update_customer(
            customer_id,
            name=name,
            phone=phone,
            address=address,
            description=description,
            opening_balance=balance,
            opening_date=when,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated customer {customer_id}")


@customer_group.command("delete")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_customer(ctx, customer: str, yes: bool):
    """Delete a customer and all of their ledger entries.

    CUSTOMER can be a customer name or ID.
    """
    db = ctx.obj["db"]
    service = CustomerService(db)
    customer_id = resolve_customer_or_exit(ctx, service, customer)
    customer_obj = service.require_customer(customer_id)
    entry_count = len(db.list_customer_transactions(customer_id))

    if not yes and not click.confirm(
        f"Delete customer '{customer_obj.name}' and {entry_count} ledger "
        f"entr{'y' if entry_count == 1 else 'ies'}?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete_customer(customer_id)
    click.echo(f"Deleted customer '{customer_obj.name}'")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
