"""Customer ledger commands."""

import click
from ledgerdesk.cli.customer_resolution import resolve_customer_or_exit
from ledgerdesk.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.customer import CustomerService
from ledgerdesk.domain.entities import TransactionType
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.ledger import LedgerService, compute_totals, total_balance
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.currency import format_currency
from ledgerdesk.utils.date_parser import parse_date


@click.group()
def ledger_group():
    """Record and review customer ledger entries."""
    pass


@ledger_group.command("add")
@click.argument("customer", metavar="CUSTOMER")
@click.option(
    "--type",
    "transaction_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType]),
    help="Entry side",
)
@click.option("--amount", required=True, help="Amount (positive)")
@click.option("--date", "date_str", help="Entry date (defaults to today)")
@click.option("--description", help="Description")
@click.option(
    "--transfer",
    is_flag=True,
    help="Cap the amount at the customer's current opposite-side total",
)
@click.pass_context
def add_entry(
    ctx,
    customer: str,
    transaction_type: str,
    amount: str,
    date_str: str | None,
    description: str | None,
    transfer: bool,
):
    """Add a debit or credit entry to a customer's ledger.

    Examples:
        ledgerdesk ledger add "Ramesh Kumar" --type debit --amount 500
        ledgerdesk ledger add 3 --type credit --amount 200 --transfer
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)

    txn_date = None
    if date_str:
        try:
            txn_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    service = LedgerService(db)
    try:
        transaction_id = service.record_transaction(
            customer_id=customer_id,
            transaction_type=transaction_type,
            amount=parsed_amount,
            transaction_date=txn_date,
            description=description,
            transfer=transfer,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    entry = db.get_customer_transaction(transaction_id)
    click.echo(f"Recorded {entry.type.value} {format_currency(entry.amount)} (ID: {transaction_id})")
    click.echo(f"  Balance: {format_currency(service.get_balance(customer_id))}")


@ledger_group.command("show")
@click.argument("customer", metavar="CUSTOMER")
@period_options
@click.pass_context
def show_ledger(ctx, customer: str, start_date: str | None, end_date: str | None, **kwargs):
    """Show a customer's ledger entries and totals.

    Examples:
        ledgerdesk ledger show "Ramesh Kumar"
        ledgerdesk ledger show 3 --this-month
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    transactions = LedgerService(db).list_transactions(customer_id, start, end)
    if not transactions:
        click.echo("No ledger entries found.")
        return

    click.echo(f"\n{'ID':>5s} | {'Date':10s} | {'Type':6s} | {'Amount':>12s} | Description")
    click.echo("-" * 72)
    for txn in transactions:
        click.echo(
            f"{txn.id:5d} | {txn.date.isoformat():10s} | {txn.type.value:6s} | "
            f"{format_currency(txn.amount):>12s} | {txn.description or ''}"
        )

    totals = compute_totals(transactions)
    click.echo("-" * 72)
    click.echo(f"Debit: {format_currency(totals.debit_total)}")
    click.echo(f"Credit: {format_currency(totals.credit_total)}")
    click.echo(f"Net: {format_currency(totals.net_balance)} ({totals.status.value})")


@ledger_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_entry(ctx, transaction_id: int):
    """Delete a ledger entry by ID."""
    try:
        LedgerService(ctx.obj["db"]).delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted ledger entry {transaction_id}")


@ledger_group.command("summary")
@click.pass_context
def book_summary(ctx):
    """Show every customer's totals and the combined balance."""
    balances = LedgerService(ctx.obj["db"]).get_book_summary()
    if not balances:
        click.echo("No customers found.")
        return

    click.echo(f"\n{'Customer':24s} | {'Debit':>12s} | {'Credit':>12s} | {'Balance':>12s}")
    click.echo("-" * 70)
    for row in balances:
        click.echo(
            f"{row.customer.name:24s} | {format_currency(row.debit_total):>12s} | "
            f"{format_currency(row.credit_total):>12s} | {format_currency(row.closing_balance):>12s}"
        )
    click.echo("-" * 70)
    click.echo(f"Total balance: {format_currency(total_balance(balances))}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
