"""Account record commands: sniffing and importing transfer sheets."""

from dataclasses import replace

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account_records import AccountRecordService
from ledgerdesk.domain.account_sniffer import PRESETS, AccountRole, ExtractionOptions
from ledgerdesk.domain.entities import ACCOUNT_KINDS
from ledgerdesk.domain.errors import DomainError

ACCOUNT_TYPE_CHOICES = list(ACCOUNT_KINDS) + [role.value for role in AccountRole]


def extraction_options(func):
    """Attach the extraction policy options shared by ``sniff`` and ``import``."""
    options = [
        click.option(
            "--preset",
            type=click.Choice(sorted(PRESETS)),
            default="transfer",
            show_default=True,
            help="transfer: FROM/TO ACCOUNT sheets (5-18 digits); "
            "list: any 9-18 digit cell",
        ),
        click.option("--min-length", type=click.IntRange(min=1), help="Minimum digits"),
        click.option("--max-length", type=click.IntRange(min=1), help="Maximum digits"),
        click.option(
            "--keep-unknown/--discard-unknown",
            default=None,
            help="Keep numbers found outside FROM/TO columns",
        ),
        click.option(
            "--strict/--lenient",
            default=None,
            help="Require 'account' in FROM/TO headers",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_extraction_options(
    ctx,
    preset: str,
    min_length: int | None,
    max_length: int | None,
    keep_unknown: bool | None,
    strict: bool | None,
) -> ExtractionOptions:
    """Start from a preset and apply any explicit overrides."""
    overrides = {
        "min_length": min_length,
        "max_length": max_length,
        "keep_unknown": keep_unknown,
        "require_account_keyword": strict,
    }
    options = replace(
        PRESETS[preset], **{key: value for key, value in overrides.items() if value is not None}
    )
    if options.min_length > options.max_length:
        click.echo("Error: --min-length cannot exceed --max-length", err=True)
        ctx.exit(1)
    return options


@click.group()
def accounts_group():
    """Collect and manage bank account records."""
    pass


@accounts_group.command("sniff")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@extraction_options
@click.pass_context
def sniff_accounts(ctx, file: str, **kwargs):
    """Show the account numbers a file contains, without saving them."""
    options = build_extraction_options(ctx, **kwargs)
    try:
        accounts = AccountRecordService(ctx.obj["db"]).sniff_file(file, options)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found: could not find FROM ACCOUNT or TO ACCOUNT numbers in the file.")
        return

    click.echo(f"\nFound {len(accounts)} account(s):")
    for account in accounts:
        click.echo(f"  {account.account_number:18s} | {account.role.value}")


@accounts_group.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@extraction_options
@click.option(
    "--account-type",
    type=click.Choice(ACCOUNT_TYPE_CHOICES),
    help="Account type for every new record (defaults to the detected role)",
)
@click.pass_context
def import_accounts(ctx, file: str, account_type: str | None, **kwargs):
    """Import account numbers from a CSV or Excel file.

    Examples:
        ledgerdesk accounts import transfers.xlsx
        ledgerdesk accounts import customers.csv --preset list --account-type Savings
    """
    options = build_extraction_options(ctx, **kwargs)
    service = AccountRecordService(ctx.obj["db"])

    try:
        result = service.import_file(file, options, default_account_type=account_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if result.extracted == 0:
        click.echo("No accounts found in the file.")
        return
    if result.imported == 0:
        click.echo("No new accounts: all accounts in the file already exist.")
        return

    click.echo("\nImport complete:")
    click.echo(f"  Found: {result.extracted} account(s)")
    click.echo(f"  Added: {result.imported} new account(s)")
    click.echo(f"  Skipped: {result.skipped_existing} existing")


@accounts_group.command("add")
@click.argument("account_number")
@click.option(
    "--type", "account_type", type=click.Choice(ACCOUNT_TYPE_CHOICES), default="Savings",
    show_default=True, help="Account type",
)
@click.option("--name", help="Account holder name")
@click.option("--aadhar", help="Aadhar number")
@click.option("--mobile", help="Mobile number")
@click.option("--address", help="Address")
@click.option("--remarks", help="Remarks")
@click.pass_context
def add_account(ctx, account_number: str, account_type: str, name, aadhar, mobile, address, remarks):
    """Add an account record by hand."""
    service = AccountRecordService(ctx.obj["db"])
    try:
        record_id = service.create_record(
            account_number=account_number,
            account_type=account_type,
            name=name,
            aadhar_number=aadhar,
            mobile_number=mobile,
            address=address,
            remarks=remarks,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added account record {record_id}")


@accounts_group.command("list")
@click.option("--search", help="Filter by number, name, Aadhar, mobile or address")
@click.pass_context
def list_accounts(ctx, search: str | None):
    """List account records, newest first."""
    records = AccountRecordService(ctx.obj["db"]).list_records(search=search)
    if not records:
        click.echo("No account records found.")
        return

    click.echo(f"\nAccount records ({len(records)}):")
    click.echo("-" * 72)
    for record in records:
        click.echo(
            f"ID: {record.id:4d} | {record.account_number:18s} | {record.account_type:17s} | "
            f"{record.name or ''}"
        )


@accounts_group.command("update")
@click.argument("record_id", type=int)
@click.option("--number", "account_number", help="New account number")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPE_CHOICES), help="Account type")
@click.option("--name", help="Account holder name (empty string clears)")
@click.option("--aadhar", help="Aadhar number (empty string clears)")
@click.option("--mobile", help="Mobile number (empty string clears)")
@click.option("--address", help="Address (empty string clears)")
@click.option("--remarks", help="Remarks (empty string clears)")
@click.pass_context
def update_account(ctx, record_id: int, account_number, account_type, name, aadhar, mobile, address, remarks):
    """Update an account record."""
    service = AccountRecordService(ctx.obj["db"])
    try:
        service.update_record(
            record_id,
            account_number=account_number,
            account_type=account_type,
            name=name,
            aadhar_number=aadhar,
            mobile_number=mobile,
            address=address,
            remarks=remarks,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account record {record_id}")


@accounts_group.command("delete")
@click.argument("record_id", type=int)
@click.pass_context
def delete_account(ctx, record_id: int):
    """Delete an account record."""
    try:
        AccountRecordService(ctx.obj["db"]).delete_record(record_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account record {record_id}")


@accounts_group.command("export")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--search", help="Only export matching records")
@click.pass_context
def export_accounts(ctx, file: str, search: str | None):
    """Export account records to a CSV or Excel (.xlsx) file."""
    try:
        count = AccountRecordService(ctx.obj["db"]).export_records(file, search=search)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Exported {count} account record(s) to {file}")


def register_commands(cli):
    """Register account record commands with main CLI."""
    cli.add_command(accounts_group, name="accounts")
