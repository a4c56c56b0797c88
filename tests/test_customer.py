"""Tests for customer management."""

from datetime import date
from decimal import Decimal

import pytest
from ledgerdesk.cli.main import cli
from ledgerdesk.domain.errors import NotFoundError, ValidationError
from ledgerdesk.utils.customer_resolver import resolve_customer


def test_create_customer(customer_service):
    """Test creating a customer through the service."""
    customer_id = customer_service.create_customer(
        name="  Sita Devi ",
        phone="9123456780",
        opening_balance="250.50",
        opening_date=date(2024, 3, 1),
    )

    customer = customer_service.get_customer(customer_id)
    assert customer.name == "Sita Devi"
    assert customer.phone == "9123456780"
    assert customer.address == ""
    assert customer.opening_balance == Decimal("250.50")
    assert customer.opening_date == date(2024, 3, 1)


def test_create_customer_defaults_opening_date(customer_service):
    """Test that opening date defaults to today."""
    customer_id = customer_service.create_customer(name="Gopal", phone="9000000001")

    customer = customer_service.get_customer(customer_id)
    assert customer.opening_date == date.today()
    assert customer.opening_balance == Decimal("0")


@pytest.mark.parametrize(
    "name,phone,message",
    [
        ("", "9000000001", "Customer name is required"),
        ("   ", "9000000001", "Customer name is required"),
        ("Gopal", "", "Customer phone is required"),
    ],
)
def test_create_customer_requires_name_and_phone(customer_service, name, phone, message):
    """Test that blank name or phone is rejected."""
    with pytest.raises(ValidationError, match=message):
        customer_service.create_customer(name=name, phone=phone)


def test_list_customers_search(customer_service, sample_customer):
    """Test searching customers by name (any case) and phone."""
    customer_service.create_customer(name="Anil Sharma", phone="9111111111")

    assert [c.name for c in customer_service.list_customers()] == ["Anil Sharma", "Ramesh Kumar"]
    assert [c.name for c in customer_service.list_customers("ramesh")] == ["Ramesh Kumar"]
    assert [c.name for c in customer_service.list_customers("91111")] == ["Anil Sharma"]
    assert customer_service.list_customers("nobody") == []


def test_update_customer(customer_service, sample_customer):
    """Test that only given fields change."""
    customer_service.update_customer(
        sample_customer.id, phone="9000000000", address=None, opening_balance="100"
    )

    updated = customer_service.get_customer(sample_customer.id)
    assert updated.phone == "9000000000"
    assert updated.address == "12 Station Road"
    assert updated.opening_balance == Decimal("100")


def test_update_customer_rejects_blank_name(customer_service, sample_customer):
    """Test that a blank name cannot be set."""
    with pytest.raises(ValidationError):
        customer_service.update_customer(sample_customer.id, name="  ")


def test_update_customer_rejects_unknown_field(customer_service, sample_customer):
    """Test that unknown fields are rejected."""
    with pytest.raises(ValidationError, match="balance"):
        customer_service.update_customer(sample_customer.id, balance=5)


def test_update_missing_customer(customer_service):
    """Test updating a customer that doesn't exist."""
    with pytest.raises(NotFoundError, match="Customer 999 not found"):
        customer_service.update_customer(999, name="X")


def test_delete_customer_removes_entries(customer_service, ledger_service, sample_ledger, temp_db):
    """Test that deleting a customer deletes its ledger entries."""
    customer_service.delete_customer(sample_ledger.id)

    assert customer_service.get_customer(sample_ledger.id) is None
    assert temp_db.list_customer_transactions(sample_ledger.id) == []


def test_resolve_customer_by_id_and_name(customer_service, sample_customer):
    """Test resolving customers by ID, ID string and exact name."""
    assert resolve_customer(customer_service, sample_customer.id) == sample_customer.id
    assert resolve_customer(customer_service, str(sample_customer.id)) == sample_customer.id
    assert resolve_customer(customer_service, "Ramesh Kumar") == sample_customer.id


def test_resolve_customer_not_found(customer_service, sample_customer):
    """Test resolving unknown customers."""
    with pytest.raises(NotFoundError):
        resolve_customer(customer_service, "Nobody")
    with pytest.raises(NotFoundError):
        resolve_customer(customer_service, 999)


def test_resolve_customer_ambiguous_name(customer_service, sample_customer):
    """Test that a shared name must be disambiguated by ID."""
    customer_service.create_customer(name="Ramesh Kumar", phone="9222222222")

    with pytest.raises(ValueError, match="ambiguous"):
        resolve_customer(customer_service, "Ramesh Kumar")


def test_create_customer_cli(cli_runner, temp_db, reopen_db):
    """Test creating a customer via CLI."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "customer",
            "create",
            "Sita Devi",
            "--phone",
            "9123456780",
            "--opening-balance",
            "1,500",
            "--opening-date",
            "01/04/2024",
        ],
    )

    assert result.exit_code == 0
    assert "Created customer 'Sita Devi' (ID: 1)" in result.output

    customer = reopen_db().get_customer(1)
    assert customer.opening_balance == Decimal("1500")
    assert customer.opening_date == date(2024, 4, 1)


def test_create_customer_cli_requires_phone(cli_runner, temp_db):
    """Test that --phone is required."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "customer", "create", "Sita Devi"]
    )

    assert result.exit_code != 0


def test_create_customer_cli_bad_opening_balance(cli_runner, temp_db):
    """Test that a malformed opening balance is reported."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "customer",
            "create",
            "Sita Devi",
            "--phone",
            "9123456780",
            "--opening-balance",
            "lots",
        ],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_list_customers_cli(cli_runner, temp_db, sample_ledger):
    """Test listing customers with balances."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "customer", "list"])

    assert result.exit_code == 0
    assert "Ramesh Kumar" in result.output
    assert "₹300" in result.output


def test_list_customers_cli_empty(cli_runner, temp_db):
    """Test listing when there are no customers."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "customer", "list"])

    assert result.exit_code == 0
    assert "No customers found." in result.output


def test_show_customer_cli(cli_runner, temp_db, sample_ledger):
    """Test showing customer details by name."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "customer", "show", "Ramesh Kumar"]
    )

    assert result.exit_code == 0
    assert "Phone: 9876543210" in result.output
    assert "Total debit: ₹500" in result.output
    assert "Total credit: ₹800" in result.output
    assert "Net balance: ₹300 (positive)" in result.output


def test_show_unknown_customer_cli(cli_runner, temp_db):
    """Test showing a customer that doesn't exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "customer", "show", "Nobody"]
    )

    assert result.exit_code == 1
    assert "Error: Customer 'Nobody' not found" in result.output


def test_update_customer_cli(cli_runner, temp_db, sample_customer, reopen_db):
    """Test updating a customer via CLI."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "customer",
            "update",
            str(sample_customer.id),
            "--address",
            "4 Temple Street",
        ],
    )

    assert result.exit_code == 0
    assert f"Updated customer {sample_customer.id}" in result.output
    assert reopen_db().get_customer(sample_customer.id).address == "4 Temple Street"


def test_delete_customer_cli(cli_runner, temp_db, sample_ledger, reopen_db):
    """Test deleting a customer with --yes."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "customer", "delete", "Ramesh Kumar", "--yes"],
    )

    assert result.exit_code == 0
    assert "Deleted customer 'Ramesh Kumar'" in result.output
    assert reopen_db().get_customer(sample_ledger.id) is None


def test_delete_customer_cli_cancelled(cli_runner, temp_db, sample_ledger, reopen_db):
    """Test that declining the prompt keeps the customer."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "customer", "delete", "Ramesh Kumar"],
        input="n\n",
    )

    assert result.exit_code == 0
    assert "2 ledger entries" in result.output
    assert "Deletion cancelled." in result.output
    assert reopen_db().get_customer(sample_ledger.id) is not None
