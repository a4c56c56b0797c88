"""Tests for the account record service."""

import csv

import pytest
from openpyxl import Workbook, load_workbook

from ledgerdesk.domain import account_records
from ledgerdesk.domain.account_records import AccountRecordService, format_aadhar
from ledgerdesk.domain.account_sniffer import (
    ACCOUNT_LIST_OPTIONS,
    AccountRole,
    ExtractedAccount,
)
from ledgerdesk.domain.errors import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def transfer_workbook(tmp_path):
    """Excel transfer sheet with numeric account cells."""
    path = tmp_path / "transfers.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Date", "FROM ACCOUNT", "TO ACCOUNT", "Amount"])
    sheet.append(["2024-01-05", 123456789012, 998877665544, 5000])
    sheet.append(["2024-01-06", 998877665544, 55554444, 1200])
    sheet.append([None, None, None, None])
    workbook.save(path)
    return path


def test_sniff_transfer_sheet(account_record_service, fixtures_dir):
    """Test extracting roles from a CSV transfer sheet."""
    accounts = account_record_service.sniff_file(fixtures_dir / "transfer_sheet.csv")

    assert accounts == [
        ExtractedAccount("123456789012", AccountRole.FROM),
        ExtractedAccount("998877665544", AccountRole.BOTH),
        ExtractedAccount("55554444", AccountRole.TO),
        ExtractedAccount("11112222", AccountRole.TO),
    ]


def test_sniff_excel_sheet(account_record_service, transfer_workbook):
    """Test that numeric Excel cells are read as account numbers."""
    accounts = account_record_service.sniff_file(transfer_workbook)

    assert {(a.account_number, a.role) for a in accounts} == {
        ("123456789012", AccountRole.FROM),
        ("998877665544", AccountRole.BOTH),
        ("55554444", AccountRole.TO),
    }


def test_sniff_account_list(account_record_service, fixtures_dir):
    """Test the list preset on a semicolon-delimited file."""
    accounts = account_record_service.sniff_file(
        fixtures_dir / "account_list.csv", ACCOUNT_LIST_OPTIONS
    )

    assert accounts == [
        ExtractedAccount("123456789012", AccountRole.UNKNOWN),
        ExtractedAccount("987654321", AccountRole.UNKNOWN),
    ]


def test_import_file(account_record_service, fixtures_dir):
    """Test importing records tagged with their role."""
    result = account_record_service.import_file(fixtures_dir / "transfer_sheet.csv")

    assert result.extracted == 4
    assert result.imported == 4
    assert result.skipped_existing == 0

    types = {r.account_number: r.account_type for r in account_record_service.list_records()}
    assert types == {
        "123456789012": "from",
        "998877665544": "both",
        "55554444": "to",
        "11112222": "to",
    }


def test_import_file_skips_existing(account_record_service, fixtures_dir):
    """Test that a second import adds nothing."""
    account_record_service.create_record("55554444", account_type="Current", name="Asha")

    first = account_record_service.import_file(fixtures_dir / "transfer_sheet.csv")
    second = account_record_service.import_file(fixtures_dir / "transfer_sheet.csv")

    assert (first.extracted, first.imported, first.skipped_existing) == (4, 3, 1)
    assert (second.extracted, second.imported, second.skipped_existing) == (4, 0, 4)
    assert len(account_record_service.list_records()) == 4

    kept = account_record_service.list_records("55554444")[0]
    assert kept.account_type == "Current"
    assert kept.name == "Asha"


def test_import_file_default_account_type(account_record_service, fixtures_dir):
    """Test overriding the account type for imported records."""
    account_record_service.import_file(
        fixtures_dir / "account_list.csv", ACCOUNT_LIST_OPTIONS, default_account_type="Savings"
    )

    assert {r.account_type for r in account_record_service.list_records()} == {"Savings"}


def test_import_file_without_accounts(account_record_service, fixtures_dir):
    """Test importing a file with no account columns."""
    result = account_record_service.import_file(fixtures_dir / "no_accounts.csv")

    assert (result.extracted, result.imported, result.skipped_existing) == (0, 0, 0)
    assert account_record_service.list_records() == []


def test_import_file_in_batches(account_record_service, tmp_path, monkeypatch):
    """Test that inserts are split into batches."""
    monkeypatch.setattr(account_records, "BATCH_SIZE", 2)
    path = tmp_path / "many.csv"
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["To Account"])
        for n in range(5):
            writer.writerow([f"10000000{n}"])

    batches = []
    original = account_record_service.db.create_account_records

    def spy(records):
        batches.append(len(records))
        return original(records)

    monkeypatch.setattr(account_record_service.db, "create_account_records", spy)

    result = account_record_service.import_file(path)

    assert result.imported == 5
    assert batches == [2, 2, 1]


def test_import_unsupported_file(account_record_service, tmp_path):
    """Test that only CSV and Excel files are accepted."""
    path = tmp_path / "accounts.txt"
    path.write_text("From Account\n123456789\n")

    with pytest.raises(ValidationError, match="Unsupported file type"):
        account_record_service.import_file(path)


def test_import_missing_file(account_record_service, tmp_path):
    """Test importing a file that doesn't exist."""
    with pytest.raises(FileNotFoundError):
        account_record_service.import_file(tmp_path / "missing.csv")


def test_create_record(account_record_service):
    """Test creating a record by hand."""
    record_id = account_record_service.create_record(
        " 1234 5678 9012 ",
        account_type="Savings",
        name="Asha Rao",
        aadhar_number="123456789012",
        mobile_number="9876543210",
    )

    record = account_record_service.get_record(record_id)
    assert record.account_number == "123456789012"
    assert record.account_type == "Savings"
    assert record.name == "Asha Rao"
    assert record.aadhar_number == "1234 5678 9012"
    assert record.address is None


def test_create_record_duplicate(account_record_service):
    """Test that account numbers are unique."""
    account_record_service.create_record("123456789")

    with pytest.raises(ConflictError, match="already exists"):
        account_record_service.create_record("123456789")


@pytest.mark.parametrize("number", ["1234", "12AB5678", "1" * 19, ""])
def test_create_record_invalid_number(account_record_service, number):
    """Test that malformed account numbers are rejected."""
    with pytest.raises(ValidationError, match="Invalid account number"):
        account_record_service.create_record(number)


def test_update_record(account_record_service):
    """Test updating and clearing fields."""
    record_id = account_record_service.create_record(
        "123456789", name="Asha", remarks="old branch"
    )

    account_record_service.update_record(
        record_id, account_number="987654321", account_type="Current", remarks=""
    )

    record = account_record_service.get_record(record_id)
    assert record.account_number == "987654321"
    assert record.account_type == "Current"
    assert record.name == "Asha"
    assert record.remarks is None


def test_update_record_conflict(account_record_service):
    """Test that a record cannot take another record's number."""
    account_record_service.create_record("111111111")
    record_id = account_record_service.create_record("222222222")

    with pytest.raises(ConflictError):
        account_record_service.update_record(record_id, account_number="111111111")

    account_record_service.update_record(record_id, account_number="222222222")


def test_update_record_validation(account_record_service):
    """Test update validation errors."""
    record_id = account_record_service.create_record("123456789")

    with pytest.raises(ValidationError):
        account_record_service.update_record(record_id, account_type="  ")
    with pytest.raises(ValidationError):
        account_record_service.update_record(record_id, colour="blue")
    with pytest.raises(NotFoundError):
        account_record_service.update_record(999, name="X")


def test_delete_record(account_record_service):
    """Test deleting a record."""
    record_id = account_record_service.create_record("123456789")

    account_record_service.delete_record(record_id)

    assert account_record_service.get_record(record_id) is None
    with pytest.raises(NotFoundError, match="Account record"):
        account_record_service.delete_record(record_id)


def test_list_records_search(account_record_service):
    """Test searching by number, name and mobile."""
    account_record_service.create_record("111111111", name="Asha Rao", mobile_number="9876500000")
    account_record_service.create_record("222222222", name="Raju", address="MG Road")

    assert [r.account_number for r in account_record_service.list_records("asha")] == ["111111111"]
    assert [r.account_number for r in account_record_service.list_records("98765")] == ["111111111"]
    assert [r.account_number for r in account_record_service.list_records("mg road")] == ["222222222"]
    assert [r.account_number for r in account_record_service.list_records()] == [
        "222222222",
        "111111111",
    ]


def test_export_records_xlsx(account_record_service, tmp_path):
    """Test exporting records to Excel."""
    account_record_service.create_record("111111111", name="Asha Rao")
    path = tmp_path / "records.xlsx"

    count = account_record_service.export_records(path)

    assert count == 1
    workbook = load_workbook(path)
    sheet = workbook.active
    assert sheet.title == "Account Records"
    rows = list(sheet.iter_rows(values_only=True))
    assert list(rows[0]) == account_records.EXPORT_HEADERS
    assert rows[1][0] == "111111111"
    assert rows[1][2] == "Asha Rao"


def test_export_records_csv_with_search(account_record_service, tmp_path):
    """Test exporting a filtered set to CSV."""
    account_record_service.create_record("111111111", name="Asha Rao")
    account_record_service.create_record("222222222", name="Raju")
    path = tmp_path / "records.csv"

    count = account_record_service.export_records(path, search="raju")

    assert count == 1
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["Account Number"] for row in rows] == ["222222222"]
    assert rows[0]["Name"] == "Raju"


def test_format_aadhar():
    """Test Aadhaar grouping and limits."""
    assert format_aadhar("123456789012") == "1234 5678 9012"
    assert format_aadhar("1234-5678-9012") == "1234 5678 9012"
    assert format_aadhar("123456") == "1234 56"
    assert format_aadhar("") == ""
    with pytest.raises(ValidationError):
        format_aadhar("1234567890123")
