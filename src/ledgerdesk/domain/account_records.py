"""Account record domain service.

Account records are bank account numbers collected from transfer sheets
(via the column sniffer) or entered by hand, with optional holder details.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.account_sniffer import (
    TRANSFER_SHEET_OPTIONS,
    ExtractedAccount,
    ExtractionOptions,
    clean_account_number,
    extract_accounts,
)
from ledgerdesk.domain.entities import AccountRecord as AccountRecordEntity, ImportResult
from ledgerdesk.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_record_not_found,
    duplicate_account_number,
)
from ledgerdesk.utils.spreadsheet import read_rows, write_rows

logger = logging.getLogger(__name__)

BATCH_SIZE = 500

AADHAR_LENGTH = 12

EXPORT_HEADERS = [
    "Account Number",
    "Account Type",
    "Name",
    "Aadhar Number",
    "Mobile Number",
    "Address",
    "Remarks",
    "Created At",
]

_DETAIL_FIELDS = ("name", "aadhar_number", "mobile_number", "address", "remarks")


def format_aadhar(value: str) -> str:
    """Group an Aadhaar number in blocks of four digits.

    Non-digits are dropped, so "1234-5678-9012" becomes "1234 5678 9012".

    Raises:
        ValidationError: If there are more than 12 digits
    """
    digits = re.sub(r"\D", "", value or "")
    if len(digits) > AADHAR_LENGTH:
        raise ValidationError(f"Aadhar number cannot have more than {AADHAR_LENGTH} digits")
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


class AccountRecordService:
    """Service for importing and managing account records."""

    def __init__(self, db: Database):
        """Initialize account record service.

        Args:
            db: Database instance
        """
        self.db = db

    def sniff_file(
        self, path: str | Path, options: ExtractionOptions = TRANSFER_SHEET_OPTIONS
    ) -> list[ExtractedAccount]:
        """Read a CSV/Excel file and extract role-tagged account numbers."""
        return extract_accounts(read_rows(path), options)

    def import_file(
        self,
        path: str | Path,
        options: ExtractionOptions = TRANSFER_SHEET_OPTIONS,
        default_account_type: Optional[str] = None,
    ) -> ImportResult:
        """Import account numbers found in a file.

        Numbers already stored are skipped. New records get the extracted
        role as their account type unless ``default_account_type`` is given.

        Args:
            path: CSV or Excel file
            options: Extraction policy
            default_account_type: Account type for every new record

        Returns:
            ImportResult; ``extracted == 0`` means no accounts were found

        Raises:
            ValidationError: If the file type is unsupported
            FileNotFoundError: If the file doesn't exist
        """
        extracted = self.sniff_file(path, options)
        if not extracted:
            logger.info("No account numbers found in %s", path)
            return ImportResult(extracted=0, imported=0, skipped_existing=0)

        existing = self.db.list_account_numbers()
        new_accounts = [a for a in extracted if a.account_number not in existing]
        records = [
            {
                "account_number": account.account_number,
                "account_type": default_account_type or account.role.value,
            }
            for account in new_accounts
        ]

        imported = 0
        for start in range(0, len(records), BATCH_SIZE):
            imported += self.db.create_account_records(records[start : start + BATCH_SIZE])
            logger.info("Inserted %d of %d account record(s)", imported, len(records))

        return ImportResult(
            extracted=len(extracted),
            imported=imported,
            skipped_existing=len(extracted) - len(new_accounts),
        )

    def _clean_number(self, account_number: str) -> str:
        cleaned = clean_account_number(account_number)
        if cleaned is None:
            raise ValidationError(
                f"Invalid account number '{account_number}': expected 5-18 digits"
            )
        return cleaned

    def _clean_details(self, details: dict) -> dict:
        # Blank strings clear a detail
        cleaned = {}
        for key, value in details.items():
            if isinstance(value, str):
                value = value.strip() or None
            if key == "aadhar_number" and value is not None:
                value = format_aadhar(value) or None
            cleaned[key] = value
        return cleaned

    def create_record(
        self,
        account_number: str,
        account_type: str = "Savings",
        name: Optional[str] = None,
        aadhar_number: Optional[str] = None,
        mobile_number: Optional[str] = None,
        address: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> int:
        """Create an account record by hand.

        Returns:
            Record ID

        Raises:
            ValidationError: If the account number or Aadhaar number is malformed
            ConflictError: If the account number is already stored
        """
        number = self._clean_number(account_number)
        if self.db.get_account_record_by_number(number) is not None:
            raise ConflictError(duplicate_account_number(number))

        record = {"account_number": number, "account_type": account_type}
        record.update(
            self._clean_details(
                {
                    "name": name,
                    "aadhar_number": aadhar_number,
                    "mobile_number": mobile_number,
                    "address": address,
                    "remarks": remarks,
                }
            )
        )
        self.db.create_account_records([record])
        return self.db.get_account_record_by_number(number).id

    def get_record(self, record_id: int) -> Optional[AccountRecordEntity]:
        """Get account record by ID."""
        return self.db.get_account_record(record_id)

    def list_records(self, search: Optional[str] = None) -> list[AccountRecordEntity]:
        """List records newest first, filtered by number, name, Aadhaar, mobile or address."""
        return self.db.list_account_records(search=search.strip() if search else None)

    def update_record(self, record_id: int, **fields) -> None:
        """Update an account record.

        Keyword arguments left as None are not changed; empty strings clear
        optional details.

        Raises:
            NotFoundError: If record doesn't exist
            ConflictError: If the new account number belongs to another record
            ValidationError: On malformed input or unknown fields
        """
        if self.db.get_account_record(record_id) is None:
            raise NotFoundError(account_record_not_found(record_id))

        allowed = {"account_number", "account_type", *_DETAIL_FIELDS}
        unknown = set(fields) - allowed
        if unknown:
            raise ValidationError(
                f"Cannot update account record field(s): {', '.join(sorted(unknown))}"
            )

        changes = {key: value for key, value in fields.items() if value is not None}
        if "account_number" in changes:
            number = self._clean_number(changes["account_number"])
            other = self.db.get_account_record_by_number(number)
            if other is not None and other.id != record_id:
                raise ConflictError(duplicate_account_number(number))
            changes["account_number"] = number
        if "account_type" in changes and not changes["account_type"].strip():
            raise ValidationError("Account type cannot be empty")

        details = {key: changes.pop(key) for key in _DETAIL_FIELDS if key in changes}
        changes.update(self._clean_details(details))

        if changes:
            self.db.update_account_record(record_id, changes)

    def delete_record(self, record_id: int) -> None:
        """Delete an account record.

        Raises:
            NotFoundError: If record doesn't exist
        """
        if self.db.get_account_record(record_id) is None:
            raise NotFoundError(account_record_not_found(record_id))
        self.db.delete_account_record(record_id)

    def export_records(self, path: str | Path, search: Optional[str] = None) -> int:
        """Write (optionally filtered) records to a CSV or Excel file.

        Returns:
            Number of records written
        """
        rows = [
            {
                "Account Number": record.account_number,
                "Account Type": record.account_type,
                "Name": record.name or "",
                "Aadhar Number": record.aadhar_number or "",
                "Mobile Number": record.mobile_number or "",
                "Address": record.address or "",
                "Remarks": record.remarks or "",
                "Created At": record.created_at.strftime("%d/%m/%Y"),
            }
            for record in self.list_records(search)
        ]
        return write_rows(path, rows, headers=EXPORT_HEADERS, sheet_name="Account Records")
