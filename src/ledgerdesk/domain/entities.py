"""Domain model entities for ledgerdesk.

These are pure data classes representing business concepts, independent of
database schema, so services and calculators never touch ORM objects.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Side of a ledger entry."""

    DEBIT = "debit"
    CREDIT = "credit"

    @property
    def opposite(self) -> "TransactionType":
        if self is TransactionType.DEBIT:
            return TransactionType.CREDIT
        return TransactionType.DEBIT


ACCOUNT_KINDS = (
    "Savings",
    "Current",
    "Fixed Deposit",
    "Recurring Deposit",
    "PPF",
    "NPS",
    "Other",
)


@dataclass(frozen=True)
class Customer:
    """Ledger customer domain entity."""

    id: int
    name: str
    phone: str
    address: str
    description: Optional[str]
    opening_balance: Decimal
    opening_date: date
    created_at: datetime


@dataclass(frozen=True)
class CustomerTransaction:
    """A single debit or credit in a customer's ledger."""

    id: int
    customer_id: int
    type: TransactionType
    amount: Decimal
    date: date
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class AccountRecord:
    """Bank account number collected from transfer sheets or entered by hand."""

    id: int
    account_number: str
    account_type: str
    name: Optional[str]
    aadhar_number: Optional[str]
    mobile_number: Optional[str]
    address: Optional[str]
    remarks: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CustomerBalance:
    """Per-customer row of the book summary."""

    customer: Customer
    debit_total: Decimal
    credit_total: Decimal
    net_balance: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an account-number import."""

    extracted: int
    imported: int
    skipped_existing: int
