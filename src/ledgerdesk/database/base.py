"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerdesk.domain.entities import (
    AccountRecord,
    Customer,
    CustomerTransaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for ledgerdesk."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(
        self,
        name: str,
        phone: str,
        address: str,
        description: Optional[str] = None,
        opening_balance: Decimal = Decimal("0"),
        opening_date: Optional[date] = None,
    ) -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def list_customers(self, search: Optional[str] = None) -> list[Customer]:
        """List customers ordered by name, optionally filtered by name or phone."""
        pass

    @abstractmethod
    def update_customer(self, customer_id: int, fields: dict[str, Any]) -> None:
        """Update the given customer columns."""
        pass

    @abstractmethod
    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer together with its transactions."""
        pass

    # Customer transaction operations
    @abstractmethod
    def create_customer_transaction(
        self,
        customer_id: int,
        type: TransactionType,
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create a ledger entry. Returns transaction ID."""
        pass

    @abstractmethod
    def get_customer_transaction(self, transaction_id: int) -> Optional[CustomerTransaction]:
        """Get ledger entry by ID."""
        pass

    @abstractmethod
    def list_customer_transactions(
        self,
        customer_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CustomerTransaction]:
        """List a customer's entries ordered by date, then ID."""
        pass

    @abstractmethod
    def delete_customer_transaction(self, transaction_id: int) -> None:
        """Delete a ledger entry."""
        pass

    # Account record operations
    @abstractmethod
    def create_account_records(self, records: list[dict[str, Any]]) -> int:
        """Insert account records in one batch. Returns number inserted."""
        pass

    @abstractmethod
    def get_account_record(self, record_id: int) -> Optional[AccountRecord]:
        """Get account record by ID."""
        pass

    @abstractmethod
    def get_account_record_by_number(self, account_number: str) -> Optional[AccountRecord]:
        """Get account record by account number."""
        pass

    @abstractmethod
    def list_account_numbers(self) -> set[str]:
        """Return every stored account number."""
        pass

    @abstractmethod
    def list_account_records(self, search: Optional[str] = None) -> list[AccountRecord]:
        """List account records newest first, optionally filtered by search text."""
        pass

    @abstractmethod
    def update_account_record(self, record_id: int, fields: dict[str, Any]) -> None:
        """Update the given account record columns."""
        pass

    @abstractmethod
    def delete_account_record(self, record_id: int) -> None:
        """Delete an account record."""
        pass
