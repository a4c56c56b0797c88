"""Customer ledger: balance calculation, entry validation and the ledger service.

``compute_totals`` and ``validate_transaction`` are pure functions over an
already-fetched transaction list. They are recomputed from the full list on
every call; nothing is cached or maintained incrementally.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import (
    CustomerBalance,
    CustomerTransaction,
    TransactionType,
)
from ledgerdesk.domain.errors import (
    NotFoundError,
    ValidationError,
    customer_not_found,
    transaction_not_found,
)
from ledgerdesk.utils.currency import format_currency, to_decimal, to_money

logger = logging.getLogger(__name__)

INVALID_AMOUNT = "Please enter a valid amount greater than 0"


class BalanceStatus(str, Enum):
    """Display sign of a net balance."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class LedgerTotals:
    """Derived totals for a list of transactions."""

    debit_total: Decimal
    credit_total: Decimal
    net_balance: Decimal

    @property
    def status(self) -> BalanceStatus:
        if self.net_balance >= 0:
            return BalanceStatus.POSITIVE
        return BalanceStatus.NEGATIVE


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a proposed ledger entry."""

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


def _field(transaction: Any, name: str) -> Any:
    if isinstance(transaction, dict):
        return transaction[name]
    return getattr(transaction, name)


def _sum_of_type(transactions: Iterable[Any], transaction_type: TransactionType) -> Decimal:
    total = Decimal("0")
    for transaction in transactions:
        if TransactionType(_field(transaction, "type")) is transaction_type:
            total += to_decimal(_field(transaction, "amount"))
    return total


def parse_positive_amount(amount: Any) -> Optional[Decimal]:
    """Return amount rounded to paise if that is a positive finite number, else None.

    Rounding happens before the checks, so an amount that would be stored as
    0.00 is rejected and the transfer cap sees the stored value.
    """
    if isinstance(amount, bool) or amount is None:
        return None
    try:
        value = to_decimal(amount.strip() if isinstance(amount, str) else amount)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not value.is_finite():
        return None
    try:
        value = to_money(value)
    except InvalidOperation:
        # Too many digits to carry paise
        return None
    if value <= 0:
        return None
    return value


def compute_totals(transactions: Iterable[Any]) -> LedgerTotals:
    """Sum debits and credits and derive the net balance.

    Args:
        transactions: Entries with ``type`` ("debit"/"credit") and ``amount``,
            as objects or dicts

    Returns:
        LedgerTotals with ``net_balance = credit_total - debit_total``
    """
    transactions = list(transactions)
    debit_total = _sum_of_type(transactions, TransactionType.DEBIT)
    credit_total = _sum_of_type(transactions, TransactionType.CREDIT)
    return LedgerTotals(
        debit_total=debit_total,
        credit_total=credit_total,
        net_balance=credit_total - debit_total,
    )


def validate_transaction(
    transactions: Iterable[Any],
    transaction_type: TransactionType | str,
    amount: Any,
    transfer: bool = True,
) -> ValidationResult:
    """Check whether a proposed entry may be recorded.

    Args:
        transactions: The customer's existing entries
        transaction_type: Side of the proposed entry
        amount: Proposed amount (number or numeric text)
        transfer: Also cap the amount at the running total of the opposite
            side, as the transfer dialog does

    Returns:
        ValidationResult; rejected results carry a user-facing reason
    """
    value = parse_positive_amount(amount)
    if value is None:
        return ValidationResult.reject(INVALID_AMOUNT)

    if transfer:
        opposite = TransactionType(transaction_type).opposite
        limit = _sum_of_type(transactions, opposite)
        if value > limit:
            shown = format_currency(limit, paise=limit != limit.to_integral_value())
            return ValidationResult.reject(
                f"Amount cannot exceed current {opposite.value} balance of {shown}"
            )

    return ValidationResult.accept()


def closing_balance(totals: LedgerTotals, opening_balance: Decimal | int = 0) -> Decimal:
    """Opening balance carried forward plus the net of all entries."""
    return to_decimal(opening_balance) + totals.net_balance


class LedgerService:
    """Service for recording and summarizing customer ledger entries."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_customer(self, customer_id: int):
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer

    def record_transaction(
        self,
        customer_id: int,
        transaction_type: TransactionType | str,
        amount: Any,
        transaction_date: Optional[date] = None,
        description: Optional[str] = None,
        transfer: bool = False,
    ) -> int:
        """Validate and store a new ledger entry.

        Args:
            customer_id: Customer ID
            transaction_type: "debit" or "credit"
            amount: Entry amount
            transaction_date: Entry date (defaults to today)
            description: Optional description
            transfer: Enforce the opposite-balance cap

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If customer doesn't exist
            ValidationError: If the type is unknown or the entry is rejected
        """
        self._require_customer(customer_id)

        try:
            txn_type = TransactionType(transaction_type)
        except ValueError:
            raise ValidationError(
                f"Invalid transaction type '{transaction_type}'. Must be 'debit' or 'credit'"
            )

        existing = self.db.list_customer_transactions(customer_id)
        result = validate_transaction(existing, txn_type, amount, transfer=transfer)
        if not result.ok:
            raise ValidationError(result.reason)

        transaction_id = self.db.create_customer_transaction(
            customer_id=customer_id,
            type=txn_type,
            amount=parse_positive_amount(amount),
            date=transaction_date or date.today(),
            description=description,
        )
        logger.debug(
            "Recorded %s of %s for customer %s", txn_type.value, amount, customer_id
        )
        return transaction_id

    def list_transactions(
        self,
        customer_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CustomerTransaction]:
        """List a customer's entries, optionally within a date range."""
        self._require_customer(customer_id)
        return self.db.list_customer_transactions(
            customer_id, start_date=start_date, end_date=end_date
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a ledger entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        if self.db.get_customer_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_customer_transaction(transaction_id)

    def get_totals(
        self,
        customer_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> LedgerTotals:
        """Compute totals for a customer's entries."""
        return compute_totals(self.list_transactions(customer_id, start_date, end_date))

    def get_balance(self, customer_id: int) -> Decimal:
        """Opening balance plus net of all the customer's entries."""
        customer = self._require_customer(customer_id)
        totals = compute_totals(self.db.list_customer_transactions(customer_id))
        return closing_balance(totals, customer.opening_balance)

    def get_book_summary(self) -> list[CustomerBalance]:
        """Totals and closing balance for every customer, ordered by name."""
        balances = []
        for customer in self.db.list_customers():
            totals = compute_totals(self.db.list_customer_transactions(customer.id))
            balances.append(
                CustomerBalance(
                    customer=customer,
                    debit_total=totals.debit_total,
                    credit_total=totals.credit_total,
                    net_balance=totals.net_balance,
                    closing_balance=closing_balance(totals, customer.opening_balance),
                )
            )
        return balances


def total_balance(balances: Iterable[CustomerBalance]) -> Decimal:
    """Sum of closing balances across customers."""
    return sum((b.closing_balance for b in balances), Decimal("0"))
