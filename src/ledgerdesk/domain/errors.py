"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def customer_ref_not_found(ref: str) -> str:
    """Return message for a customer name or ID that resolves to nothing."""
    return f"Customer '{ref}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing ledger transaction."""
    return f"Transaction {transaction_id} not found"


def account_record_not_found(record_id: int) -> str:
    """Return message for missing account record."""
    return f"Account record {record_id} not found"


def duplicate_account_number(account_number: str) -> str:
    """Return message when an account number is already stored."""
    return f"An account with account number '{account_number}' already exists"


def unsupported_file_type(path: str) -> str:
    """Return message for a spreadsheet with an unknown extension."""
    return f"Unsupported file type '{path}': please use a CSV or Excel (.xlsx) file"
