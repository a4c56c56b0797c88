"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the schema can change without
touching the domain entities.
"""

from decimal import Decimal

from ledgerdesk.domain import entities as domain
from ledgerdesk.database.models import (
    Customer as ORMCustomer,
    CustomerTransaction as ORMCustomerTransaction,
    AccountRecord as ORMAccountRecord,
)


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone=orm_customer.phone,
        address=orm_customer.address,
        description=orm_customer.description,
        opening_balance=Decimal(orm_customer.opening_balance or 0),
        opening_date=orm_customer.opening_date,
        created_at=orm_customer.created_at,
    )


def customer_transaction_to_domain(
    orm_transaction: ORMCustomerTransaction,
) -> domain.CustomerTransaction:
    """Convert SQLAlchemy CustomerTransaction model to domain entity."""
    return domain.CustomerTransaction(
        id=orm_transaction.id,
        customer_id=orm_transaction.customer_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=Decimal(orm_transaction.amount),
        date=orm_transaction.date,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )


def account_record_to_domain(orm_record: ORMAccountRecord) -> domain.AccountRecord:
    """Convert SQLAlchemy AccountRecord model to domain AccountRecord entity."""
    return domain.AccountRecord(
        id=orm_record.id,
        account_number=orm_record.account_number,
        account_type=orm_record.account_type,
        name=orm_record.name,
        aadhar_number=orm_record.aadhar_number,
        mobile_number=orm_record.mobile_number,
        address=orm_record.address,
        remarks=orm_record.remarks,
        created_at=orm_record.created_at,
        updated_at=orm_record.updated_at,
    )
