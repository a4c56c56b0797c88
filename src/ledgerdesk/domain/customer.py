"""Customer domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import Customer as CustomerEntity
from ledgerdesk.domain.errors import NotFoundError, ValidationError, customer_not_found
from ledgerdesk.utils.currency import to_decimal

_UPDATABLE_FIELDS = {
    "name",
    "phone",
    "address",
    "description",
    "opening_balance",
    "opening_date",
}


class CustomerService:
    """Service for managing ledger customers."""

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_customer(
        self,
        name: str,
        phone: str,
        address: str = "",
        description: Optional[str] = None,
        opening_balance: Decimal | int | str = 0,
        opening_date: Optional[date] = None,
    ) -> int:
        """Create a new customer.

        Args:
            name: Customer name
            phone: Phone number
            address: Postal address
            description: Optional free-form notes
            opening_balance: Balance carried in from before the ledger started
            opening_date: Date of the opening balance (defaults to today)

        Returns:
            Customer ID

        Raises:
            ValidationError: If name or phone is blank
        """
        name = (name or "").strip()
        phone = (phone or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        if not phone:
            raise ValidationError("Customer phone is required")

        return self.db.create_customer(
            name=name,
            phone=phone,
            address=(address or "").strip(),
            description=description,
            opening_balance=to_decimal(opening_balance),
            opening_date=opening_date,
        )

    def get_customer(self, customer_id: int) -> Optional[CustomerEntity]:
        """Get customer by ID.

        Returns:
            Customer entity or None if not found
        """
        return self.db.get_customer(customer_id)

    def require_customer(self, customer_id: int) -> CustomerEntity:
        """Get customer by ID or raise NotFoundError."""
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer

    def list_customers(self, search: Optional[str] = None) -> list[CustomerEntity]:
        """List customers, optionally matching name (any case) or phone."""
        return self.db.list_customers(search=search.strip() if search else None)

    def update_customer(self, customer_id: int, **fields) -> None:
        """Update customer fields.

        Only keyword arguments that are not None are applied.

        Raises:
            NotFoundError: If customer doesn't exist
            ValidationError: If an unknown field is given or name/phone would be blank
        """
        self.require_customer(customer_id)

        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update customer field(s): {', '.join(sorted(unknown))}")

        changes = {key: value for key, value in fields.items() if value is not None}
        for required in ("name", "phone"):
            if required in changes:
                changes[required] = changes[required].strip()
                if not changes[required]:
                    raise ValidationError(f"Customer {required} is required")
        if "opening_balance" in changes:
            changes["opening_balance"] = to_decimal(changes["opening_balance"])

        if changes:
            self.db.update_customer(customer_id, changes)

    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer and all of its ledger entries.

        Raises:
            NotFoundError: If customer doesn't exist
        """
        self.require_customer(customer_id)
        self.db.delete_customer(customer_id)
