"""Utility for resolving customer names to IDs."""

from ledgerdesk.domain.customer import CustomerService
from ledgerdesk.domain.errors import NotFoundError, customer_not_found, customer_ref_not_found


def resolve_customer(customer_service: CustomerService, customer: str | int) -> int:
    """Resolve customer name or ID to customer ID.

    Args:
        customer_service: CustomerService instance
        customer: Customer name (str) or ID (int or string representation of int)

    Returns:
        Customer ID

    Raises:
        NotFoundError: If customer is not found, or a name matches nobody
        ValueError: If a name matches more than one customer
    """
    try:
        customer_id = int(customer)
    except (ValueError, TypeError):
        customer_id = None

    if customer_id is not None:
        if customer_service.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer_id

    matches = [c for c in customer_service.list_customers() if c.name == customer]
    if not matches:
        raise NotFoundError(customer_ref_not_found(customer))
    if len(matches) > 1:
        ids = ", ".join(str(c.id) for c in matches)
        raise ValueError(f"Customer name '{customer}' is ambiguous (IDs: {ids}); use the ID")
    return matches[0].id
