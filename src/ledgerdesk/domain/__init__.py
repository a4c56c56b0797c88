"""Domain layer for ledgerdesk application."""

# Services are resolved lazily: they import the database layer, which in turn
# imports domain.entities.
_SERVICES = {
    "CustomerService": "ledgerdesk.domain.customer",
    "LedgerService": "ledgerdesk.domain.ledger",
    "AccountRecordService": "ledgerdesk.domain.account_records",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
