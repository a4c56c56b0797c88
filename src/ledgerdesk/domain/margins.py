"""Commission margins earned on counter services."""

from decimal import Decimal
from typing import Iterable, Mapping

from ledgerdesk.utils.currency import Number, to_decimal

PAN_CARD_MARGIN_PER_UNIT = Decimal("150")
PASSPORT_MARGIN_PER_UNIT = Decimal("200")
# Banking services earn 0.5 per 100 handled
BANKING_MARGIN_RATE = Decimal("0.5") / Decimal("100")


def pan_card_total(count: int, amount: Number) -> Decimal:
    return count * to_decimal(amount)


def pan_card_margin(count: int) -> Decimal:
    return count * PAN_CARD_MARGIN_PER_UNIT


def passport_total(count: int, amount: Number) -> Decimal:
    return count * to_decimal(amount)


def passport_margin(count: int) -> Decimal:
    return count * PASSPORT_MARGIN_PER_UNIT


def banking_services_margin(amount: Number) -> Decimal:
    return to_decimal(amount) * BANKING_MARGIN_RATE


def total_margin(
    pan_cards: Iterable[Mapping[str, Number]] = (),
    passports: Iterable[Mapping[str, Number]] = (),
    banking_services: Iterable[Mapping[str, Number]] = (),
) -> Decimal:
    """Sum the ``margin`` of every PAN card, passport and banking service entry."""
    total = Decimal("0")
    for entries in (pan_cards, passports, banking_services):
        for entry in entries:
            total += to_decimal(entry["margin"])
    return total
