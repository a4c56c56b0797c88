"""Account-number extraction from free-form spreadsheet rows.

Bank transfer sheets arrive with whatever column headers the exporting
system chose ("FROM ACCOUNT", "Beneficiary A/c", "to_account", ...). The
sniffer guesses the role of each column from its header text and collects
every plausible account number with the role it was seen under.

Header classification is an ordered rule list evaluated first-match-wins:
from-rules, then to-rules, then the generic "account" rule. Roles seen for
the same number are combined with ``merge_roles``, a join over::

    unknown < from, to < both

so the result does not depend on the order of rows or of columns in a row.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


class AccountRole(str, Enum):
    """Role of an account number inferred from its column header."""

    FROM = "from"
    TO = "to"
    BOTH = "both"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ExtractedAccount:
    """Deduplicated account number with its accumulated role."""

    account_number: str
    role: AccountRole


@dataclass(frozen=True)
class ExtractionOptions:
    """Per-call-site extraction policy.

    Attributes:
        min_length: Minimum number of digits (inclusive)
        max_length: Maximum number of digits (inclusive)
        keep_unknown: Keep numbers whose header is not a from/to column
        require_account_keyword: Only treat from/to headers as such when the
            header also mentions "account"
    """

    min_length: int = 5
    max_length: int = 18
    keep_unknown: bool = False
    require_account_keyword: bool = False


# Transfer sheets with FROM/TO ACCOUNT columns.
TRANSFER_SHEET_OPTIONS = ExtractionOptions(
    min_length=5, max_length=18, keep_unknown=False, require_account_keyword=True
)

# Plain account lists: any 9-18 digit cell is an account number.
ACCOUNT_LIST_OPTIONS = ExtractionOptions(
    min_length=9, max_length=18, keep_unknown=True, require_account_keyword=False
)

PRESETS = {
    "transfer": TRANSFER_SHEET_OPTIONS,
    "list": ACCOUNT_LIST_OPTIONS,
}


@dataclass(frozen=True)
class HeaderRule:
    """Maps header text to a role by alias equality or keyword containment."""

    role: AccountRole
    keywords: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    strict_needs_account: bool = False

    def matches(self, header: str, require_account_keyword: bool = False) -> bool:
        if header in self.aliases:
            return True
        if not any(keyword in header for keyword in self.keywords):
            return False
        if require_account_keyword and self.strict_needs_account:
            return "account" in header
        return True


HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule(
        role=AccountRole.FROM,
        keywords=("from",),
        aliases=("from_account", "fromaccount"),
        strict_needs_account=True,
    ),
    HeaderRule(
        role=AccountRole.TO,
        keywords=("to", "dest", "beneficiary", "credit"),
        aliases=("to_account", "toaccount"),
        strict_needs_account=True,
    ),
    HeaderRule(role=AccountRole.UNKNOWN, keywords=("account",)),
)

_DIGITS = re.compile(r"[0-9]+")
_WHITESPACE = re.compile(r"\s+")


def clean_account_number(value: Any, min_length: int = 5, max_length: int = 18) -> Optional[str]:
    """Return the digits of a cell value if it looks like an account number.

    Args:
        value: Raw cell value (string, number or None)
        min_length: Minimum digit count
        max_length: Maximum digit count

    Returns:
        Digit string with whitespace removed, or None if the value is empty,
        contains non-digits, or has an implausible length
    """
    if value is None:
        return None
    # Spreadsheet readers hand back whole numbers as floats
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    text = str(value).strip()
    if not text:
        return None

    cleaned = _WHITESPACE.sub("", text)
    if not _DIGITS.fullmatch(cleaned):
        return None
    if not min_length <= len(cleaned) <= max_length:
        return None
    return cleaned


def classify_header(header: Any, require_account_keyword: bool = False) -> Optional[AccountRole]:
    """Classify a column header, or return None if no rule matches."""
    text = "" if header is None else str(header).strip().lower()
    for rule in HEADER_RULES:
        if rule.matches(text, require_account_keyword):
            return rule.role
    return None


def merge_roles(current: Optional[AccountRole], new: AccountRole) -> AccountRole:
    """Combine two observed roles for the same account number."""
    if current is None or current is new:
        return new
    if current is AccountRole.UNKNOWN:
        return new
    if new is AccountRole.UNKNOWN:
        return current
    return AccountRole.BOTH


def extract_accounts(
    rows: Iterable[Mapping[Any, Any]],
    options: ExtractionOptions = ExtractionOptions(),
) -> list[ExtractedAccount]:
    """Extract role-tagged account numbers from spreadsheet rows.

    Args:
        rows: Parsed rows, each a mapping of header to cell value
        options: Length bounds and header policy

    Returns:
        One entry per distinct account number, in first-seen order. Empty
        when nothing in the rows looks like an account number.
    """
    roles: dict[str, AccountRole] = {}

    for row in rows:
        for header, value in row.items():
            account_number = clean_account_number(
                value, options.min_length, options.max_length
            )
            if account_number is None:
                continue

            role = classify_header(header, options.require_account_keyword)
            if role is None:
                role = AccountRole.UNKNOWN
            if role is AccountRole.UNKNOWN and not options.keep_unknown:
                continue

            roles[account_number] = merge_roles(roles.get(account_number), role)

    return [
        ExtractedAccount(account_number=number, role=role)
        for number, role in roles.items()
    ]
