"""
Column-role resolver

Maps invoice-style headers (qty, price, subtotal, tax, total) to columns.
Shared by the calculation check and the calculation repair so both read the
same columns.
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional, Pattern, Sequence, Tuple

from kualitas_shared.utils.parsing import parse_number


class ColumnRoles(NamedTuple):
    qty: Optional[str] = None
    price: Optional[str] = None
    subtotal: Optional[str] = None
    tax: Optional[str] = None
    total: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return self._asdict()


# Most specific roles first; a header is claimed by one role only,
# so "Total Harga" is a total and never a price.
ROLE_RULES: List[Tuple[str, Pattern]] = [
    ("subtotal", re.compile(r"subtotal|sub.?total", re.IGNORECASE)),
    ("total", re.compile(r"^total$|grand.?total|total.?harga|total.?bayar", re.IGNORECASE)),
    ("tax", re.compile(r"ppn|pajak|tax|vat", re.IGNORECASE)),
    ("price", re.compile(r"harga|price|unit.?price", re.IGNORECASE)),
    ("qty", re.compile(r"qty|jumlah|kuantitas|quantity", re.IGNORECASE)),
]


def resolve_column_roles(headers: Sequence[str]) -> ColumnRoles:
    """First unclaimed matching header (display order) wins each role."""
    claimed = set()
    resolved: Dict[str, Optional[str]] = {}
    for role, pattern in ROLE_RULES:
        resolved[role] = None
        for header in headers:
            if header in claimed:
                continue
            if pattern.search(header.strip()):
                resolved[role] = header
                claimed.add(header)
                break
    return ColumnRoles(**resolved)


def base_amount(row: Dict[str, Any], roles: ColumnRoles) -> Optional[float]:
    """
    Tax base of a row.

    The subtotal when it holds a non-zero number, otherwise qty x price, otherwise
    the price alone (no qty column). None when nothing parses.
    """
    subtotal = parse_number(row.get(roles.subtotal)) if roles.subtotal else None
    if subtotal:
        return subtotal
    price = parse_number(row.get(roles.price)) if roles.price else None
    if price is None:
        return None
    if roles.qty:
        qty = parse_number(row.get(roles.qty))
        return qty * price if qty is not None else None
    return price
