"""
Parsing of the ``order`` query option
"""

from typing import List, Optional, Tuple


def parse_order(order: Optional[str]) -> List[Tuple[str, str]]:
    """Split an order option like ``"email:desc,name:asc"`` into sort pairs.

    Directions are upper-cased and passed through as-is; validating the field
    and the direction is left to the store (see ``Repository.order_clauses``).
    An entry without ``:`` raises ``ValueError``.
    """
    if not order:
        return []

    pairs = []
    for item in order.split(","):
        field, direction = item.strip().split(":")
        pairs.append((field.strip(), direction.strip().upper()))
    return pairs
