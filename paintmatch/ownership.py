"""
Ownership annotation for ranked paint matches.
"""

import logging
from dataclasses import replace
from typing import Any, FrozenSet, Iterable, List, Union

from .catalog_search import MatchResult

logger = logging.getLogger(__name__)


def annotate_ownership(matches: Iterable[MatchResult], owned: Union[str, Iterable[str]]) -> List[MatchResult]:
    """Flag the matches whose paint the user owns.

    owned is a collection of paint ids; a single id string is accepted too.
    Returns new MatchResult objects in the same order; nothing is filtered
    and the inputs are left untouched.
    """
    if isinstance(owned, str):
        owned_ids = frozenset([owned])
    elif isinstance(owned, (set, frozenset)):
        owned_ids = owned
    else:
        owned_ids = frozenset(owned)
    return [replace(match, owned=match.entry.id in owned_ids) for match in matches]


def _quantity(record) -> float:
    """Read a record's quantity as a number; missing or unreadable counts as one."""
    quantity = record.get('quantity', 1)
    if quantity is None:
        return 1.0
    try:
        return float(quantity)
    except (TypeError, ValueError):
        logger.warning(f"Unreadable quantity {quantity!r}, treating paint as owned: {record!r}")
        return 1.0


def owned_ids_from_inventory(records: Iterable[Any]) -> FrozenSet[str]:
    """Collect the paint ids from a user's inventory records.

    Records may be plain id strings or mappings with 'paintId', 'paint_id'
    or 'id'. Records with a quantity of zero or less are not owned; numeric
    strings such as "0" or "2" are read as numbers.
    """
    owned = set()
    for record in records:
        if isinstance(record, str):
            owned.add(record)
            continue

        if _quantity(record) <= 0:
            continue

        paint_id = record.get('paintId') or record.get('paint_id') or record.get('id')
        if paint_id is None:
            logger.warning(f"Inventory record without a paint id: {record!r}")
            continue
        owned.add(str(paint_id))

    return frozenset(owned)
