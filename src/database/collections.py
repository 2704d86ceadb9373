"""
Descriptors for the three procurement collections.

Each collection is a parent record keyed by a free-text natural key with an
ordered list of child line-items. The descriptors carry the wire field names so
both stores and the HTTP layer agree on the document shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    parent_key: str
    children_field: str
    child_fields: Tuple[str, str, str]

    def pick_child_fields(self, data: Dict) -> Dict:
        """Return exactly the declared child attributes; missing ones become None."""
        return {f: (data or {}).get(f) for f in self.child_fields}


CATALOG = CollectionSpec(
    name="library",
    parent_key="companyName",
    children_field="products",
    child_fields=("item", "price", "note"),
)

QUOTE_THREAD = CollectionSpec(
    name="rfq",
    parent_key="QuoteRequest",
    children_field="quotation",
    child_fields=("quotedItem", "quotedPrice", "quotedNote"),
)

TENDER_THREAD = CollectionSpec(
    name="open",
    parent_key="BidRequest",
    children_field="bids",
    child_fields=("bidItem", "bidPrice", "bidNote"),
)

COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.name: spec for spec in (CATALOG, QUOTE_THREAD, TENDER_THREAD)
}


def get_collection(name: str) -> CollectionSpec:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise KeyError(f"Unknown collection: {name}") from None
