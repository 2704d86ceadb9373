"""
Lightweight in-memory document store for local development and tests.

Implements the same interface as src.database.store_real (SQLAlchemy) so the
API can run without a database. It is NOT intended for production use.
"""

from __future__ import annotations

import copy
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.database.collections import COLLECTIONS, CollectionSpec


@dataclass
class ParentRecord:
    id: str
    key: Optional[str]
    children: List[Dict[str, Any]] = field(default_factory=list)


class DocumentStore:
    """
    In-memory stand-in for the SQL-backed store.

    Parents are kept per collection in insertion order. A single lock guards
    every find-then-write so create_or_append never produces a duplicate parent.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._parents: Dict[str, Dict[str, ParentRecord]] = {name: {} for name in COLLECTIONS}
        self._by_key: Dict[str, Dict[Optional[str], str]] = {name: {} for name in COLLECTIONS}

    # ------------------------------------------------------------------ #
    # Schema / lifecycle
    # ------------------------------------------------------------------ #
    def create_tables(self) -> None:
        """No-op for the in-memory implementation."""
        return None

    def ping(self) -> bool:
        return True

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #
    def list_all(self, spec: CollectionSpec) -> List[Dict[str, Any]]:
        with self._lock:
            return [self._to_document(spec, p) for p in self._parents[spec.name].values()]

    def create_or_append(self, spec: CollectionSpec, parent_key: Optional[str], child_fields: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            parent_id = self._by_key[spec.name].get(parent_key)
            if parent_id is None:
                parent = ParentRecord(id=uuid.uuid4().hex, key=parent_key)
                self._parents[spec.name][parent.id] = parent
                self._by_key[spec.name][parent_key] = parent.id
            else:
                parent = self._parents[spec.name][parent_id]

            child = {"_id": uuid.uuid4().hex, **spec.pick_child_fields(child_fields)}
            parent.children.append(child)
            return self._to_document(spec, parent)

    def delete_child(self, spec: CollectionSpec, parent_id: str, child_id: str) -> bool:
        with self._lock:
            parent = self._parents[spec.name].get(str(parent_id))
            if parent is None:
                return False
            remaining = [c for c in parent.children if c["_id"] != str(child_id)]
            removed = len(remaining) != len(parent.children)
            parent.children = remaining
            return removed

    def update_child(self, spec: CollectionSpec, parent_id: str, child_id: str, new_fields: Dict[str, Any]) -> bool:
        with self._lock:
            parent = self._parents[spec.name].get(str(parent_id))
            if parent is None:
                return False
            for child in parent.children:
                if child["_id"] == str(child_id):
                    child.update(spec.pick_child_fields(new_fields))
                    return True
            return False

    @staticmethod
    def _to_document(spec: CollectionSpec, parent: ParentRecord) -> Dict[str, Any]:
        return {
            "_id": parent.id,
            spec.parent_key: parent.key,
            spec.children_field: copy.deepcopy(parent.children),
        }
