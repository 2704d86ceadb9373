"""Controllers for the procurement collections (catalogs, RFQs, open tenders).

Each controller wraps the configured document store and exposes async CRUD
operations. Store calls are blocking (SQLAlchemy or the in-memory stub), so they
run in a worker thread to keep the event loop free.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from src.database.collections import CATALOG, QUOTE_THREAD, TENDER_THREAD, CollectionSpec

logger = logging.getLogger(__name__)


class CollectionController:
    spec: CollectionSpec

    def __init__(self, db):
        self.db = db

    async def list_all(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self.db.list_all, self.spec)

    async def create_or_append(self, parent_key: Optional[str], child_fields: Dict[str, Any]) -> Dict[str, Any]:
        record = await asyncio.to_thread(self.db.create_or_append, self.spec, parent_key, child_fields)
        logger.info(
            "Appended child to %s parent %s (%d items)",
            self.spec.name,
            record["_id"],
            len(record[self.spec.children_field]),
        )
        return record

    async def delete_child(self, parent_id: str, child_id: str) -> bool:
        removed = await asyncio.to_thread(self.db.delete_child, self.spec, parent_id, child_id)
        if not removed:
            logger.info("Delete in %s matched nothing: parent=%s child=%s", self.spec.name, parent_id, child_id)
        return removed

    async def update_child(self, parent_id: str, child_id: str, new_fields: Dict[str, Any]) -> bool:
        updated = await asyncio.to_thread(self.db.update_child, self.spec, parent_id, child_id, new_fields)
        if not updated:
            logger.info("Update in %s matched nothing: parent=%s child=%s", self.spec.name, parent_id, child_id)
        return updated


class CatalogController(CollectionController):
    spec = CATALOG


class QuoteThreadController(CollectionController):
    spec = QUOTE_THREAD


class TenderThreadController(CollectionController):
    spec = TENDER_THREAD
