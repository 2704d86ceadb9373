"""
APIRouter for the procurement collections.

Endpoints (same shape for each collection):
- GET    /library | /rfq | /open   list every record
- POST   /library | /rfq | /open   create the record for a key or append to it
- DELETE /library | /rfq | /open   remove one line item
- PUT    /library | /rfq | /open   replace one line item's attributes

Plus the placeholder /library/search (GET and POST echo only).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_db
from src.api.schemas import (
    CatalogCreateRequest,
    CatalogDeleteRequest,
    CatalogUpdateRequest,
    QuoteCreateRequest,
    QuoteDeleteRequest,
    QuoteUpdateRequest,
    TenderCreateRequest,
    TenderDeleteRequest,
    TenderUpdateRequest,
)
from src.controllers.collection_controller import (
    CatalogController,
    CollectionController,
    QuoteThreadController,
    TenderThreadController,
)
from src.errors import StorageError

logger = logging.getLogger(__name__)

api = APIRouter()

SERVER_ERROR = "Server error"
SAVE_FAILED = "Failed to save data"


def _server_error(message: str, exc: StorageError) -> JSONResponse:
    logger.error("%s: %s", message, exc.details or exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message})


async def _list(controller: CollectionController):
    try:
        return await controller.list_all()
    except StorageError as e:
        return _server_error(SERVER_ERROR, e)


async def _create(controller: CollectionController, parent_key: str, fields: Dict[str, Any]):
    try:
        record = await controller.create_or_append(parent_key, fields)
    except StorageError as e:
        return _server_error(SAVE_FAILED, e)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=record)


async def _delete(controller: CollectionController, parent_id: str, child_id: str, message: str):
    try:
        await controller.delete_child(parent_id, child_id)
    except StorageError as e:
        return _server_error(SERVER_ERROR, e)
    return {"message": message}


async def _update(controller: CollectionController, parent_id: str, child_id: str, fields: Dict[str, Any], message: str):
    try:
        await controller.update_child(parent_id, child_id, fields)
    except StorageError as e:
        return _server_error(SERVER_ERROR, e)
    return {"message": message}


# --------------------------------------------------------------------------- #
# Company catalogs
# --------------------------------------------------------------------------- #
@api.get("/library", tags=["Library"])
async def list_catalogs(db=Depends(get_db)):
    return await _list(CatalogController(db))


@api.post("/library", tags=["Library"])
async def add_catalog_product(payload: CatalogCreateRequest, db=Depends(get_db)):
    fields = payload.model_dump(exclude={"companyName"})
    return await _create(CatalogController(db), payload.companyName, fields)


@api.delete("/library", tags=["Library"])
async def delete_catalog_product(payload: CatalogDeleteRequest, db=Depends(get_db)):
    return await _delete(CatalogController(db), payload.companyId, payload.productId, "Product deleted successfully")


@api.put("/library", tags=["Library"])
async def update_catalog_product(payload: CatalogUpdateRequest, db=Depends(get_db)):
    return await _update(
        CatalogController(db),
        payload.companyId,
        payload.productId,
        payload.updates.model_dump(),
        "Product updated successfully",
    )


@api.get("/library/search", tags=["Library"])
async def library_search_status():
    return {"message": "Working"}


@api.post("/library/search", tags=["Library"])
async def library_search(payload: Optional[Dict[str, Any]] = Body(default=None)):
    # Placeholder: echoes the query, no lookup happens yet.
    return {"message": "Search endpoint working", "searchQuery": payload or {}}


# --------------------------------------------------------------------------- #
# Request-for-quote threads
# --------------------------------------------------------------------------- #
@api.get("/rfq", tags=["RFQ"])
async def list_quote_threads(db=Depends(get_db)):
    return await _list(QuoteThreadController(db))


@api.post("/rfq", tags=["RFQ"])
async def add_quotation(payload: QuoteCreateRequest, db=Depends(get_db)):
    fields = payload.model_dump(exclude={"QuoteRequest"})
    return await _create(QuoteThreadController(db), payload.QuoteRequest, fields)


@api.delete("/rfq", tags=["RFQ"])
async def delete_quotation(payload: QuoteDeleteRequest, db=Depends(get_db)):
    return await _delete(QuoteThreadController(db), payload.quoteId, payload.itemId, "Quote item deleted successfully")


@api.put("/rfq", tags=["RFQ"])
async def update_quotation(payload: QuoteUpdateRequest, db=Depends(get_db)):
    return await _update(
        QuoteThreadController(db),
        payload.quoteId,
        payload.itemId,
        payload.updates.model_dump(),
        "Quotation updated successfully",
    )


# --------------------------------------------------------------------------- #
# Open tender bid threads
# --------------------------------------------------------------------------- #
@api.get("/open", tags=["Open Tenders"])
async def list_tender_threads(db=Depends(get_db)):
    return await _list(TenderThreadController(db))


@api.post("/open", tags=["Open Tenders"])
async def add_bid(payload: TenderCreateRequest, db=Depends(get_db)):
    fields = payload.model_dump(exclude={"BidRequest"})
    return await _create(TenderThreadController(db), payload.BidRequest, fields)


@api.delete("/open", tags=["Open Tenders"])
async def delete_bid(payload: TenderDeleteRequest, db=Depends(get_db)):
    return await _delete(TenderThreadController(db), payload.tenderId, payload.bidId, "Bid deleted successfully")


@api.put("/open", tags=["Open Tenders"])
async def update_bid(payload: TenderUpdateRequest, db=Depends(get_db)):
    return await _update(
        TenderThreadController(db),
        payload.tenderId,
        payload.bidId,
        payload.updates.model_dump(),
        "Bid updated successfully",
    )
