"""Request bodies for the search and collection endpoints.

Unknown fields are rejected. Child attributes are optional: a missing attribute
is stored as null, and on update it overwrites the previous value with null.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class _StrictBody(BaseModel):
    model_config = ConfigDict(extra="forbid")


# --------------------------------------------------------------------------- #
# Channel search
# --------------------------------------------------------------------------- #
class SearchRequest(_StrictBody):
    keyWord: StrictStr = ""
    inviteLink: StrictStr = Field(..., min_length=1)


# --------------------------------------------------------------------------- #
# Company catalogs (/library)
# --------------------------------------------------------------------------- #
class ProductFields(_StrictBody):
    item: Optional[str] = None
    price: Optional[Union[int, float]] = None
    note: Optional[str] = None


class CatalogCreateRequest(ProductFields):
    companyName: StrictStr = Field(..., min_length=1)


class CatalogDeleteRequest(_StrictBody):
    companyId: StrictStr
    productId: StrictStr


class CatalogUpdateRequest(CatalogDeleteRequest):
    updates: ProductFields


# --------------------------------------------------------------------------- #
# Request-for-quote threads (/rfq)
# --------------------------------------------------------------------------- #
class QuotationFields(_StrictBody):
    quotedItem: Optional[str] = None
    quotedPrice: Optional[Union[int, float]] = None
    quotedNote: Optional[str] = None


class QuoteCreateRequest(QuotationFields):
    QuoteRequest: StrictStr = Field(..., min_length=1)


class QuoteDeleteRequest(_StrictBody):
    quoteId: StrictStr
    itemId: StrictStr


class QuoteUpdateRequest(QuoteDeleteRequest):
    updates: QuotationFields


# --------------------------------------------------------------------------- #
# Open tender bid threads (/open)
# --------------------------------------------------------------------------- #
class BidFields(_StrictBody):
    bidItem: Optional[str] = None
    bidPrice: Optional[Union[int, float]] = None
    bidNote: Optional[str] = None


class TenderCreateRequest(BidFields):
    BidRequest: StrictStr = Field(..., min_length=1)


class TenderDeleteRequest(_StrictBody):
    tenderId: StrictStr
    bidId: StrictStr


class TenderUpdateRequest(TenderDeleteRequest):
    updates: BidFields
