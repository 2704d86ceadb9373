"""
SQLAlchemy models for the procurement collections.
Used by store_real when DATABASE_URL is set.

Each collection is a parent table (unique natural key) plus a child table
ordered by insertion position. Positions come from the parent's child_count,
which is only ever bumped by an atomic UPDATE ... RETURNING.
"""
from __future__ import annotations
from typing import Dict, Optional, Type
from uuid import uuid4
from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def _new_id() -> str:
    return uuid4().hex


# ======================================================================
# Company catalogs (/library)
# ======================================================================

class Company(Base):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    company_name: Mapped[Optional[str]] = mapped_column(String(512), unique=True, nullable=True)
    child_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    products: Mapped[list["CompanyProduct"]] = relationship(
        "CompanyProduct",
        back_populates="company",
        order_by="CompanyProduct.position",
        cascade="all, delete-orphan",
    )


class CompanyProduct(Base):
    __tablename__ = "company_products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    company_id: Mapped[str] = mapped_column(String(32), ForeignKey("companies.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    item: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    company: Mapped["Company"] = relationship("Company", back_populates="products")


# ======================================================================
# Request-for-quote threads (/rfq)
# ======================================================================

class QuoteThread(Base):
    __tablename__ = "rfqs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    quote_request: Mapped[Optional[str]] = mapped_column(String(512), unique=True, nullable=True)
    child_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    quotation: Mapped[list["QuotedItem"]] = relationship(
        "QuotedItem",
        back_populates="thread",
        order_by="QuotedItem.position",
        cascade="all, delete-orphan",
    )


class QuotedItem(Base):
    __tablename__ = "rfq_quotations"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    thread_id: Mapped[str] = mapped_column(String(32), ForeignKey("rfqs.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quoted_item: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    quoted_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    quoted_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    thread: Mapped["QuoteThread"] = relationship("QuoteThread", back_populates="quotation")


# ======================================================================
# Open tender bid threads (/open)
# ======================================================================

class TenderThread(Base):
    __tablename__ = "open_tenders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    bid_request: Mapped[Optional[str]] = mapped_column(String(512), unique=True, nullable=True)
    child_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    bids: Mapped[list["Bid"]] = relationship(
        "Bid",
        back_populates="tender",
        order_by="Bid.position",
        cascade="all, delete-orphan",
    )


class Bid(Base):
    __tablename__ = "open_tender_bids"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    tender_id: Mapped[str] = mapped_column(String(32), ForeignKey("open_tenders.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bid_item: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bid_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bid_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    tender: Mapped["TenderThread"] = relationship("TenderThread", back_populates="bids")


# ======================================================================
# Wire-name mapping
# ======================================================================

class TableMapping:
    """Ties a collection name to its ORM classes and wire-to-column names."""

    def __init__(
        self,
        parent: Type[Base],
        child: Type[Base],
        parent_key_column: str,
        children_attr: str,
        parent_fk_column: str,
        child_columns: Dict[str, str],
    ) -> None:
        self.parent = parent
        self.child = child
        self.parent_key_column = parent_key_column
        self.children_attr = children_attr
        self.parent_fk_column = parent_fk_column
        # wire field -> ORM attribute
        self.child_columns = child_columns


TABLES: Dict[str, TableMapping] = {
    "library": TableMapping(
        parent=Company,
        child=CompanyProduct,
        parent_key_column="company_name",
        children_attr="products",
        parent_fk_column="company_id",
        child_columns={"item": "item", "price": "price", "note": "note"},
    ),
    "rfq": TableMapping(
        parent=QuoteThread,
        child=QuotedItem,
        parent_key_column="quote_request",
        children_attr="quotation",
        parent_fk_column="thread_id",
        child_columns={"quotedItem": "quoted_item", "quotedPrice": "quoted_price", "quotedNote": "quoted_note"},
    ),
    "open": TableMapping(
        parent=TenderThread,
        child=Bid,
        parent_key_column="bid_request",
        children_attr="bids",
        parent_fk_column="tender_id",
        child_columns={"bidItem": "bid_item", "bidPrice": "bid_price", "bidNote": "bid_note"},
    ),
}
