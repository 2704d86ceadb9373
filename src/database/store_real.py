"""
Real SQL-backed document store for production when DATABASE_URL is set.
Implements the same interface as src.database.store (in-memory stub).
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import create_engine, delete, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from src.database.collections import CollectionSpec
from src.database.models import TABLES, Base, TableMapping
from src.errors import StorageError

logger = logging.getLogger(__name__)


def _normalize_connection_string(s: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace."""
    s = s.strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    return s


def _engine_kwargs(connection_string: str) -> Dict[str, Any]:
    if connection_string.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


class DocumentStore:
    """
    SQLAlchemy data access for the procurement collections. Use when
    DATABASE_URL is set.
    """

    def __init__(self, connection_string: str) -> None:
        connection_string = _normalize_connection_string(connection_string)
        self.engine = create_engine(connection_string, **_engine_kwargs(connection_string))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def create_tables(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError(details=str(e)) from e

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False

    @contextmanager
    def _session(self) -> Iterator[Session]:
        s = self.SessionLocal()
        try:
            yield s
            s.commit()
        except IntegrityError:
            s.rollback()
            raise
        except SQLAlchemyError as e:
            s.rollback()
            logger.error("Database operation failed: %s", e)
            raise StorageError(details=str(e)) from e
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #
    def list_all(self, spec: CollectionSpec) -> List[Dict[str, Any]]:
        table = TABLES[spec.name]
        with self._session() as s:
            stmt = select(table.parent).options(selectinload(getattr(table.parent, table.children_attr)))
            parents = s.execute(stmt).scalars().all()
            return [self._to_document(spec, table, p) for p in parents]

    def create_or_append(self, spec: CollectionSpec, parent_key: Optional[str], child_fields: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self._create_or_append_once(spec, parent_key, child_fields)
        except IntegrityError:
            # A concurrent writer inserted the same key between our lookup and insert;
            # the second pass finds that parent and appends to it.
            logger.info("Parent key conflict in %s, appending to existing record", spec.name)
            try:
                return self._create_or_append_once(spec, parent_key, child_fields)
            except IntegrityError as e:
                raise StorageError(details=str(e)) from e

    def _create_or_append_once(self, spec: CollectionSpec, parent_key: Optional[str], child_fields: Dict[str, Any]) -> Dict[str, Any]:
        table = TABLES[spec.name]
        parent_table = table.parent.__table__
        with self._session() as s:
            key_col = getattr(table.parent, table.parent_key_column)
            stmt = (
                select(table.parent)
                .where(key_col.is_(None) if parent_key is None else key_col == parent_key)
                .with_for_update()
            )
            parent = s.execute(stmt).scalars().first()
            if parent is None:
                parent = table.parent(**{table.parent_key_column: parent_key})
                s.add(parent)
                s.flush()

            # Appends to one parent serialize on this row write; each gets the next position.
            bump = (
                update(parent_table)
                .where(parent_table.c.id == parent.id)
                .values(child_count=parent_table.c.child_count + 1)
                .returning(parent_table.c.child_count)
            )
            position = s.execute(bump).scalar_one() - 1

            values = {table.child_columns[k]: v for k, v in spec.pick_child_fields(child_fields).items()}
            s.add(table.child(position=position, **{table.parent_fk_column: parent.id}, **values))
            s.flush()
            s.expire(parent)
            return self._to_document(spec, table, parent)

    def delete_child(self, spec: CollectionSpec, parent_id: str, child_id: str) -> bool:
        table = TABLES[spec.name]
        with self._session() as s:
            stmt = delete(table.child).where(
                table.child.id == str(child_id),
                getattr(table.child, table.parent_fk_column) == str(parent_id),
            )
            result = s.execute(stmt)
            return result.rowcount > 0

    def update_child(self, spec: CollectionSpec, parent_id: str, child_id: str, new_fields: Dict[str, Any]) -> bool:
        table = TABLES[spec.name]
        values = {table.child_columns[k]: v for k, v in spec.pick_child_fields(new_fields).items()}
        with self._session() as s:
            stmt = (
                update(table.child)
                .where(
                    table.child.id == str(child_id),
                    getattr(table.child, table.parent_fk_column) == str(parent_id),
                )
                .values(**values)
            )
            result = s.execute(stmt)
            return result.rowcount > 0

    @staticmethod
    def _to_document(spec: CollectionSpec, table: TableMapping, parent: Any) -> Dict[str, Any]:
        children = []
        for child in getattr(parent, table.children_attr):
            entry: Dict[str, Any] = {"_id": child.id}
            for wire, attr in table.child_columns.items():
                entry[wire] = getattr(child, attr)
            children.append(entry)
        return {
            "_id": parent.id,
            spec.parent_key: getattr(parent, table.parent_key_column),
            spec.children_field: children,
        }
