# src/db/document_store.py
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
from sqlalchemy import and_, func, or_, select, text
from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncEngine
from db.database import create_session_factory, create_store_engine, create_tables
from db.query import (
    EQ,
    GT,
    GTE,
    LT,
    LTE,
    Condition,
    FieldComparison,
    FieldFilter,
    StoreQuery,
)
from models.document import Document, generate_document_id
from utils.exceptions import QueryError, StoreUnavailableError
from utils.logger import setup_logger

logger = setup_logger("DOCUMENT_STORE")

DocumentData = Dict[str, Any]

_CONNECTIVITY_ERRORS = (OperationalError, InterfaceError, DisconnectionError, OSError)


def _compare(left, op: str, right):
    if op == EQ:
        return left == right
    if op == LT:
        return left < right
    if op == LTE:
        return left <= right
    if op == GT:
        return left > right
    if op == GTE:
        return left >= right
    raise QueryError(f"Unsupported operator: {op}")


def _field(name: str, sample: Any = None):
    """JSON path expression for ``data[name]`` cast to match ``sample``"""
    element = Document.data[name]
    if isinstance(sample, bool):
        return element.as_boolean()
    if isinstance(sample, (int, float)):
        return element.as_float()
    return element.as_string()


class DocumentStore:
    """Collection-oriented document store client.

    One instance is built at process start and handed to every service
    call. Documents are JSON maps keyed by a store-generated identifier.
    """

    def __init__(self, url: str, echo: bool = False, engine: Optional[AsyncEngine] = None):
        self.url = url
        self.engine = engine or create_store_engine(url, echo=echo)
        self._session_factory = create_session_factory(self.engine)

    @contextmanager
    def _errors(self, operation: str, read: bool = True):
        try:
            yield
        except _CONNECTIVITY_ERRORS as e:
            logger.error(f"Store unreachable during {operation}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Document store unavailable during {operation}")
        except SQLAlchemyError as e:
            logger.error(f"Store rejected {operation}: {e}", exc_info=True)
            if read:
                raise QueryError(f"Document store rejected {operation}")
            raise

    # Lifecycle

    async def create_collections(self) -> None:
        with self._errors("table creation", read=False):
            await create_tables(self.engine)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Store ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Document store connections closed")

    # Writes

    async def add(self, collection: str, data: DocumentData) -> DocumentData:
        """Insert a document under a fresh identifier and return its snapshot"""
        document = Document(
            id=generate_document_id(), collection=collection, data=dict(data)
        )
        with self._errors(f"add to {collection}", read=False):
            async with self._session_factory() as session:
                session.add(document)
                await session.commit()
        logger.debug(f"Added {collection}/{document.id}")
        return document.to_dict()

    async def update(
        self, collection: str, document_id: str, fields: DocumentData
    ) -> Optional[DocumentData]:
        """Merge ``fields`` into an existing document; None when it does not exist"""
        with self._errors(f"update {collection}", read=False):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Document).where(
                        Document.collection == collection, Document.id == document_id
                    )
                )
                document = result.scalar_one_or_none()
                if document is None:
                    return None

                # Reassign so the JSON column is flagged dirty
                document.data = {**(document.data or {}), **fields}
                await session.commit()
                return document.to_dict()

    # Reads

    async def get(self, collection: str, document_id: str) -> Optional[DocumentData]:
        with self._errors(f"get {collection}"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Document).where(
                        Document.collection == collection, Document.id == document_id
                    )
                )
                document = result.scalar_one_or_none()
                return document.to_dict() if document else None

    async def query(self, query: StoreQuery) -> List[DocumentData]:
        statement = select(Document).where(*self._where(query))

        if query.order_by:
            sort_column = _field(query.order_by)
            if query.descending:
                statement = statement.order_by(sort_column.desc(), Document.id.desc())
            else:
                statement = statement.order_by(sort_column.asc(), Document.id.asc())
        else:
            statement = statement.order_by(Document.id.asc())

        if query.offset:
            statement = statement.offset(query.offset)
        if query.limit is not None:
            statement = statement.limit(query.limit)

        with self._errors(f"query on {query.collection}"):
            async with self._session_factory() as session:
                result = await session.execute(statement)
                return [document.to_dict() for document in result.scalars().all()]

    async def count(self, query: StoreQuery) -> int:
        statement = (
            select(func.count()).select_from(Document).where(*self._where(query))
        )
        with self._errors(f"count on {query.collection}"):
            async with self._session_factory() as session:
                result = await session.execute(statement)
                return result.scalar_one()

    def _where(self, query: StoreQuery) -> list:
        clauses = [Document.collection == query.collection]
        clauses.extend(self._condition(condition) for condition in query.conditions)

        if query.order_by:
            sort_column = _field(query.order_by)
            # Documents lacking the sort field never appear in ordered results
            clauses.append(sort_column.is_not(None))

            if query.start_after is not None:
                last_value, last_id = query.start_after
                if query.descending:
                    clauses.append(
                        or_(
                            sort_column < last_value,
                            and_(sort_column == last_value, Document.id < last_id),
                        )
                    )
                else:
                    clauses.append(
                        or_(
                            sort_column > last_value,
                            and_(sort_column == last_value, Document.id > last_id),
                        )
                    )
        return clauses

    def _condition(self, condition: Condition):
        if isinstance(condition, FieldFilter):
            return _compare(
                _field(condition.field, condition.value), condition.op, condition.value
            )
        if isinstance(condition, FieldComparison):
            return _compare(
                _field(condition.left, 0), condition.op, _field(condition.right, 0)
            )
        raise QueryError(f"Unsupported condition: {condition!r}")
