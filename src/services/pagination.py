# src/services/pagination.py
"""Forward-only cursor pagination over the document store.

A cursor is an opaque token naming the last document of a page: its
collection, its sort field and the (sort value, id) pair the next page
resumes after. Tokens minted for one collection/sort are rejected for any
other.
"""
import base64
import binascii
import json
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from core.config import settings
from db.query import StoreQuery
from utils.exceptions import QueryError
from utils.logger import setup_logger

logger = setup_logger("PAGINATION")

DocumentData = Dict[str, Any]


def encode_cursor(query: StoreQuery, document: DocumentData) -> str:
    payload = {
        "c": query.collection,
        "o": query.order_by,
        "v": document.get(query.order_by) if query.order_by else None,
        "id": document["id"],
    }
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_cursor(query: StoreQuery, cursor: str) -> Tuple[Any, str]:
    """Return the (sort value, id) pair a cursor points at"""
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        payload = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError):
        raise QueryError("Malformed pagination cursor")

    if not isinstance(payload, dict) or not isinstance(payload.get("id"), str):
        raise QueryError("Malformed pagination cursor")

    if payload.get("c") != query.collection or payload.get("o") != query.order_by:
        raise QueryError("Pagination cursor does not belong to this query")

    return payload.get("v"), payload["id"]


def resolve_page_size(page_size: Optional[int]) -> int:
    if page_size is None:
        return settings.DEFAULT_PAGE_SIZE
    if page_size < 1:
        raise QueryError("Page size must be a positive integer")
    return min(page_size, settings.MAX_PAGE_SIZE)


async def fetch_page(
    store,
    query: StoreQuery,
    cursor: Optional[str] = None,
    page_size: Optional[int] = None,
) -> Tuple[List[DocumentData], Optional[str]]:
    """Fetch at most ``page_size`` documents after ``cursor``.

    Returns the documents and the cursor of the last one; the cursor is
    None once a page comes back empty, which ends the iteration.
    """
    size = resolve_page_size(page_size)
    page_query = query.with_limit(size)
    if cursor:
        page_query = page_query.after(*decode_cursor(query, cursor))

    documents = await store.query(page_query)
    next_cursor = encode_cursor(query, documents[-1]) if documents else None

    logger.debug(
        f"Fetched {len(documents)} document(s) from {query.collection} "
        f"(cursor={'yes' if cursor else 'no'})"
    )
    return documents, next_cursor


async def iterate(
    store, query: StoreQuery, page_size: Optional[int] = None
) -> AsyncIterator[List[DocumentData]]:
    """Yield successive non-empty pages until the store runs dry"""
    cursor = None
    while True:
        documents, cursor = await fetch_page(store, query, cursor, page_size)
        if not documents:
            return
        yield documents
