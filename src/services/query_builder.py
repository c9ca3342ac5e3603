# src/services/query_builder.py
from enum import Enum
from typing import Any, Mapping, Optional

from db.query import EQ, FieldFilter, StoreQuery
from models.enums import Resource
from utils.exceptions import QueryError
from utils.logger import setup_logger
from .resources import get_resource_config

logger = setup_logger("QUERY_BUILDER")


def _coerce(name: str, value: Any, expected: type) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, expected) and not (
        expected is int and isinstance(value, bool)
    ):
        return value
    try:
        return expected(value)
    except (TypeError, ValueError):
        raise QueryError(
            f"Filter '{name}' expects {expected.__name__}, got {value!r}"
        )


def build_query(
    resource: Resource, filters: Optional[Mapping[str, Any]] = None
) -> StoreQuery:
    """Translate a resource and its optional equality filters into a store query.

    Filters whose value is None are dropped rather than matched against
    null. Every remaining filter is ANDed. Unknown filter names are
    rejected before the store sees anything.
    """
    config = get_resource_config(resource)
    query = StoreQuery(
        collection=config.collection,
        order_by=config.sort_field,
        descending=config.descending,
    )

    for name, value in (filters or {}).items():
        if value is None:
            continue

        if name in config.comparisons:
            # Boolean switch: only a true value narrows the result
            if _coerce(name, value, bool):
                query = query.where(config.comparisons[name])
            continue

        if name not in config.filters:
            raise QueryError(
                f"Unsupported filter '{name}' for {config.collection}"
            )

        query = query.where(
            FieldFilter(name, EQ, _coerce(name, value, config.filters[name]))
        )

    logger.debug(
        f"Built query on {config.collection}: "
        f"{len(query.conditions)} condition(s), order by {config.sort_field}"
    )
    return query
