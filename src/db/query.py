# src/db/query.py
"""Store-native query description.

A ``StoreQuery`` is what the document store executes: a collection, a set
of conditions combined with AND, one ordering field and an optional
keyset position to resume after.
"""
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple, Union

EQ = "=="
LT = "<"
LTE = "<="
GT = ">"
GTE = ">="

SUPPORTED_OPERATORS = (EQ, LT, LTE, GT, GTE)


@dataclass(frozen=True)
class FieldFilter:
    """Compare a document field with a literal value"""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator: {self.op}")


@dataclass(frozen=True)
class FieldComparison:
    """Compare two fields of the same document, e.g. quantity <= reorderLevel"""

    left: str
    op: str
    right: str

    def __post_init__(self):
        if self.op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator: {self.op}")


Condition = Union[FieldFilter, FieldComparison]


@dataclass(frozen=True)
class StoreQuery:
    collection: str
    conditions: Tuple[Condition, ...] = ()
    order_by: Optional[str] = None
    descending: bool = True
    limit: Optional[int] = None
    offset: int = 0
    # (sort value, document id) of the last document already returned
    start_after: Optional[Tuple[Any, str]] = None

    def where(self, *conditions: Condition) -> "StoreQuery":
        return replace(self, conditions=self.conditions + tuple(conditions))

    def with_limit(self, limit: Optional[int], offset: int = 0) -> "StoreQuery":
        return replace(self, limit=limit, offset=offset)

    def after(self, sort_value: Any, document_id: str) -> "StoreQuery":
        return replace(self, start_after=(sort_value, document_id))

    @property
    def filter_fields(self) -> List[str]:
        return [c.field for c in self.conditions if isinstance(c, FieldFilter)]
