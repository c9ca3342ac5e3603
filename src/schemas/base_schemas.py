# src/schemas/base_schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, List, TypeVar
from datetime import datetime


class BaseSchema(BaseModel):
    """Base schema with common configuration"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        alias_generator=to_camel,
    )


class WriteSchema(BaseSchema):
    """Create/update payloads: unknown or server-owned fields are rejected"""

    model_config = ConfigDict(extra="forbid")


class IDMixin(BaseSchema):
    """Mixin for store-assigned identifier"""

    id: str


class CreatedMixin(BaseSchema):
    created_at: Optional[datetime] = None


class TimestampMixin(CreatedMixin):
    """Mixin for timestamps"""

    updated_at: Optional[datetime] = None


class AuthorMixin(BaseSchema):
    created_by_id: Optional[str] = None


T = TypeVar("T")


class PaginatedResponse(BaseSchema, Generic[T]):
    """Offset-paginated list envelope"""

    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


class CursorPage(BaseSchema, Generic[T]):
    """One forward page plus the cursor to resume after its last document"""

    data: List[T]
    cursor: Optional[str] = None
