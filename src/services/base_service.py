# src/services/base_service.py
import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from models.enums import Resource
from schemas.base_schemas import BaseSchema, CursorPage, PaginatedResponse
from utils.exceptions import NotFoundError, QueryError, ValidationError
from utils.logger import setup_logger
from utils.time_utils import iso_now, to_iso
from . import pagination
from .query_builder import build_query
from .resources import get_resource_config

Payload = Union[BaseModel, Mapping[str, Any]]
DocumentData = Dict[str, Any]


def jsonify(value: Any) -> Any:
    """Convert a dumped payload into store-ready JSON values"""
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: jsonify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonify(item) for item in value]
    return value


class DocumentService:
    """Generic create/read/update/paginate over one resource collection.

    Every method takes the store client as its first argument; subclasses
    hook into creation and updates through ``prepare_create``,
    ``after_create`` and ``prepare_update``.
    """

    # field -> terminal value; a document that reached it cannot leave it
    one_way: Dict[str, str] = {}

    def __init__(self, resource: Resource):
        self.resource = Resource(resource)
        self.config = get_resource_config(self.resource)
        self.logger = setup_logger(f"SERVICE_{self.config.label}")

    # Boundary conversions

    def to_document(self, snapshot: DocumentData) -> BaseSchema:
        return self.config.document_schema.model_validate(snapshot)

    def _validate(self, schema, payload: Payload, operation: str) -> DocumentData:
        """Validated payload as store JSON.

        Creates keep schema defaults so the stored document matches what
        reads return; updates carry only the fields the caller supplied.
        """
        if schema is None:
            raise ValidationError(
                f"{self.config.label} documents do not support {operation}"
            )
        try:
            if isinstance(payload, schema):
                model = payload
            elif isinstance(payload, BaseModel):
                model = schema.model_validate(payload.model_dump(exclude_unset=True))
            else:
                model = schema.model_validate(dict(payload))
        except PydanticValidationError as e:
            self.logger.warning(f"Rejected {operation} payload: {e.error_count()} error(s)")
            raise ValidationError(
                e.errors(include_url=False, include_context=False, include_input=False)
            )
        return jsonify(
            model.model_dump(
                by_alias=True, exclude_unset=operation == "update", exclude_none=True
            )
        )

    # Reads

    async def get(self, store, id: str) -> BaseSchema:
        """Fetch one document by id"""
        snapshot = await store.get(self.config.collection, id)
        if snapshot is None:
            raise NotFoundError(f"{self.config.label} {id} not found")
        return self.to_document(snapshot)

    async def fetch_page(
        self,
        store,
        filters: Optional[Mapping[str, Any]] = None,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> CursorPage:
        """One forward page of matching documents plus the resume cursor"""
        query = build_query(self.resource, filters)
        snapshots, next_cursor = await pagination.fetch_page(
            store, query, cursor, page_size
        )
        return CursorPage(
            data=[self.to_document(s) for s in snapshots], cursor=next_cursor
        )

    async def list(
        self,
        store,
        filters: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> PaginatedResponse:
        """Offset-paginated list with the total match count"""
        if page < 1:
            raise QueryError("Page must be a positive integer")
        size = pagination.resolve_page_size(limit)
        query = build_query(self.resource, filters)

        total = await store.count(query)
        snapshots = await store.query(query.with_limit(size, (page - 1) * size))

        return PaginatedResponse(
            data=[self.to_document(s) for s in snapshots],
            total=total,
            page=page,
            limit=size,
            total_pages=math.ceil(total / size) if total else 0,
        )

    async def find_all(
        self, store, filters: Optional[Mapping[str, Any]] = None
    ) -> List[DocumentData]:
        """Every matching raw snapshot, walked page by page"""
        query = build_query(self.resource, filters)
        documents: List[DocumentData] = []
        async for page in pagination.iterate(store, query):
            documents.extend(page)
        return documents

    # Writes

    async def prepare_create(self, store, data: DocumentData, actor) -> DocumentData:
        return data

    async def after_create(self, store, document: BaseSchema, actor) -> None:
        return None

    async def prepare_update(
        self, store, current: DocumentData, changes: DocumentData, actor
    ) -> DocumentData:
        return changes

    async def create(self, store, payload: Payload, actor=None) -> BaseSchema:
        """Validate and persist a new document.

        ``id`` and the creation timestamps are always assigned here; a
        payload carrying them fails validation.
        """
        data = self._validate(self.config.create_schema, payload, "create")
        data = await self.prepare_create(store, data, actor)

        now = iso_now()
        for stamp in self.config.create_stamps:
            data[stamp] = now
        if actor is not None and "created_by_id" in self.config.document_schema.model_fields:
            data["createdById"] = actor.id

        snapshot = await store.add(self.config.collection, data)
        document = self.to_document(snapshot)
        self.logger.info(f"Created {self.config.label} with ID: {document.id}")

        await self.after_create(store, document, actor)
        return document

    async def update(self, store, id: str, payload: Payload, actor=None) -> BaseSchema:
        """Merge the supplied fields into an existing document"""
        changes = self._validate(self.config.update_schema, payload, "update")
        if not changes:
            raise ValidationError("No fields supplied for update")
        return await self.apply_update(store, id, changes, actor)

    async def apply_update(
        self, store, id: str, changes: DocumentData, actor=None
    ) -> BaseSchema:
        """Merge already-validated fields; used by update and state transitions"""
        locked = self.config.immutable.intersection(changes)
        if locked:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(locked))}")

        current = await store.get(self.config.collection, id)
        if current is None:
            raise NotFoundError(f"{self.config.label} {id} not found")

        self._check_transitions(current, changes)
        changes = await self.prepare_update(store, current, dict(changes), actor)

        now = iso_now()
        for stamp in self.config.update_stamps:
            changes[stamp] = now

        snapshot = await store.update(self.config.collection, id, changes)
        if snapshot is None:
            # Removed between the read and the write
            raise NotFoundError(f"{self.config.label} {id} not found")

        self.logger.info(f"Updated {self.config.label} with ID: {id}")
        return self.to_document(snapshot)

    def _check_transitions(self, current: DocumentData, changes: DocumentData) -> None:
        for field, terminal in self.one_way.items():
            if field not in changes:
                continue
            if current.get(field) == terminal and changes[field] != terminal:
                raise ValidationError(
                    f"{self.config.label} {field} cannot change from "
                    f"'{terminal}' to '{changes[field]}'"
                )

    async def count(self, store, filters: Optional[Mapping[str, Any]] = None) -> int:
        return await store.count(build_query(self.resource, filters))

