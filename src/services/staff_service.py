# src/services/staff_service.py
from typing import Optional
from models.enums import ActivityType, Resource, UserRole
from schemas.user_schemas import UserProfile
from utils.exceptions import ValidationError
from utils.logger import setup_logger
from .activity_service import activity_service
from .base_service import DocumentService
from .query_builder import build_query

logger = setup_logger("STAFF_SERVICE")


class StaffService(DocumentService):
    """User profiles, keyed in the identity provider by ``uid``"""

    def __init__(self):
        super().__init__(Resource.USERS)

    async def get_by_uid(self, store, uid: str) -> Optional[UserProfile]:
        query = build_query(self.resource, {"uid": uid}).with_limit(1)
        snapshots = await store.query(query)
        return self.to_document(snapshots[0]) if snapshots else None

    async def prepare_create(self, store, data, actor):
        if await self.get_by_uid(store, data["uid"]) is not None:
            raise ValidationError(f"A profile already exists for uid {data['uid']}")

        data["isActive"] = True
        # Staff created by a doctor are attached to that doctor
        if actor is not None and actor.role == UserRole.DOCTOR.value:
            data.setdefault("doctorId", actor.id)
        return data

    async def after_create(self, store, document, actor) -> None:
        await activity_service.record(
            store,
            ActivityType.STAFF_ACCOUNT_CREATED,
            title="Staff Account Created",
            description=f"{document.display_name or document.email} joined as {document.role}",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )


staff_service = StaffService()
