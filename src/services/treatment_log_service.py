# src/services/treatment_log_service.py
from models.enums import ActivityType, Resource
from .activity_service import activity_service
from .base_service import DocumentService


class TreatmentLogService(DocumentService):
    """Append-only: treatment logs have no update path"""

    def __init__(self):
        super().__init__(Resource.TREATMENT_LOGS)

    async def after_create(self, store, document, actor) -> None:
        await activity_service.record(
            store,
            ActivityType.TREATMENT_UPDATED,
            title="Treatment Updated",
            description=document.title or "A treatment log was updated",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )


treatment_log_service = TreatmentLogService()
