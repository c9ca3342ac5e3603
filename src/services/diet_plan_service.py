# src/services/diet_plan_service.py
from models.enums import ActivityType, Resource
from .activity_service import activity_service
from .base_service import DocumentService


class DietPlanService(DocumentService):
    def __init__(self):
        super().__init__(Resource.DIET_PLANS)

    async def after_create(self, store, document, actor) -> None:
        await activity_service.record(
            store,
            ActivityType.DIET_UPDATED,
            title="Diet Plan Updated",
            description=f"Diet plan created for patient {document.patient_id}",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )


diet_plan_service = DietPlanService()
