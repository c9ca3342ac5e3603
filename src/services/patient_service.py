# src/services/patient_service.py
from models.enums import ActivityType, Resource
from utils.logger import setup_logger
from .activity_service import activity_service
from .base_service import DocumentService

logger = setup_logger("PATIENT_SERVICE")


class PatientService(DocumentService):
    def __init__(self):
        super().__init__(Resource.PATIENTS)

    async def after_create(self, store, document, actor) -> None:
        """Log the registration in the activity feed"""
        await activity_service.record(
            store,
            ActivityType.PATIENT_REGISTERED,
            title="New Patient Registered",
            description=f"Patient {document.name} was registered",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )


patient_service = PatientService()
