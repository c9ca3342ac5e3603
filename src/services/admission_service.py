# src/services/admission_service.py
from datetime import datetime
from typing import Optional
from models.enums import ActivityType, AdmissionStatus, Resource
from utils.exceptions import ValidationError
from utils.logger import setup_logger
from utils.time_utils import iso_now, to_iso
from .activity_service import activity_service
from .base_service import DocumentService

logger = setup_logger("ADMISSION_SERVICE")


class AdmissionService(DocumentService):
    one_way = {"status": AdmissionStatus.DISCHARGED.value}

    def __init__(self):
        super().__init__(Resource.ADMISSIONS)

    async def prepare_create(self, store, data, actor):
        data.setdefault("admissionDate", iso_now())
        data["status"] = AdmissionStatus.ACTIVE.value
        return data

    async def after_create(self, store, document, actor) -> None:
        await activity_service.record(
            store,
            ActivityType.PATIENT_ADMITTED,
            title="Patient Admitted",
            description=f"Patient was admitted as {document.admission_type}",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )

    async def prepare_update(self, store, current, changes, actor):
        # Discharging stamps the discharge date unless the caller gave one
        discharged = AdmissionStatus.DISCHARGED.value
        if changes.get("status") == discharged and current.get("status") != discharged:
            changes.setdefault("dischargeDate", iso_now())
        return changes

    async def discharge(
        self,
        store,
        admission_id: str,
        actor=None,
        discharge_date: Optional[datetime] = None,
    ):
        """Move an active admission to discharged"""
        current = await self.get(store, admission_id)
        if current.status == AdmissionStatus.DISCHARGED.value:
            raise ValidationError(f"Admission {admission_id} is already discharged")

        changes = {"status": AdmissionStatus.DISCHARGED.value}
        if discharge_date is not None:
            changes["dischargeDate"] = to_iso(discharge_date)

        logger.info(f"Discharging admission {admission_id}")
        return await self.apply_update(store, admission_id, changes, actor)


admission_service = AdmissionService()
