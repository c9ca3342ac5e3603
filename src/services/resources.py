# src/services/resources.py
"""Per-resource configuration shared by the query builder and services"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional, Type

from db.query import LTE, FieldComparison
from models.enums import Resource
from schemas.base_schemas import BaseSchema
from schemas.activity_schemas import ActivityLog
from schemas.admission_schemas import Admission, AdmissionCreate, AdmissionUpdate
from schemas.affiliate_schemas import (
    AccountPayment,
    AffiliateAccount,
    AffiliateAccountCreate,
    AffiliateTracking,
    AffiliateTrackingCreate,
)
from schemas.billing_schemas import Billing, BillingCreate, BillingUpdate
from schemas.diet_plan_schemas import DietPlan, DietPlanCreate, DietPlanUpdate
from schemas.inventory_schemas import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
)
from schemas.patient_schemas import Patient, PatientCreate, PatientUpdate
from schemas.treatment_log_schemas import TreatmentLog, TreatmentLogCreate
from schemas.user_schemas import StaffCreate, StaffUpdate, UserProfile

# Fields no update may touch, whatever the resource
SERVER_OWNED = frozenset({"id", "createdAt", "createdById"})


@dataclass(frozen=True)
class ResourceConfig:
    resource: Resource
    document_schema: Type[BaseSchema]
    create_schema: Optional[Type[BaseSchema]] = None
    update_schema: Optional[Type[BaseSchema]] = None
    sort_field: str = "createdAt"
    descending: bool = True
    # Equality filters: public name -> python type of the stored value
    filters: Mapping[str, type] = field(default_factory=dict)
    # Boolean filters that expand to a field-to-field comparison when true
    comparisons: Mapping[str, FieldComparison] = field(default_factory=dict)
    # Timestamp fields stamped at creation / refreshed on every update
    create_stamps: FrozenSet[str] = frozenset({"createdAt"})
    update_stamps: FrozenSet[str] = frozenset()
    immutable: FrozenSet[str] = SERVER_OWNED

    @property
    def collection(self) -> str:
        return self.resource.value

    @property
    def label(self) -> str:
        return self.document_schema.__name__


RESOURCES: Dict[Resource, ResourceConfig] = {
    Resource.PATIENTS: ResourceConfig(
        resource=Resource.PATIENTS,
        document_schema=Patient,
        create_schema=PatientCreate,
        update_schema=PatientUpdate,
        filters={"doctorId": str},
    ),
    Resource.ADMISSIONS: ResourceConfig(
        resource=Resource.ADMISSIONS,
        document_schema=Admission,
        create_schema=AdmissionCreate,
        update_schema=AdmissionUpdate,
        sort_field="admissionDate",
        filters={
            "patientId": str,
            "status": str,
            "admissionType": str,
            "doctorId": str,
        },
    ),
    Resource.TREATMENT_LOGS: ResourceConfig(
        resource=Resource.TREATMENT_LOGS,
        document_schema=TreatmentLog,
        create_schema=TreatmentLogCreate,
        filters={"admissionId": str, "patientId": str},
    ),
    Resource.BILLINGS: ResourceConfig(
        resource=Resource.BILLINGS,
        document_schema=Billing,
        create_schema=BillingCreate,
        update_schema=BillingUpdate,
        filters={"patientId": str, "status": str, "admissionId": str},
        immutable=SERVER_OWNED | {"invoiceNumber"},
    ),
    Resource.INVENTORY: ResourceConfig(
        resource=Resource.INVENTORY,
        document_schema=InventoryItem,
        create_schema=InventoryItemCreate,
        update_schema=InventoryItemUpdate,
        sort_field="updatedAt",
        filters={"type": str},
        comparisons={
            "reorderNeeded": FieldComparison("quantity", LTE, "reorderLevel"),
        },
        create_stamps=frozenset({"createdAt", "updatedAt"}),
        update_stamps=frozenset({"updatedAt"}),
    ),
    Resource.DIET_PLANS: ResourceConfig(
        resource=Resource.DIET_PLANS,
        document_schema=DietPlan,
        create_schema=DietPlanCreate,
        update_schema=DietPlanUpdate,
        sort_field="updatedAt",
        filters={"patientId": str},
        create_stamps=frozenset({"createdAt", "updatedAt"}),
        update_stamps=frozenset({"updatedAt"}),
    ),
    Resource.USERS: ResourceConfig(
        resource=Resource.USERS,
        document_schema=UserProfile,
        create_schema=StaffCreate,
        update_schema=StaffUpdate,
        filters={
            "doctorId": str,
            "hospitalId": str,
            "role": str,
            "affiliateId": str,
            "uid": str,
        },
        immutable=SERVER_OWNED | {"uid", "email"},
    ),
    Resource.AFFILIATE_TRACKING: ResourceConfig(
        resource=Resource.AFFILIATE_TRACKING,
        document_schema=AffiliateTracking,
        create_schema=AffiliateTrackingCreate,
        filters={
            "affiliateId": str,
            "status": str,
            "year": int,
            "month": int,
            "userType": str,
        },
    ),
    Resource.AFFILIATE_ACCOUNTS: ResourceConfig(
        resource=Resource.AFFILIATE_ACCOUNTS,
        document_schema=AffiliateAccount,
        create_schema=AffiliateAccountCreate,
        filters={"affiliateId": str, "accountType": str, "status": str},
    ),
    Resource.PAYMENTS: ResourceConfig(
        resource=Resource.PAYMENTS,
        document_schema=AccountPayment,
        sort_field="date",
        filters={"accountId": str},
        create_stamps=frozenset(),
    ),
    Resource.ACTIVITY_LOGS: ResourceConfig(
        resource=Resource.ACTIVITY_LOGS,
        document_schema=ActivityLog,
        sort_field="timestamp",
        filters={"userId": str, "type": str},
        create_stamps=frozenset(),
    ),
}


def get_resource_config(resource: Resource) -> ResourceConfig:
    return RESOURCES[Resource(resource)]
