"""
Models initialization file
"""

from .document import Document, generate_document_id
from .enums import (
    UserRole,
    GenderEnum,
    AdmissionType,
    AdmissionStatus,
    PaymentStatus,
    InventoryType,
    AccountType,
    AccountStatus,
    ActivityType,
    Operation,
    Resource,
)

__all__ = [
    "Document",
    "generate_document_id",
    "UserRole",
    "GenderEnum",
    "AdmissionType",
    "AdmissionStatus",
    "PaymentStatus",
    "InventoryType",
    "AccountType",
    "AccountStatus",
    "ActivityType",
    "Operation",
    "Resource",
]
