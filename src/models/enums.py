# src/models/enums.py
from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    DOCTOR = "doctor"
    NURSE = "nurse"
    STAFF = "staff"
    AFFILIATE = "affiliate"
    HOSPITAL = "hospital"


class GenderEnum(str, PyEnum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class AdmissionType(str, PyEnum):
    OPD = "OPD"
    IPD = "IPD"


class AdmissionStatus(str, PyEnum):
    ACTIVE = "active"
    DISCHARGED = "discharged"


class PaymentStatus(str, PyEnum):
    """Shared by billings and affiliate commission records"""

    PENDING = "pending"
    PAID = "paid"


class InventoryType(str, PyEnum):
    MEDICINE = "medicine"
    SUPPLY = "supply"
    EQUIPMENT = "equipment"


class AccountType(str, PyEnum):
    DOCTOR = "doctor"
    HOSPITAL = "hospital"


class AccountStatus(str, PyEnum):
    TRIAL = "trial"
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class ActivityType(str, PyEnum):
    PATIENT_REGISTERED = "patient_registered"
    TREATMENT_UPDATED = "treatment_updated"
    PAYMENT_RECEIVED = "payment_received"
    PATIENT_ADMITTED = "patient_admitted"
    STAFF_ACCOUNT_CREATED = "staff_account_created"
    DOCTOR_ACCOUNT_CREATED = "doctor_account_created"
    HOSPITAL_ACCOUNT_CREATED = "hospital_account_created"
    COMMISSION_RECEIVED = "commission_received"
    DIET_UPDATED = "diet_updated"
    INVENTORY_UPDATED = "inventory_updated"


class Operation(str, PyEnum):
    READ = "read"
    WRITE = "write"


class Resource(str, PyEnum):
    """Document collections, named as they are stored"""

    PATIENTS = "patients"
    ADMISSIONS = "admissions"
    TREATMENT_LOGS = "treatmentLogs"
    BILLINGS = "billings"
    INVENTORY = "inventoryItems"
    DIET_PLANS = "dietPlans"
    USERS = "users"
    AFFILIATE_TRACKING = "affiliateTracking"
    AFFILIATE_ACCOUNTS = "affiliateAccounts"
    PAYMENTS = "payments"
    ACTIVITY_LOGS = "activityLogs"
