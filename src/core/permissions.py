# src/core/permissions.py
"""Static role allow-list per (resource, operation)"""
from typing import Dict, FrozenSet, Mapping, Optional, Tuple
from models.enums import Operation, Resource, UserRole
from utils.exceptions import AuthorizationError
from utils.logger import setup_logger

logger = setup_logger("AUTHORIZATION_GUARD")

DOCTOR = UserRole.DOCTOR.value
NURSE = UserRole.NURSE.value
STAFF = UserRole.STAFF.value
AFFILIATE = UserRole.AFFILIATE.value
HOSPITAL = UserRole.HOSPITAL.value

ALL_ROLES = frozenset(role.value for role in UserRole)

PermissionTable = Mapping[Tuple[Resource, Operation], FrozenSet[str]]


def _grant(read, write) -> Dict[Operation, FrozenSet[str]]:
    return {Operation.READ: frozenset(read), Operation.WRITE: frozenset(write)}


_BY_RESOURCE = {
    Resource.PATIENTS: _grant({DOCTOR, NURSE, STAFF}, {DOCTOR, STAFF}),
    Resource.ADMISSIONS: _grant({DOCTOR, NURSE, STAFF}, {DOCTOR, NURSE, STAFF}),
    Resource.TREATMENT_LOGS: _grant({DOCTOR, NURSE}, {DOCTOR, NURSE}),
    Resource.BILLINGS: _grant({DOCTOR, NURSE, STAFF}, {DOCTOR, NURSE, STAFF}),
    Resource.INVENTORY: _grant({NURSE, STAFF}, {NURSE, STAFF}),
    Resource.DIET_PLANS: _grant({NURSE}, {NURSE}),
    Resource.USERS: _grant({DOCTOR, HOSPITAL}, {DOCTOR}),
    Resource.AFFILIATE_TRACKING: _grant({AFFILIATE}, {AFFILIATE}),
    Resource.AFFILIATE_ACCOUNTS: _grant({AFFILIATE}, {AFFILIATE}),
    Resource.PAYMENTS: _grant({AFFILIATE}, {AFFILIATE}),
    # Written only as a side effect of other writes
    Resource.ACTIVITY_LOGS: _grant(ALL_ROLES, ()),
}

PERMISSIONS: PermissionTable = {
    (resource, operation): roles
    for resource, grants in _BY_RESOURCE.items()
    for operation, roles in grants.items()
}


class AuthorizationGuard:
    """Table-driven role check run before any store access.

    The role is read from the caller's stored profile, never from token
    claims. Pairs missing from the table are denied.
    """

    def __init__(self, permissions: Optional[PermissionTable] = None):
        self.permissions = PERMISSIONS if permissions is None else permissions

    def allowed_roles(self, resource: Resource, operation: Operation) -> FrozenSet[str]:
        return self.permissions.get((Resource(resource), Operation(operation)), frozenset())

    def is_allowed(self, role: Optional[str], resource: Resource, operation: Operation) -> bool:
        return role in self.allowed_roles(resource, operation)

    def require_active(self, user):
        """Deactivated profiles are refused whatever their role"""
        if not getattr(user, "is_active", False):
            logger.warning(f"Inactive user attempted access: {user.id}")
            raise AuthorizationError("Inactive user")
        return user

    def check(self, user, resource: Resource, operation: Operation):
        """Return ``user`` when permitted, raise AuthorizationError otherwise"""
        resource, operation = Resource(resource), Operation(operation)
        self.require_active(user)

        if not self.is_allowed(user.role, resource, operation):
            logger.warning(
                f"Role check failed for {user.id}. "
                f"Required: {sorted(self.allowed_roles(resource, operation))}, Has: {user.role}"
            )
            raise AuthorizationError(
                f"Role '{user.role}' may not {operation.value} {resource.value}"
            )
        return user


authorization_guard = AuthorizationGuard()
