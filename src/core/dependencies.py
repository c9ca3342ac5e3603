# src/core/dependencies.py
from fastapi import Depends, Header, Request
from core.identity import IdentityProvider
from core.permissions import authorization_guard
from db.document_store import DocumentStore
from models.enums import Operation, Resource
from schemas.user_schemas import UserProfile
from utils.exceptions import UnauthorizedException
from utils.logger import setup_logger

logger = setup_logger("ROLE CHECKER")


def get_store(request: Request) -> DocumentStore:
    """The store client built at startup"""
    return request.app.state.store


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity


async def get_current_user(
    authorization: str = Header(default=None, alias="Authorization"),
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> UserProfile:
    """
    Dependency to resolve the caller's profile from a bearer token

    Raises:
        UnauthorizedException: 401 if the header is missing or the token is invalid
    """
    if not authorization:
        logger.warning("Authorization header missing")
        raise UnauthorizedException("Authorization header is missing")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise UnauthorizedException("Malformed authorization header")

    if scheme.lower() != "bearer":
        logger.warning(f"Invalid auth scheme: {scheme}")
        raise UnauthorizedException("Invalid authentication scheme")

    verified = identity.verify_token(token)
    profile = await identity.get_profile(store, verified.subject_id)

    logger.info(f"Authenticated user: {profile.id} ({profile.role})")
    return profile


async def get_current_active_user(
    current_user: UserProfile = Depends(get_current_user),
) -> UserProfile:
    """
    Dependency to verify the current user is active

    Raises:
        AuthorizationError: 403 if the profile is deactivated
    """
    return authorization_guard.require_active(current_user)


class ResourceGuard:
    """Route dependency enforcing the allow-list for one resource/operation.

    Inactive profiles are rejected inside the guard check.
    """

    def __init__(self, resource: Resource, operation: Operation):
        self.resource = resource
        self.operation = operation

    async def __call__(
        self, user: UserProfile = Depends(get_current_user)
    ) -> UserProfile:
        return authorization_guard.check(user, self.resource, self.operation)
