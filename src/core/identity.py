# src/core/identity.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from jose import ExpiredSignatureError, JWTError, jwt
from core.config import settings
from schemas.user_schemas import UserProfile
from services.staff_service import staff_service
from utils.exceptions import UnauthorizedException
from utils.logger import setup_logger

logger = setup_logger("IDENTITY_PROVIDER")


@dataclass(frozen=True)
class VerifiedToken:
    subject_id: str
    claims: Dict[str, Any] = field(default_factory=dict)


class IdentityProvider:
    """Verifies bearer tokens issued by the external identity provider.

    Credentials are never issued or stored here; a verified subject is
    mapped to its profile document in the ``users`` collection.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer

    @classmethod
    def from_settings(cls) -> "IdentityProvider":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            audience=settings.TOKEN_AUDIENCE or None,
            issuer=settings.TOKEN_ISSUER or None,
        )

    def verify_token(self, token: str) -> VerifiedToken:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise UnauthorizedException("Token has expired")
        except JWTError as e:
            logger.error(f"JWT validation failed: {str(e)}")
            raise UnauthorizedException("Could not validate credentials")

        subject_id = claims.get("sub")
        if not subject_id:
            logger.warning("Invalid token payload - missing sub")
            raise UnauthorizedException("Invalid token payload")
        return VerifiedToken(subject_id=subject_id, claims=claims)

    async def get_profile(self, store, subject_id: str) -> UserProfile:
        profile = await staff_service.get_by_uid(store, subject_id)
        if profile is None:
            logger.warning(f"No profile for subject: {subject_id}")
            raise UnauthorizedException("User profile not found")
        return profile
