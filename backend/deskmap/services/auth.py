"""
DeskMap - Access Policy
Bearer-token verification and the two-tier read/write capability check
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, FrozenSet, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from deskmap.config import Settings, get_settings
from deskmap.errors import InsufficientRoleError, UnauthenticatedError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our own 401
bearer_scheme = HTTPBearer(auto_error=False)


class Role(str, enum.Enum):
    """User role enumeration."""
    USER = "USER"
    ADMIN = "ADMIN"


class Capability(str, enum.Enum):
    READ = "read"
    WRITE = "write"


ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.USER: frozenset({Capability.READ}),
    Role.ADMIN: frozenset({Capability.READ, Capability.WRITE}),
}


@dataclass(frozen=True)
class Identity:
    """Verified caller, taken from token claims."""
    id: str
    email: str
    role: Role


# Used for every request when authentication is disabled
DEV_IDENTITY = Identity(id="dev-user-id", email="dev@example.com", role=Role.ADMIN)


def has_capability(identity: Identity, capability: Capability) -> bool:
    """Check whether the identity's role grants a capability."""
    return capability in ROLE_CAPABILITIES.get(identity.role, frozenset())


class AuthService:
    """Service for issuing and verifying bearer tokens."""

    @staticmethod
    def create_access_token(
        identity: Identity,
        settings: Settings,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create JWT access token carrying id, email and role."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.jwt_expire_minutes)

        to_encode = {
            "sub": identity.id,
            "email": identity.email,
            "role": identity.role.value,
            "exp": datetime.now(timezone.utc) + expires_delta,
        }
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_token(token: str, settings: Settings) -> Optional[Identity]:
        """Decode and validate JWT token; None when invalid, expired or malformed."""
        try:
            payload = jwt.decode(
                token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
            )
        except JWTError:
            return None

        user_id = payload.get("sub") or payload.get("id")
        email = payload.get("email")
        try:
            role = Role(payload.get("role"))
        except ValueError:
            logger.warning(f"Token carries unknown role: {payload.get('role')!r}")
            return None

        if not user_id or not email:
            return None
        return Identity(id=str(user_id), email=email, role=role)


# Dependency functions for FastAPI
async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings)
) -> Identity:
    """Resolve the caller, raising 401 when no valid bearer token is present."""
    if settings.disable_auth:
        return DEV_IDENTITY

    if credentials is None:
        raise UnauthenticatedError("No token provided")

    identity = AuthService.decode_token(credentials.credentials, settings)
    if identity is None:
        raise UnauthenticatedError("Invalid token")
    return identity


async def require_authenticated(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """Gate for read operations; every role carries READ, so a verified identity suffices."""
    return identity


async def require_admin(
    identity: Identity = Depends(require_authenticated)
) -> Identity:
    """Gate for create/update/delete operations, raise 403 if not admin."""
    if not has_capability(identity, Capability.WRITE):
        logger.warning(f"Write rejected for {identity.email} (role {identity.role.value})")
        raise InsufficientRoleError()
    return identity
