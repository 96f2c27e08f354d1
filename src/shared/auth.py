"""Bearer-token verification and role gates for the API.

Tokens are issued elsewhere; this module only verifies them and exposes the
caller as an ``Actor``.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from fastapi import Depends, Header
from jose import JWTError, jwt
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import AuthenticationError, Forbidden


class Role(Enum):
    USER = "user"
    EMPLOYEE = "employee"
    ADMIN = "admin"


class Actor(BaseModel):
    id: str
    role: str = Role.USER.value
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.ADMIN.value, Role.EMPLOYEE.value)


def create_access_token(actor: Actor, expires_minutes: int = 60 * 24 * 7) -> str:
    settings = get_settings()
    claims = {
        "id": actor.id,
        "role": actor.role,
        "name": actor.name,
        "exp": datetime.now(UTC) + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Actor:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Token is not valid.") from None

    if not payload.get("id"):
        raise AuthenticationError("Token is not valid.")
    return Actor(id=str(payload["id"]), role=payload.get("role", Role.USER.value), name=payload.get("name"))


def get_current_actor(authorization: str | None = Header(None)) -> Actor:
    if not authorization:
        raise AuthenticationError("Access denied. No token provided.")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access denied. No token provided.")
    return decode_access_token(token.strip())


def require_roles(*roles: Role):
    """Dependency factory admitting only callers holding one of ``roles``."""
    allowed = {role.value for role in roles}

    def _dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in allowed:
            raise Forbidden(f"Access denied. {actor.role} role is not authorized to access this resource.")
        return actor

    return _dependency


admin_only = require_roles(Role.ADMIN)
admin_or_employee = require_roles(Role.ADMIN, Role.EMPLOYEE)
