"""Bearer-token verification and role checks.

Tokens are issued by the external auth service. This module only decodes
them into a :class:`CurrentUser`; ``create_access_token`` exists for
tooling and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from mentorhub.core.config import settings
from mentorhub.core.exceptions import ForbiddenError, UnauthorizedError

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = expires_delta or timedelta(minutes=settings.access_token_ttl_minutes)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> CurrentUser:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return CurrentUser(id=int(claims["sub"]), role=str(claims.get("role") or "student"))
    except (JWTError, KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid or expired token")


def get_current_user(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> CurrentUser:
    if not creds:
        raise UnauthorizedError()
    return decode_access_token(creds.credentials)


def require_role(*roles: str):
    def _inner(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise ForbiddenError("Insufficient role for this action")
        return user
    return _inner
