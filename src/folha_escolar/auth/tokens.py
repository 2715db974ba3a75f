from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from ..common.datetime_utils import now_utc
from ..core.constants import JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int

    def to_dict(self) -> dict:
        return {"token": self.token, "token_type": "bearer", "expires_in": self.expires_in}


class TokenCodec:
    """Stateless signed credential (HS256 JWT): no server-side session store."""

    def __init__(self, secret: str, *, lifetime: timedelta):
        self._secret = secret
        self._lifetime = lifetime

    def issue(self, role: Role, *, now: Optional[datetime] = None, lifetime: Optional[timedelta] = None) -> IssuedToken:
        now = now or now_utc()
        lifetime = self._lifetime if lifetime is None else lifetime
        expire = now + lifetime
        claims = {
            "sub": role.value,
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=JWT_ALGORITHM)
        return IssuedToken(token=token, expires_in=max(int(lifetime.total_seconds()), 0))

    def decode(self, token: str) -> dict:
        """Validate signature and expiry; any failure is an AuthenticationError."""
        try:
            return jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            raise AuthenticationError("Credencial inválida ou expirada") from e
