from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConfigurationError
from .tokens import IssuedToken, TokenCodec

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: admin login and credential verification.

    The admin password (or its Werkzeug hash) and the signing secret are read once at startup.
    Missing configuration fails closed.
    """

    def __init__(
        self,
        *,
        admin_password: Optional[str],
        signing_secret: Optional[str],
        admin_password_hash: Optional[str] = None,
        token_hours: int = DEFAULT_TOKEN_HOURS,
    ):
        self._admin_password = admin_password or ""
        self._admin_password_hash = admin_password_hash or ""
        self._secret = signing_secret or ""
        self._codec = TokenCodec(self._secret, lifetime=timedelta(hours=int(token_hours)))

    def configuration_problems(self) -> list[str]:
        problems = []
        if not self._admin_password and not self._admin_password_hash:
            problems.append("ADMIN_PASSWORD")
        if not self._secret:
            problems.append("JWT_SECRET")
        return problems

    def _require_configured(self) -> None:
        missing = self.configuration_problems()
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} não configurada no servidor")

    def _password_matches(self, password: str) -> bool:
        if self._admin_password_hash:
            try:
                return check_password_hash(self._admin_password_hash, password)
            except ValueError:
                # e.g. malformed hash in the environment
                logger.error("ADMIN_PASSWORD_HASH is not a valid werkzeug hash")
                return False
        return hmac.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8"))

    def login(self, password: Optional[str], *, now: Optional[datetime] = None) -> IssuedToken:
        self._require_configured()

        if not password or not self._password_matches(password):
            logger.warning("admin login rejected")
            raise AuthenticationError("Senha incorreta")

        return self._codec.issue(Role.ADMIN, now=now)

    def issue(self, role: Role, *, now: Optional[datetime] = None, lifetime: Optional[timedelta] = None) -> IssuedToken:
        self._require_configured()
        return self._codec.issue(role, now=now, lifetime=lifetime)

    def verify(self, token: Optional[str]) -> Role:
        self._require_configured()

        if not token:
            raise AuthenticationError("Não autorizado")

        claims = self._codec.decode(token)
        role = claims.get("role")
        if not role:
            raise AuthenticationError("Credencial inválida ou expirada")
        if role != Role.ADMIN.value:
            raise AuthorizationError("Acesso restrito ao administrador")
        return Role.ADMIN
