"""Authentication dependencies shared by the routers."""

import logging
import secrets
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.config import settings
from bidtracker.db import get_db
from bidtracker.models import Client

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


@dataclass
class Principal:
    """Authenticated caller. For consultants ``user_id`` is the tenant id."""

    user_id: str
    email: str | None = None


class IdentityResolver:
    """Verifies identity provider (Supabase) access tokens."""

    def __init__(self, secret: str, audience: str, algorithms: tuple[str, ...] = ("HS256",)):
        self.secret = secret
        self.audience = audience
        self.algorithms = list(algorithms)

    def decode(self, token: str) -> dict[str, Any] | None:
        if not self.secret:
            logger.error("AUTH_JWT_SECRET is not configured; rejecting token")
            return None
        try:
            return jwt.decode(token, self.secret, algorithms=self.algorithms, audience=self.audience)
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

    def resolve(self, token: str) -> Principal | None:
        claims = self.decode(token)
        if not claims or not claims.get("sub"):
            return None
        return Principal(user_id=str(claims["sub"]), email=claims.get("email"))


@lru_cache
def get_identity_resolver() -> IdentityResolver:
    return IdentityResolver(settings.auth_jwt_secret, settings.auth_jwt_audience)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Principal:
    """Caller identity from the Authorization header."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    principal = resolver.resolve(credentials.credentials)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


async def get_tenant_id(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
) -> str:
    """
    Tenant (consultant account) owning the request's data.

    Logins linked to a client are portal users and never act as a tenant.
    """
    result = await db.execute(select(Client.id).where(Client.auth_user_id == principal.user_id))
    if result.first() is not None:
        logger.info(f"Portal login {principal.user_id} refused on a consultant endpoint")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Client portal accounts cannot use consultant endpoints",
        )
    return principal.user_id


def verify_cron_secret(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)):
    """Shared-secret check for the cron-invoked reminder endpoint."""
    if not settings.cron_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reminder trigger is not configured",
        )
    if credentials is None or not secrets.compare_digest(
        credentials.credentials, settings.cron_secret
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
