from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from jose.exceptions import JWTError

from catalog_api.core.config import get_settings
from catalog_api.core.logging import get_logger
from catalog_api.core.security import TokenVerifier

logger = get_logger(__name__)

READ_ROLE = "catalog_read"
WRITE_ROLE = "catalog_write"


@lru_cache(maxsize=1)
def get_verifier() -> TokenVerifier:
    s = get_settings()
    return TokenVerifier(
        s.oidc_discovery_url,
        audience=s.oidc_audience,
        issuer=s.oidc_issuer_expected,
        algorithms=s.oidc_algorithms_list,
        leeway_seconds=s.oidc_leeway_seconds,
    )


def _parse_bearer(auth_header: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header; the scheme is case-insensitive."""
    scheme, _, token = (auth_header or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_client_roles(claims: Dict[str, Any], client_id: str) -> set[str]:
    """Roles granted to ``client_id`` under ``resource_access``; malformed claims grant nothing."""
    try:
        roles = claims["resource_access"][client_id]["roles"]
    except (KeyError, TypeError):
        return set()
    return {str(r) for r in roles} if isinstance(roles, list) else set()


def require_roles(required: Iterable[str]):
    """
    Dependency factory enforcing client roles on a route.

    A no-op while AUTH_ENABLED is false. Otherwise 401 for a missing or invalid
    token and 403 when the token lacks one of ``required``.

    Example:
        @router.get("/products", dependencies=[Depends(require_roles([READ_ROLE]))])
    """
    required_set = {str(r) for r in required}

    async def _dependency(
        request: Request, verifier: TokenVerifier = Depends(get_verifier)
    ) -> Dict[str, Any]:
        settings = get_settings()
        if not settings.auth_enabled:
            return {}

        token = _parse_bearer(request.headers.get("Authorization"))
        if not token:
            raise _unauthorized("Missing bearer token")

        try:
            claims = await verifier.verify(token)
        except JWTError as e:
            # Generic response; the reason stays in the log.
            logger.info("Token validation failed: %s", e)
            raise _unauthorized("Invalid token") from e

        roles = get_client_roles(claims, settings.oidc_audience)
        if not required_set.issubset(roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return claims

    return _dependency


require_read = require_roles([READ_ROLE])
require_write = require_roles([WRITE_ROLE])
