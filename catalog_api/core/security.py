from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx
from jose import jwt
from jose.exceptions import JWTClaimsError, JWTError

from catalog_api.core.logging import get_logger

logger = get_logger(__name__)

JWKS_CACHE_TTL_SECONDS = 300


class TokenVerifier:
    """
    Verifies bearer tokens issued by the catalog realm against its JWKS (JSON Web Key Set).

    The discovery document and the key set are fetched lazily with httpx and the
    key set is cached for ``JWKS_CACHE_TTL_SECONDS``. python-jose has no leeway
    option, so exp/nbf are checked here with the configured tolerance.
    """

    def __init__(
        self,
        discovery_url: str,
        *,
        audience: str,
        issuer: str,
        algorithms: list[str],
        leeway_seconds: int = 10,
    ) -> None:
        self.discovery_url = discovery_url
        self.audience = audience
        self.issuer = issuer.rstrip("/")
        self.algorithms = algorithms
        self.leeway_seconds = leeway_seconds
        self._jwks_uri: Optional[str] = None
        self._jwks: Optional[Dict[str, Any]] = None
        self._jwks_fetched_at = 0.0

    async def _load_jwks(self, client: httpx.AsyncClient) -> Dict[str, Any]:
        now = time.time()
        if self._jwks and (now - self._jwks_fetched_at) < JWKS_CACHE_TTL_SECONDS:
            return self._jwks

        if not self._jwks_uri:
            r = await client.get(self.discovery_url)
            r.raise_for_status()
            jwks_uri = r.json().get("jwks_uri")
            if not isinstance(jwks_uri, str) or not jwks_uri:
                raise JWTError("OIDC discovery missing jwks_uri")
            self._jwks_uri = jwks_uri

        r = await client.get(self._jwks_uri)
        r.raise_for_status()
        jwks = r.json()
        if not isinstance(jwks, dict) or not isinstance(jwks.get("keys"), list):
            raise JWTError("Invalid JWKS response")

        logger.info("Loaded %d signing keys from %s", len(jwks["keys"]), self._jwks_uri)
        self._jwks = jwks
        self._jwks_fetched_at = now
        return jwks

    def _check_time_claims(self, claims: Dict[str, Any]) -> None:
        now = int(time.time())
        try:
            exp = int(claims["exp"]) if claims.get("exp") is not None else None
            nbf = int(claims["nbf"]) if claims.get("nbf") is not None else None
        except (TypeError, ValueError) as e:
            raise JWTClaimsError("Invalid time claim") from e

        if exp is not None and now > exp + self.leeway_seconds:
            raise JWTClaimsError("Token has expired")
        if nbf is not None and now < nbf - self.leeway_seconds:
            raise JWTClaimsError("Token not yet valid (nbf)")

    async def verify(self, token: str) -> Dict[str, Any]:
        """
        Decode and verify ``token``, returning its claims.

        Raises jose.exceptions.JWTError (or its JWTClaimsError subclass) on any failure.
        """
        kid = jwt.get_unverified_header(token).get("kid")
        if not kid:
            raise JWTError("Missing kid in JWT header")

        async with httpx.AsyncClient(timeout=10.0) as client:
            try:
                jwks = await self._load_jwks(client)
            except httpx.HTTPError as e:
                raise JWTError("Unable to fetch signing keys") from e

        key = next((k for k in jwks["keys"] if isinstance(k, dict) and k.get("kid") == kid), None)
        if key is None:
            raise JWTError(f"Signing key not found for kid={kid!r}")

        claims = jwt.decode(
            token,
            key,
            algorithms=self.algorithms,
            audience=self.audience,
            issuer=self.issuer,
            options={"verify_exp": False, "verify_nbf": False},
        )
        self._check_time_claims(claims)
        return claims
