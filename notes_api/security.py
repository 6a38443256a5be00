"""
Notes API - Bearer Token Validation
====================================

What:  FastAPI dependency that turns `Authorization: Bearer <jwt>` into the
       caller's user id.
How:   python-jose verifies signature, expiry, audience and (when configured)
       issuer. The user id is read from `settings.jwt_user_id_claim`
       (default `sub`) and must be a UUID.
Who:   Every note route depends on `get_current_user_id`.

The user id is never read from a request body or query string. Token
issuance belongs to the external identity service; `create_access_token`
exists for local development and tests only.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from notes_api.config import settings
from notes_api.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header becomes our AuthenticationError (401)
# instead of FastAPI's default 403.
bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name="AuthToken",
    description="JWT issued by the identity service",
)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        JWTError: bad signature, expired, wrong audience/issuer, malformed
    """
    if not settings.jwt_secret:
        raise JWTError("Token verification key is not configured")

    # jose skips aud/iss checks when the claim is absent and never needs exp
    options = {
        "verify_aud": bool(settings.jwt_audience),
        "require_aud": bool(settings.jwt_audience),
        "require_iss": bool(settings.jwt_issuer),
        "require_exp": True,
    }
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience or None,
        issuer=settings.jwt_issuer,
        options=options,
    )


def user_id_from_claims(claims: Dict[str, Any]) -> uuid.UUID:
    raw = claims.get(settings.jwt_user_id_claim)
    if not raw:
        raise AuthenticationError(
            "Token has no user identifier",
            context={"claim": settings.jwt_user_id_claim},
        )
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise AuthenticationError(
            "Token user identifier is not a valid id",
            context={"claim": settings.jwt_user_id_claim},
        )


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> uuid.UUID:
    """
    Resolve the authenticated caller.

    Raises:
        AuthenticationError: no bearer token, or the token does not verify (→ 401)
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")

    try:
        claims = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationError("Invalid or expired token")

    return user_id_from_claims(claims)


def create_access_token(
    user_id: uuid.UUID,
    expires_in: timedelta = timedelta(minutes=60),
    **extra_claims: Any,
) -> str:
    """
    Mint a token the API will accept. Development and test helper only.

    Only works with symmetric (HS*) algorithms, where the verification key
    is also the signing key.
    """
    now = datetime.now(timezone.utc)
    claims: Dict[str, Any] = {
        settings.jwt_user_id_claim: str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        claims["iss"] = settings.jwt_issuer
    claims.update(extra_claims)
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
