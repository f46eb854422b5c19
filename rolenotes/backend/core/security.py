"""
Bearer Tokens.

Tokens are HS256 JWTs carrying the user id in ``sub``. In production they
come from the identity provider; ``cli.py --service token`` mints them for
development. Nothing here trusts a role claim: the role is looked up from
the users table by core.dependencies.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from rolenotes.backend.core.config import get_app_config, get_settings
from rolenotes.backend.core.exceptions import AuthenticationError
from rolenotes.backend.core.logging import get_logger
from rolenotes.backend.core.utils import utc_now

logger = get_logger(__name__)

TOKEN_TYPE = "access"


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Sign a token for ``data`` (which must include "sub").

    The lifetime defaults to ``jwt.access_token_expire_minutes`` from security.yaml.
    """
    jwt_config = get_app_config().security.jwt
    lifetime = expires_delta or timedelta(minutes=jwt_config.access_token_expire_minutes)

    claims = {
        **data,
        "exp": utc_now() + lifetime,
        "type": TOKEN_TYPE,
        "aud": jwt_config.audience,
    }
    return jwt.encode(claims, get_settings().jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify signature, expiry and audience, and return the claims.

    Raises:
        AuthenticationError: If any check fails, or the token is not an
            access token with a subject
    """
    jwt_config = get_app_config().security.jwt
    try:
        claims = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token") from e

    if claims.get("type") != TOKEN_TYPE or not claims.get("sub"):
        logger.warning("Token rejected", extra={"reason": "missing subject or wrong type"})
        raise AuthenticationError("Invalid or expired token")

    return claims
