# backend/booking_engine/api/dependencies/auth.py
"""
Caller identity from bearer JWTs.

Tokens are issued elsewhere; this module only verifies them and extracts
the ``sub`` claim as the user id.
"""

import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWTError

from ...core.config import Settings, settings
from ...core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def decode_access_token(token: str, config: Optional[Settings] = None) -> Dict[str, Any]:
    """Decode and verify a JWT access token (signature and expiry)."""
    config = config or settings
    payload = jwt.decode(
        token,
        _secret_value(config.secret_key),
        algorithms=[config.algorithm],
        options={"verify_aud": False},
    )
    return cast(Dict[str, Any], payload)


async def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme_optional)) -> str:
    """
    Dependency returning the authenticated user's id.

    Raises:
        HTTPException: 401 when the token is missing, invalid, expired or has no subject
    """
    if not token:
        raise UnauthorizedException().to_http_exception()
    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.info(f"Rejected access token: {type(e).__name__}")
        raise UnauthorizedException("Could not validate credentials").to_http_exception()

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise UnauthorizedException("Could not validate credentials").to_http_exception()
    return user_id
