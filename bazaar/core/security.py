"""Bearer token verification."""
import logging
import uuid
from typing import Any

from jose import jwt, JWTError

from bazaar.config import settings

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode a JWT issued by the auth provider. Returns None if invalid."""
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        return None


def subject_from_payload(payload: dict[str, Any]) -> uuid.UUID | None:
    """Extract the user id from the ``sub`` claim."""
    sub = payload.get("sub")
    if not sub:
        return None
    try:
        return uuid.UUID(str(sub))
    except ValueError:
        return None
