"""HTTP error helpers."""
import logging

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def backend_unavailable(exc: Exception, context: str) -> HTTPException:
    """
    Log a failed store query and build the 503 returned to the client.

    Callers raise the result so that a backend failure is never reported as
    an empty result.
    """
    logger.error(f"{context} failed: {exc}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Veriler şu anda yüklenemiyor, lütfen tekrar deneyin",
    )
