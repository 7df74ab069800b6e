"""
Service-layer exceptions and their translation into HTTP errors.
"""

import logging
from functools import wraps
from typing import Optional

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class EarlyWarningException(Exception):
    """
    Base exception class for all service layer errors.
    """
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class NotFoundError(EarlyWarningException):
    """
    Raised when a referenced resource does not exist.
    Maps to HTTP 404.
    """
    def __init__(self, resource_type: str, resource_id):
        message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )


def handle_service_exceptions(func):
    """
    Decorator converting service exceptions raised inside an endpoint
    into HTTPException with the matching status code.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except EarlyWarningException as e:
            raise HTTPException(status_code=e.status_code, detail=e.detail)
        except HTTPException:
            raise
        except Exception as e:
            logger.exception("Unhandled error in %s", func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Internal server error: {str(e)}"
            )
    return wrapper
