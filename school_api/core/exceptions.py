# school_api/core/exceptions.py
"""Custom exceptions for the school management API."""
from fastapi import HTTPException
from typing import Any, Dict, Optional, Union

from .constants import EntityName


class SchoolApiException(HTTPException):
    """Base exception carrying a stable machine-readable code."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code or detail


def _entity(entity: Union[EntityName, str]) -> str:
    return entity.value if isinstance(entity, EntityName) else str(entity)


class NotFoundError(SchoolApiException):
    """Requested row is absent (or soft-deleted)."""
    def __init__(self, entity: Union[EntityName, str], filters: Optional[Dict[str, Any]] = None):
        self.entity = _entity(entity)
        self.filters = filters or {}
        code = f"{self.entity}_not_found"
        super().__init__(status_code=404, detail=code, code=code)


class ExistsError(SchoolApiException):
    """A live row already holds the candidate unique value."""
    def __init__(self, entity: Union[EntityName, str]):
        self.entity = _entity(entity)
        code = f"{self.entity}_already_exists"
        super().__init__(status_code=400, detail=code, code=code)


class BadRequestError(SchoolApiException):
    """Business rule violation.

    Given an entity name the detail is ``<entity>_bad_request``; given free
    text the text is used as the detail and the code is ``bad_request``.
    """
    def __init__(self, entity_or_message: Union[EntityName, str], message: Optional[str] = None):
        if isinstance(entity_or_message, EntityName):
            self.entity = entity_or_message.value
            code = f"{self.entity}_bad_request"
            super().__init__(status_code=400, detail=message or code, code=code)
        else:
            self.entity = None
            super().__init__(status_code=400, detail=entity_or_message, code="bad_request")


class InvalidCredentialsError(SchoolApiException):
    def __init__(self):
        super().__init__(
            status_code=401,
            detail="invalid_credentials",
            code="invalid_credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


class UnauthorizedError(SchoolApiException):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            status_code=401,
            detail=message,
            code="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(SchoolApiException):
    def __init__(self, message: str = "Permission denied"):
        super().__init__(status_code=403, detail=message, code="forbidden")
