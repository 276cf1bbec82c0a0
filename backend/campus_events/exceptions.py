"""Typed service errors.

Services raise these directly; FastAPI renders them as ``{"detail": ...}``
with the matching status code.
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidRequestError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)
