"""Catalog error hierarchy.

Every error raised by the service layer derives from ``CatalogError`` and
carries the HTTP status the API boundary answers with. Errors propagate
unchanged from one service to another; the global handlers in
``catalog_api.api.error_handlers`` turn them into the response envelope.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class CatalogError(Exception):
    """Base exception for all catalog business errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(CatalogError):
    """A referenced entity id does not resolve."""

    http_status = status.HTTP_404_NOT_FOUND

    def __init__(
        self,
        resource: str,
        field: str | None = None,
        value: Any = None,
        *,
        message: str | None = None,
    ) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(message or f"{resource} not found with {field}: {value}")


class DuplicateResourceError(CatalogError):
    """A uniqueness rule (category name, product name per category, SKU code) was violated."""

    http_status = status.HTTP_409_CONFLICT

    def __init__(
        self,
        resource: str,
        field: str | None = None,
        value: Any = None,
        *,
        message: str | None = None,
    ) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(message or f"{resource} already exists with {field}: '{value}'")


class InvalidOperationError(CatalogError):
    """A business rule refuses the operation, e.g. deleting a category that still has products."""

    http_status = status.HTTP_400_BAD_REQUEST
