"""Domain exceptions for the taskboard service.

Services raise these when a request cannot be honoured; the HTTP layer
maps each one onto a status code and the ``{message, data}`` envelope.
"""

from typing import Any


class DomainError(Exception):
    """Base exception for domain rule violations.

    Attributes:
        message: Human-readable description of the failure.
        code: Error code for programmatic handling.
        details: Optional diagnostic payload returned to the client.
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidArgumentError(DomainError):
    """Raised for malformed ids, missing required fields and duplicate unique fields."""

    code = "INVALID_ARGUMENT"


class NotFoundError(DomainError):
    """Raised when a well-formed id does not match any document."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found", details={"id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class StoreFailureError(DomainError):
    """Raised when the underlying document store fails."""

    code = "STORE_FAILURE"

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, details=detail)
        self.detail = detail
