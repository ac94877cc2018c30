"""
Service layer custom exceptions.

Three kinds of failure reach callers of the player service:

- ``ClientInputError``: the request itself is malformed (bad id, invalid field).
- ``NotFoundError``: the request is well-formed but names a missing record.
- Store errors: raised by SQLAlchemy and propagated unchanged.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class ClientInputError(ServiceException):
    """Exception raised when caller-supplied input fails validation."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=f"Invalid input: {message}",
            service=service,
            operation=operation,
            context=validation_context,
        )
        self.field = field


class NotFoundError(ServiceException):
    """Exception raised when a well-formed identifier matches no record."""


class PlayerNotFoundError(NotFoundError):
    """Exception raised by PlayerService when no player has the given id."""

    def __init__(
        self,
        player_id: int,
        operation: Optional[str] = None,
    ):
        super().__init__(
            message=f"Player not found: {player_id}",
            service="PlayerService",
            operation=operation,
            context={"player_id": player_id},
        )
        self.player_id = player_id
