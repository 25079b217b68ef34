"""Error taxonomy shared by the Kanban engines.

Every failure a registry can report is a ``KanbanError`` subclass carrying a
machine-readable ``code`` and the HTTP status the transport maps it to.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class KanbanError(Exception):
    """Base Kanban engine error."""

    code = "kanban.error"
    http_status = 400

    def __init__(
        self,
        message: str,
        resource_kind: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.resource_kind = resource_kind
        self.details = details or {}


class ValidationError(KanbanError):
    """Raised when an input is missing or blank."""

    code = "kanban.validation_error"
    http_status = 400


class NotFoundError(KanbanError):
    """Raised when a referenced rule or card id is absent."""

    code = "kanban.not_found"
    http_status = 404


class ConflictError(KanbanError):
    """Raised when an operation violates a structural precondition."""

    code = "kanban.conflict"
    http_status = 409


class InvalidTransitionError(KanbanError):
    """Raised when a stage change is denied by a transition rule."""

    code = "kanban.invalid_transition"
    http_status = 409

    def __init__(self, message: str, stage_from: str, stage_to: str) -> None:
        super().__init__(
            message,
            resource_kind="kanban_card",
            details={"stage_from": stage_from, "stage_to": stage_to},
        )
        self.stage_from = stage_from
        self.stage_to = stage_to


class StateError(KanbanError):
    code = "kanban.state_error"
    http_status = 500
