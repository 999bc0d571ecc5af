"""Exception hierarchy for HabitFlow.

Every error carries a machine-readable ``code`` so front-ends can branch
on it without parsing English messages.
"""

from __future__ import annotations

from typing import Any


class HabitFlowError(Exception):
    """Base class for all application-level errors."""

    code: str = "HABITFLOW_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(HabitFlowError, ValueError):
    """Input rejected before any mutation took place."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            message="; ".join(self.errors) or "Invalid input",
            details={"errors": self.errors},
        )
