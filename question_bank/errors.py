"""
Error taxonomy for the question bank API.

Every failure leaves the service as ``{"success": false, "error": "..."}``;
the exception handlers in ``question_bank.main`` do the rendering.
"""

from __future__ import annotations


class QuestionBankError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str = "Server Error", status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(QuestionBankError):
    """Missing or malformed input (bad identifier, missing credentials)."""

    status_code = 400


class DuplicateError(QuestionBankError):
    """Unique constraint violation, e.g. a second account for one email."""

    status_code = 400


class AuthError(QuestionBankError):
    status_code = 401


class ForbiddenError(QuestionBankError):
    status_code = 403


class NotFoundError(QuestionBankError):
    status_code = 404


class StoreError(QuestionBankError):
    """The document store refused or failed an operation."""

    status_code = 500
