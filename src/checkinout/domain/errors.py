"""Error categories, structured error details, and the outcome fault.

Two tiers of failure exist:

- Expected failures travel inside a failed :class:`~checkinout.domain.outcome.Outcome`
  as one or more :class:`ErrorDetail` entries under an :class:`ErrorCategory`.
- Programming errors (a malformed outcome, an empty error code) raise
  :class:`OutcomeError` immediately and are not meant to be caught and
  branched on.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, model_validator


class ErrorCategory(StrEnum):
    """Closed set of failure categories. ``NONE`` is reserved for success."""

    NONE = "none"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    INTERNAL = "internal"
    AGGREGATE = "aggregate"
    INVALID = "invalid"


class OutcomeError(Exception):
    """Unrecoverable fault raised for misuse of the outcome types.

    Not a ``ValueError`` subclass: pydantic validators let it propagate
    unchanged instead of folding it into a ``ValidationError``.

    Attributes:
        type_name: Name of the outcome (or detail) type involved.
        messages: Every message carried by the fault.
    """

    def __init__(self, message: str, type_name: str, messages: Iterable[str]) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.messages: tuple[str, ...] = tuple(messages)

    def __str__(self) -> str:
        return f"{self.args[0]} (errors: {', '.join(self.messages)})"

    @classmethod
    def null_value(cls, type_name: str) -> OutcomeError:
        return cls(
            f"{type_name} cannot have a null value.", type_name, ["Null value is not allowed."]
        )

    @classmethod
    def empty_errors(cls, type_name: str) -> OutcomeError:
        return cls(
            f"{type_name} must contain at least one error.",
            type_name,
            ["Error list cannot be empty."],
        )

    @classmethod
    def invalid_category(cls, type_name: str) -> OutcomeError:
        return cls(
            f"Failure must have a valid error category. "
            f"Cannot use ErrorCategory.NONE in {type_name}.",
            type_name,
            ["Invalid error category."],
        )

    @classmethod
    def invalid_error_detail(cls, reason: str) -> OutcomeError:
        return cls(reason, "ErrorDetail", [reason])

    @classmethod
    def invalid_state(cls, type_name: str, reason: str) -> OutcomeError:
        return cls(f"{type_name} is in an invalid state: {reason}", type_name, [reason])

    @classmethod
    def failure(cls, type_name: str, messages: Iterable[str]) -> OutcomeError:
        """Escalation of an expected failure, used by ``ensure_success``."""
        return cls(f"{type_name} operation failed.", type_name, messages)


class ErrorDetail(BaseModel):
    """One structured error: a stable machine code and a human message."""

    model_config = {"frozen": True}

    code: str
    message: str

    @model_validator(mode="after")
    def _require_code_and_message(self) -> ErrorDetail:
        if not self.code:
            raise OutcomeError.invalid_error_detail("Error code cannot be null or empty.")
        if not self.message:
            raise OutcomeError.invalid_error_detail("Error message cannot be null or empty.")
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
