"""Outcome and UnitOutcome: the uniform return contract.

INVARIANT: Every domain operation reports expected failures by returning a
failed outcome, never by raising. Exactly one of (value, errors) is
populated, and ``category`` is ``ErrorCategory.NONE`` iff the outcome
succeeded. Constructing an outcome that breaks this raises
:class:`~checkinout.domain.errors.OutcomeError`.

Composition follows the usual railway shape: ``bind``/``map`` run their
callback only on success and re-issue the same category and errors on
failure. The ``*_async`` variants await a coroutine function instead.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel, model_validator

from checkinout.domain.errors import ErrorCategory, ErrorDetail, OutcomeError

T = TypeVar("T")
U = TypeVar("U")

ErrorsArg = ErrorDetail | Iterable[ErrorDetail | None]


def _collect_errors(type_name: str, errors: ErrorsArg | None) -> tuple[ErrorDetail, ...]:
    """Normalize a single error or an iterable of errors, dropping ``None`` entries."""
    if errors is None:
        raise OutcomeError.invalid_state(type_name, "errors cannot be None")
    if isinstance(errors, ErrorDetail):
        return (errors,)
    return tuple(e for e in errors if e is not None)


def _failure_category(type_name: str, category: ErrorCategory | str | None) -> ErrorCategory:
    """Coerce *category*; anything that is not a failure category is a fault."""
    try:
        coerced = ErrorCategory(category)
    except ValueError:
        raise OutcomeError.invalid_category(type_name) from None
    if coerced is ErrorCategory.NONE:
        raise OutcomeError.invalid_category(type_name)
    return coerced


class _OutcomeBase(BaseModel):
    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    ok: bool
    category: ErrorCategory = ErrorCategory.NONE
    errors: tuple[ErrorDetail, ...] = ()

    @model_validator(mode="after")
    def _check_shape(self) -> Any:
        type_name = type(self).__name__
        if self.ok:
            if self.category is not ErrorCategory.NONE:
                raise OutcomeError.invalid_state(type_name, "success must use ErrorCategory.NONE")
            if self.errors:
                raise OutcomeError.invalid_state(type_name, "success cannot carry errors")
        else:
            if self.category is ErrorCategory.NONE:
                raise OutcomeError.invalid_category(type_name)
            if not self.errors:
                raise OutcomeError.empty_errors(type_name)
        return self

    @property
    def messages(self) -> list[str]:
        """Human-readable messages of every error, in order."""
        return [e.message for e in self.errors]

    @property
    def codes(self) -> list[str]:
        """Machine codes of every error, in order."""
        return [e.code for e in self.errors]


class Outcome(_OutcomeBase, Generic[T]):
    """Result of an operation that produces a value of type ``T`` on success.

    Usage::

        result = SessionRecord.create(now, UTC_MIN, CheckStatus.CHECKED_IN)
        ok, record, errors = result.try_get_value()
        duration = result.map(lambda r: r.duration())
    """

    value: T | None = None

    @model_validator(mode="after")
    def _check_value(self) -> Any:
        if self.ok and self.value is None:
            raise OutcomeError.null_value(type(self).__name__)
        if not self.ok and self.value is not None:
            raise OutcomeError.invalid_state(type(self).__name__, "failure cannot carry a value")
        return self

    # --- Construction ---

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        if value is None:
            raise OutcomeError.null_value(cls.__name__)
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, category: ErrorCategory, errors: ErrorsArg) -> Outcome[T]:
        """Build a failed outcome from one :class:`ErrorDetail` or several."""
        return cls(
            ok=False,
            category=_failure_category(cls.__name__, category),
            errors=_collect_errors(cls.__name__, errors),
        )

    @classmethod
    def failure_of(cls, category: ErrorCategory, code: str, message: str) -> Outcome[T]:
        return cls.failure(category, ErrorDetail(code=code, message=message))

    # --- Composition ---

    def _unwrap(self) -> T:
        return cast(T, self.value)

    def _propagate(self) -> Outcome[Any]:
        return Outcome.failure(self.category, self.errors)

    def bind(self, func: Callable[[T], Outcome[U]]) -> Outcome[U]:
        if self.ok:
            return func(self._unwrap())
        return self._propagate()

    def map(self, func: Callable[[T], U]) -> Outcome[U]:
        if self.ok:
            return Outcome.success(func(self._unwrap()))
        return self._propagate()

    async def bind_async(self, func: Callable[[T], Awaitable[Outcome[U]]]) -> Outcome[U]:
        if self.ok:
            return await func(self._unwrap())
        return self._propagate()

    async def map_async(self, func: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        if self.ok:
            return Outcome.success(await func(self._unwrap()))
        return self._propagate()

    # --- Extraction ---

    def ensure_success(self) -> T:
        """Return the value, or raise :class:`OutcomeError` with every message.

        Only for call sites willing to treat an expected failure as a fault
        (tests, top-level handlers).
        """
        if self.ok:
            return self._unwrap()
        raise OutcomeError.failure(type(self).__name__, self.messages)

    def try_get_value(self) -> tuple[bool, T | None, tuple[ErrorDetail, ...]]:
        """Non-raising extraction: ``(ok, value_or_None, errors)``."""
        return self.ok, self.value, self.errors

    def deconstruct(self) -> tuple[bool, T | None, ErrorCategory, tuple[ErrorDetail, ...]]:
        return self.ok, self.value, self.category, self.errors

    def to_unit(self) -> UnitOutcome:
        """Drop the value, keeping success or the failure payload."""
        if self.ok:
            return UnitOutcome.success()
        return UnitOutcome.failure(self.category, self.errors)

    def __str__(self) -> str:
        if self.ok:
            return f"Success({self.value})"
        return f"Failure({self.category}: {'; '.join(str(e) for e in self.errors)})"


class UnitOutcome(_OutcomeBase):
    """Result of an operation that produces no value."""

    @classmethod
    def success(cls) -> UnitOutcome:
        return cls(ok=True)

    @classmethod
    def failure(cls, category: ErrorCategory, errors: ErrorsArg) -> UnitOutcome:
        return cls(
            ok=False,
            category=_failure_category(cls.__name__, category),
            errors=_collect_errors(cls.__name__, errors),
        )

    @classmethod
    def failure_of(cls, category: ErrorCategory, code: str, message: str) -> UnitOutcome:
        return cls.failure(category, ErrorDetail(code=code, message=message))

    @classmethod
    def combine(cls, *outcomes: UnitOutcome) -> UnitOutcome:
        """Succeed iff every input succeeded.

        Otherwise fail with ``ErrorCategory.AGGREGATE`` and the errors of
        every failing input, concatenated in input order.
        """
        failures = [o for o in outcomes if not o.ok]
        if not failures:
            return cls.success()
        return cls.failure(ErrorCategory.AGGREGATE, [e for o in failures for e in o.errors])

    def to_outcome(self, value: T) -> Outcome[T]:
        if self.ok:
            return Outcome.success(value)
        return Outcome.failure(self.category, self.errors)

    def bind(self, func: Callable[[], Outcome[U]]) -> Outcome[U]:
        if self.ok:
            return func()
        return Outcome.failure(self.category, self.errors)

    def then(self, func: Callable[[], UnitOutcome]) -> UnitOutcome:
        if self.ok:
            return func()
        return self

    def map(self, func: Callable[[], U]) -> Outcome[U]:
        if self.ok:
            return Outcome.success(func())
        return Outcome.failure(self.category, self.errors)

    def tap(self, func: Callable[[], object]) -> UnitOutcome:
        """Run a side effect on success and return the receiver unchanged."""
        if self.ok:
            func()
        return self

    async def bind_async(self, func: Callable[[], Awaitable[Outcome[U]]]) -> Outcome[U]:
        if self.ok:
            return await func()
        return Outcome.failure(self.category, self.errors)

    async def then_async(self, func: Callable[[], Awaitable[UnitOutcome]]) -> UnitOutcome:
        if self.ok:
            return await func()
        return self

    async def map_async(self, func: Callable[[], Awaitable[U]]) -> Outcome[U]:
        if self.ok:
            return Outcome.success(await func())
        return Outcome.failure(self.category, self.errors)

    async def tap_async(self, func: Callable[[], Awaitable[object]]) -> UnitOutcome:
        if self.ok:
            await func()
        return self

    def ensure_success(self) -> None:
        if not self.ok:
            raise OutcomeError.failure(type(self).__name__, self.messages)

    def deconstruct(self) -> tuple[bool, ErrorCategory, tuple[ErrorDetail, ...]]:
        return self.ok, self.category, self.errors

    def __str__(self) -> str:
        if self.ok:
            return "Success"
        return f"Failure({self.category}: {'; '.join(str(e) for e in self.errors)})"
