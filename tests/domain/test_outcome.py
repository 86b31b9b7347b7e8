"""Tests for Outcome and UnitOutcome."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from checkinout.domain.errors import ErrorCategory, ErrorDetail, OutcomeError
from checkinout.domain.outcome import Outcome, UnitOutcome

E1 = ErrorDetail(code="First", message="first failure")
E2 = ErrorDetail(code="Second", message="second failure")
E3 = ErrorDetail(code="Third", message="third failure")


def _fail(*errors: ErrorDetail) -> Outcome[int]:
    return Outcome.failure(ErrorCategory.VALIDATION, list(errors) or [E1])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_success(self) -> None:
        outcome = Outcome.success(42)
        assert outcome.ok is True
        assert outcome.value == 42
        assert outcome.category is ErrorCategory.NONE
        assert outcome.errors == ()

    def test_parametrized_success(self) -> None:
        outcome = Outcome[str].success("value")
        assert outcome.value == "value"

    def test_falsy_values_are_not_absent(self) -> None:
        assert Outcome.success(0).value == 0
        assert Outcome.success("").value == ""
        assert Outcome.success([]).value == []

    def test_success_with_none_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError, match="null value"):
            Outcome.success(None)

    def test_failure_single_error(self) -> None:
        outcome = Outcome.failure(ErrorCategory.NOT_FOUND, E1)
        assert outcome.ok is False
        assert outcome.value is None
        assert outcome.category is ErrorCategory.NOT_FOUND
        assert outcome.errors == (E1,)

    def test_failure_preserves_order(self) -> None:
        outcome = Outcome.failure(ErrorCategory.VALIDATION, [E2, E1, E3])
        assert outcome.codes == ["Second", "First", "Third"]
        assert outcome.messages == ["second failure", "first failure", "third failure"]

    def test_failure_accepts_category_value(self) -> None:
        outcome = Outcome.failure("conflict", E1)  # type: ignore[arg-type]
        assert outcome.category is ErrorCategory.CONFLICT

    def test_failure_of(self) -> None:
        outcome = Outcome.failure_of(ErrorCategory.INTERNAL, "Boom", "it broke")
        assert outcome.errors == (ErrorDetail(code="Boom", message="it broke"),)

    def test_failure_drops_none_entries(self) -> None:
        outcome = Outcome.failure(ErrorCategory.VALIDATION, [None, E1, None])
        assert outcome.errors == (E1,)

    def test_failure_with_none_category_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError, match="ErrorCategory.NONE"):
            Outcome.failure(ErrorCategory.NONE, E1)

    @pytest.mark.parametrize("category", [None, "bogus", 7])
    def test_failure_with_unknown_category_is_a_fault(self, category: object) -> None:
        with pytest.raises(OutcomeError, match="valid error category"):
            Outcome.failure(category, E1)  # type: ignore[arg-type]

    def test_failure_with_empty_errors_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError, match="at least one error"):
            Outcome.failure(ErrorCategory.VALIDATION, [])

    def test_failure_with_only_none_errors_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError):
            Outcome.failure(ErrorCategory.VALIDATION, [None])

    def test_failure_with_none_errors_argument_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError):
            Outcome.failure(ErrorCategory.VALIDATION, None)  # type: ignore[arg-type]

    def test_failure_with_blank_detail_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError):
            Outcome.failure_of(ErrorCategory.VALIDATION, "", "message")

    def test_direct_construction_is_guarded(self) -> None:
        with pytest.raises(OutcomeError):
            Outcome(ok=True)
        with pytest.raises(OutcomeError):
            Outcome(ok=False, category=ErrorCategory.VALIDATION, errors=(E1,), value=1)
        with pytest.raises(OutcomeError):
            UnitOutcome(ok=True, category=ErrorCategory.VALIDATION)
        with pytest.raises(OutcomeError):
            UnitOutcome(ok=True, errors=(E1,))
        with pytest.raises(OutcomeError):
            UnitOutcome(ok=False)

    def test_frozen(self) -> None:
        outcome = Outcome.success(1)
        with pytest.raises(ValidationError):
            outcome.ok = False  # type: ignore[misc]

    def test_json_dump(self) -> None:
        assert Outcome.success(3).model_dump(mode="json") == {
            "ok": True,
            "category": "none",
            "errors": [],
            "value": 3,
        }
        dumped = _fail(E1).model_dump(mode="json")
        assert dumped["category"] == "validation"
        assert dumped["errors"] == [{"code": "First", "message": "first failure"}]
        assert dumped["value"] is None


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class TestBindAndMap:
    def test_bind_success(self) -> None:
        result = Outcome.success(2).bind(lambda v: Outcome.success(v * 10))
        assert result.value == 20

    def test_bind_success_into_failure(self) -> None:
        result = Outcome.success(2).bind(lambda _v: _fail(E2))
        assert not result.ok
        assert result.errors == (E2,)

    def test_bind_short_circuits(self) -> None:
        calls: list[int] = []

        def step(v: int) -> Outcome[int]:
            calls.append(v)
            return Outcome.success(v)

        result = Outcome.failure(ErrorCategory.CONFLICT, [E1, E2]).bind(step)
        assert calls == []
        assert not result.ok
        assert result.category is ErrorCategory.CONFLICT
        assert result.errors == (E1, E2)

    def test_map_success(self) -> None:
        assert Outcome.success("abc").map(len).value == 3

    def test_map_failure_propagates(self) -> None:
        calls: list[int] = []
        result = _fail(E3).map(lambda v: calls.append(v))
        assert calls == []
        assert result.codes == ["Third"]

    def test_map_to_none_is_a_fault(self) -> None:
        with pytest.raises(OutcomeError):
            Outcome.success(1).map(lambda _v: None)

    def test_chain(self) -> None:
        result = (
            Outcome.success(1)
            .map(lambda v: v + 1)
            .bind(lambda v: Outcome.success(v * 3) if v > 0 else _fail())
            .map(str)
        )
        assert result.value == "6"


class TestAsyncComposition:
    def test_bind_async_success(self) -> None:
        async def double(v: int) -> Outcome[int]:
            await asyncio.sleep(0)
            return Outcome.success(v * 2)

        result = asyncio.run(Outcome.success(4).bind_async(double))
        assert result.value == 8

    def test_bind_async_short_circuits(self) -> None:
        awaited: list[int] = []

        async def step(v: int) -> Outcome[int]:
            awaited.append(v)
            return Outcome.success(v)

        result = asyncio.run(_fail(E1, E2).bind_async(step))
        assert awaited == []
        assert result.errors == (E1, E2)

    def test_map_async(self) -> None:
        async def stringify(v: int) -> str:
            await asyncio.sleep(0)
            return f"#{v}"

        assert asyncio.run(Outcome.success(7).map_async(stringify)).value == "#7"
        assert not asyncio.run(_fail().map_async(stringify)).ok

    def test_unit_async_variants(self) -> None:
        events: list[str] = []

        async def effect() -> None:
            events.append("ran")

        async def next_step() -> UnitOutcome:
            return UnitOutcome.failure(ErrorCategory.INTERNAL, E3)

        async def produce() -> Outcome[int]:
            return Outcome.success(5)

        async def value() -> int:
            return 9

        ok = UnitOutcome.success()
        assert asyncio.run(ok.tap_async(effect)) is ok
        assert events == ["ran"]
        assert asyncio.run(ok.then_async(next_step)).codes == ["Third"]
        assert asyncio.run(ok.bind_async(produce)).value == 5
        assert asyncio.run(ok.map_async(value)).value == 9

        failed = UnitOutcome.failure(ErrorCategory.VALIDATION, E1)
        assert asyncio.run(failed.tap_async(effect)) is failed
        assert events == ["ran"]
        assert asyncio.run(failed.bind_async(produce)).codes == ["First"]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


class TestExtraction:
    def test_ensure_success_returns_value(self) -> None:
        assert Outcome.success("v").ensure_success() == "v"

    def test_ensure_success_escalates_with_all_messages(self) -> None:
        with pytest.raises(OutcomeError) as excinfo:
            _fail(E1, E2).ensure_success()
        assert excinfo.value.messages == ("first failure", "second failure")

    def test_try_get_value(self) -> None:
        ok, value, errors = Outcome.success(5).try_get_value()
        assert (ok, value, errors) == (True, 5, ())

        ok, value, errors = _fail(E2).try_get_value()
        assert ok is False
        assert value is None
        assert errors == (E2,)

    def test_deconstruct(self) -> None:
        ok, value, category, errors = _fail(E1).deconstruct()
        assert (ok, value, category, errors) == (False, None, ErrorCategory.VALIDATION, (E1,))

    def test_str(self) -> None:
        assert str(Outcome.success(1)) == "Success(1)"
        assert str(_fail(E1)) == "Failure(validation: First: first failure)"


# ---------------------------------------------------------------------------
# UnitOutcome
# ---------------------------------------------------------------------------


class TestUnitOutcome:
    def test_success(self) -> None:
        outcome = UnitOutcome.success()
        assert outcome.ok
        assert outcome.deconstruct() == (True, ErrorCategory.NONE, ())
        outcome.ensure_success()

    @pytest.mark.parametrize("category", [None, ErrorCategory.NONE, "none"])
    def test_failure_requires_failure_category(self, category: object) -> None:
        with pytest.raises(OutcomeError, match="valid error category"):
            UnitOutcome.failure(category, E1)  # type: ignore[arg-type]

    def test_ensure_success_on_failure(self) -> None:
        denied = UnitOutcome.failure_of(ErrorCategory.UNAUTHORIZED, "Denied", "no access")
        with pytest.raises(OutcomeError):
            denied.ensure_success()

    def test_combine_all_success(self) -> None:
        assert UnitOutcome.combine(UnitOutcome.success(), UnitOutcome.success()).ok

    def test_combine_no_inputs(self) -> None:
        assert UnitOutcome.combine().ok

    def test_combine_aggregates_in_order(self) -> None:
        combined = UnitOutcome.combine(
            UnitOutcome.failure(ErrorCategory.VALIDATION, [E1, E2]),
            UnitOutcome.success(),
            UnitOutcome.failure(ErrorCategory.NOT_FOUND, E3),
        )
        assert not combined.ok
        assert combined.category is ErrorCategory.AGGREGATE
        assert combined.errors == (E1, E2, E3)

    def test_to_outcome(self) -> None:
        assert UnitOutcome.success().to_outcome("x").value == "x"
        failed = UnitOutcome.failure(ErrorCategory.CONFLICT, E1).to_outcome("x")
        assert not failed.ok
        assert failed.category is ErrorCategory.CONFLICT

    def test_to_unit(self) -> None:
        assert Outcome.success(1).to_unit().ok
        unit = _fail(E2).to_unit()
        assert isinstance(unit, UnitOutcome)
        assert unit.errors == (E2,)

    def test_bind_then_map_tap(self) -> None:
        events: list[str] = []
        ok = UnitOutcome.success()
        assert ok.bind(lambda: Outcome.success(3)).value == 3
        assert ok.then(UnitOutcome.success).ok
        assert ok.map(lambda: "made").value == "made"
        assert ok.tap(lambda: events.append("tap")) is ok
        assert events == ["tap"]

    def test_failure_short_circuits(self) -> None:
        events: list[str] = []
        failed = UnitOutcome.failure(ErrorCategory.VALIDATION, E1)
        assert failed.bind(lambda: Outcome.success(events.append("bind") or 1)).codes == ["First"]
        assert failed.then(lambda: UnitOutcome.success()) is failed
        assert not failed.map(lambda: events.append("map") or 1).ok
        assert failed.tap(lambda: events.append("tap")) is failed
        assert events == []

    def test_str(self) -> None:
        assert str(UnitOutcome.success()) == "Success"
        assert "First" in str(UnitOutcome.failure(ErrorCategory.VALIDATION, E1))
