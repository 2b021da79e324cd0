"""Test Runner

Executes an ordered set of independent validation tasks and aggregates
their failures. Both execution modes feed the same aggregator:

- Synchronous: tasks run one after another on the caller's stack; a task
  that would have to suspend is a usage error.
- Asynchronous: tasks run concurrently as asyncio tasks; results are
  indexed by position, so completion order never changes the outcome.

Aggregation rules:
- abort_early: the first failure is returned alone. Tasks still running are
  left to finish in the background and their results are ignored.
- otherwise: every task runs; failures are reported as one aggregate error,
  prior errors first, then task failures by ascending index.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Sequence, Union

from shapecast.errors import Err, Ok, Result, SyncValidationError, sync_mode_violation
from shapecast.logging import validation_logger

from .errors import ValidationError
from .util import UNDEFINED, is_awaitable

log = validation_logger()

Outcome = Union[Result[Any, ValidationError], Awaitable[Result[Any, ValidationError]]]
Task = Callable[[], Outcome]

# Strong references to tasks abandoned by an abort-early short circuit
_in_flight: set[asyncio.Future] = set()


@dataclass(frozen=True, slots=True)
class RunPlan:
    """Everything one aggregation needs."""
    tasks: Sequence[Task]
    value: Any = UNDEFINED
    path: str = ""
    abort_early: bool = True
    sync: bool = False
    prior_errors: Sequence[ValidationError] = ()


class _Aggregator:
    __slots__ = ("plan", "_failures")

    def __init__(self, plan: RunPlan):
        self.plan = plan
        self._failures: dict[int, ValidationError] = {}

    def record(self, index: int, result: Result[Any, ValidationError]) -> Err[ValidationError] | None:
        """Store one task result; returns the short-circuit result under abort_early."""
        if isinstance(result, Err):
            if self.plan.abort_early:
                log.debug("validation_aborted", path=result.error.path or "this", index=index)
                return result
            self._failures[index] = result.error
        return None

    def finish(self) -> Result[Any, ValidationError]:
        errors = [*self.plan.prior_errors, *(self._failures[i] for i in sorted(self._failures))]
        if not errors:
            return Ok(self.plan.value)
        error = ValidationError.aggregate(errors, value=self.plan.value, path=self.plan.path)
        log.debug("validation_failed", path=self.plan.path or "this", error_count=len(error.errors))
        return Err(error)


def run_tests(plan: RunPlan) -> Outcome:
    """Run the plan; returns a Result when ``plan.sync`` is set, else an awaitable Result."""
    if plan.sync:
        return _run_sync(plan)
    return _run_async(plan)


def then(outcome: Outcome, step: Callable[[Result[Any, ValidationError]], Outcome], sync: bool) -> Outcome:
    """Feed an outcome into the next phase, in the mode the outcome was produced in."""
    if sync:
        return step(outcome)
    return _then_async(outcome, step)


async def _then_async(
    outcome: Outcome, step: Callable[[Result[Any, ValidationError]], Outcome]
) -> Result[Any, ValidationError]:
    result = await outcome if is_awaitable(outcome) else outcome
    following = step(result)
    if is_awaitable(following):
        following = await following
    return following


def _run_sync(plan: RunPlan) -> Result[Any, ValidationError]:
    aggregator = _Aggregator(plan)
    for index, task in enumerate(plan.tasks):
        outcome = task()
        if is_awaitable(outcome):
            if hasattr(outcome, "close"):
                outcome.close()
            raise SyncValidationError(sync_mode_violation(f"task[{index}]", plan.path).error)
        if (short_circuit := aggregator.record(index, outcome)) is not None:
            return short_circuit
    return aggregator.finish()


async def _settle(task: Task) -> Result[Any, ValidationError]:
    outcome = task()
    if is_awaitable(outcome):
        outcome = await outcome
    return outcome


async def _run_async(plan: RunPlan) -> Result[Any, ValidationError]:
    aggregator = _Aggregator(plan)
    if not plan.tasks:
        return aggregator.finish()

    indices = {asyncio.ensure_future(_settle(task)): index for index, task in enumerate(plan.tasks)}
    remaining: set[asyncio.Future] = set(indices)
    try:
        while remaining:
            done, remaining = await asyncio.wait(remaining, return_when=asyncio.FIRST_COMPLETED)
            for future in sorted(done, key=indices.__getitem__):
                short_circuit = aggregator.record(indices[future], future.result())
                if short_circuit is not None:
                    _abandon(remaining)
                    return short_circuit
    except BaseException:
        _abandon(indices)
        raise
    return aggregator.finish()


def _abandon(futures: Iterable[asyncio.Future]) -> None:
    for future in futures:
        _in_flight.add(future)
        future.add_done_callback(_release)


def _release(future: asyncio.Future) -> None:
    _in_flight.discard(future)
    if not future.cancelled():
        # Mark the exception as retrieved; abandoned results are ignored.
        future.exception()
