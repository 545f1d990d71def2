"""
Bounded per-item fan-out for store calls.

Each item runs independently: one failure never cancels or aborts the
others, and every item's result or exception is reported back in the
order the items were given.
"""

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.utils.constants import DEFAULT_FAN_OUT_WORKERS

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class Outcome(Generic[ItemT, ResultT]):
    """Result of running one item through a fan-out call."""

    item: ItemT
    result: ResultT | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fan_out(
    func: Callable[[ItemT], ResultT],
    items: Iterable[ItemT],
    *,
    max_workers: int = DEFAULT_FAN_OUT_WORKERS,
) -> list[Outcome[ItemT, ResultT]]:
    """Run ``func`` over ``items`` concurrently and collect every outcome.

    Args:
        func: Callable applied to each item
        items: Items to process
        max_workers: Upper bound on concurrent calls

    Returns:
        One Outcome per item, in input order
    """
    pending = list(items)
    if not pending:
        return []

    workers = max(1, min(max_workers, len(pending)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [(item, executor.submit(func, item)) for item in pending]

        outcomes: list[Outcome[ItemT, ResultT]] = []
        for item, future in futures:
            try:
                outcomes.append(Outcome(item=item, result=future.result()))
            except Exception as exc:
                outcomes.append(Outcome(item=item, error=exc))

    return outcomes
