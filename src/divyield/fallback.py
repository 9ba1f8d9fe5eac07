"""Ordered fallback chains.

A chain is a list of named strategies tried in sequence. A strategy
succeeds by returning a non-None value; returning None or raising advances
to the next one. The first success wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """Named zero-argument coroutine factory producing a value or None."""

    name: str
    run: Callable[[], Awaitable[T | None]]


async def first_success(
    strategies: Sequence[Strategy[T]],
    *,
    label: str = "",
    log: logging.Logger | None = None,
) -> T | None:
    """Run ``strategies`` in order and return the first non-None result.

    Exceptions raised by a strategy are logged and treated as "no result".
    Cancellation is not swallowed. Returns None when every strategy is
    exhausted.
    """
    log = log or logger
    for strategy in strategies:
        try:
            result = await strategy.run()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            log.debug("%s: strategy %r failed: %s", label, strategy.name, exc)
            continue
        if result is not None:
            log.debug("%s: strategy %r succeeded", label, strategy.name)
            return result
        log.debug("%s: strategy %r found nothing", label, strategy.name)
    log.info("%s: all %d strategies exhausted", label, len(strategies))
    return None


async def call_with_timeout(
    func: Callable[..., T],
    *args: Any,
    timeout: float | None = None,
    **kwargs: Any,
) -> T:
    """Run a blocking call in a worker thread, bounded by ``timeout`` seconds.

    Raises:
        asyncio.TimeoutError: When the call does not finish in time.
    """
    return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout)
