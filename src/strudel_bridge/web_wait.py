"""Bounded waits used in place of completion events from the page."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaitPolicy:
    navigation_timeout_ms: int = 30000
    editor_timeout_ms: int = 10000
    content_settle_ms: int = 200
    playback_settle_ms: int = 500
    stop_settle_ms: int = 200
    tempo_settle_ms: int = 200
    poll_interval_ms: int = 25


DEFAULT_WAIT_POLICY = WaitPolicy()


def remaining_ms(deadline_ts: float, *, now_ts: float | None = None) -> int:
    now = time.monotonic() if now_ts is None else now_ts
    return int(max(0.0, deadline_ts - now) * 1000)


async def wait_until(
    predicate: Callable[[], Awaitable[bool]],
    *,
    timeout_ms: int,
    interval_ms: int = DEFAULT_WAIT_POLICY.poll_interval_ms,
) -> bool:
    """Poll ``predicate`` until it returns True or ``timeout_ms`` elapses.

    A predicate that raises counts as not satisfied yet. The predicate is
    always checked at least once, and once more at the deadline.
    """
    deadline = time.monotonic() + max(0, timeout_ms) / 1000
    interval = max(1, interval_ms) / 1000
    while True:
        try:
            if await predicate():
                return True
        except Exception as exc:
            logger.debug("wait predicate raised: %s", exc)
        left = remaining_ms(deadline)
        if left <= 0:
            return False
        await asyncio.sleep(min(interval, left / 1000))


async def settle(page: Any, delay_ms: int) -> None:
    """Fixed settle delay on the page clock, for actions with no observable completion."""
    if delay_ms <= 0:
        return
    await page.wait_for_timeout(delay_ms)
