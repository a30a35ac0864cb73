"""Persistent browser session lifecycle for the editor page."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from playwright.async_api import async_playwright

from strudel_bridge.config import BridgeConfig, load_config
from strudel_bridge.constants import (
    CHROMIUM_LAUNCH_ARGS,
    EDITOR_READY_SELECTOR,
    NAVIGATION_WAIT_UNTIL,
    USER_AGENT,
)
from strudel_bridge.errors import LaunchFailure, StaleSessionRecovered
from strudel_bridge.web_runtime_safety import is_page_closed_error, page_is_closed
from strudel_bridge.web_wait import DEFAULT_WAIT_POLICY, WaitPolicy

logger = logging.getLogger(__name__)

LIVENESS_PROBE_SCRIPT = "() => true"


@dataclass
class WebSession:
    playwright: Any
    browser: Any
    context: Any
    page: Any
    launched_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "launched_at": self.launched_at,
            "url": str(getattr(self.page, "url", "") or ""),
        }


class SessionManager:
    """Owns the single browser and editor page, relaunching when the page dies.

    Every public coroutine takes the session lock, so concurrent callers
    cannot launch two browsers or tear a session down under a running
    command. Bridge operations go through ``lease()`` to hold the lock for
    the whole ensure -> action -> settle sequence.
    """

    def __init__(self, config: BridgeConfig | None = None, *, wait_policy: WaitPolicy | None = None) -> None:
        self._config = config or load_config()
        self._wait = wait_policy or DEFAULT_WAIT_POLICY
        self._session: WebSession | None = None
        self._lock = asyncio.Lock()

    @property
    def wait_policy(self) -> WaitPolicy:
        return self._wait

    def get_config(self) -> BridgeConfig:
        return self._config

    async def launch(self) -> WebSession:
        async with self._lock:
            return await self._launch_locked()

    async def ensure(self) -> Any:
        async with self._lock:
            return (await self._launch_locked()).page

    async def close(self) -> None:
        async with self._lock:
            await self._close_locked()

    async def restart(self) -> WebSession:
        async with self._lock:
            await self._close_locked()
            return await self._launch_locked()

    async def is_alive(self) -> bool:
        async with self._lock:
            return await self._probe(self._session)

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[Any]:
        async with self._lock:
            session = await self._launch_locked()
            yield session.page

    def status(self) -> dict[str, Any]:
        session = self._session
        payload: dict[str, Any] = {"state": "open" if session is not None else "closed"}
        if session is not None:
            payload.update(session.to_dict())
        return payload

    async def _launch_locked(self) -> WebSession:
        if self._session is not None:
            try:
                return await self._reuse_or_discard(self._session)
            except StaleSessionRecovered as exc:
                logger.warning("%s; relaunching", exc)

        logger.debug("Launching browser (headless=%s)", self._config.headless)
        playwright = None
        browser = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=self._config.headless,
                args=[
                    *CHROMIUM_LAUNCH_ARGS,
                    f"--window-size={self._config.width},{self._config.height}",
                ],
            )
            context = await browser.new_context(
                viewport=self._config.viewport,
                user_agent=USER_AGENT,
            )
            page = await context.new_page()
            logger.debug("Navigating to %s", self._config.url)
            await page.goto(
                self._config.url,
                wait_until=NAVIGATION_WAIT_UNTIL,
                timeout=self._wait.navigation_timeout_ms,
            )
            await page.wait_for_selector(EDITOR_READY_SELECTOR, timeout=self._wait.editor_timeout_ms)
        except Exception as exc:
            logger.debug("Browser launch failed: %s", exc)
            await _shutdown(playwright, browser)
            raise LaunchFailure(str(exc), operation="launch") from exc
        except BaseException:
            logger.debug("Browser launch interrupted; closing partial session")
            await _shutdown(playwright, browser)
            raise

        self._session = WebSession(playwright=playwright, browser=browser, context=context, page=page)
        logger.debug("Browser ready")
        return self._session

    async def _reuse_or_discard(self, session: WebSession) -> WebSession:
        if await self._probe(session):
            return session
        self._session = None
        await _shutdown(session.playwright, session.browser)
        raise StaleSessionRecovered("Page disconnected")

    async def _close_locked(self) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        await _shutdown(session.playwright, session.browser)
        logger.debug("Browser closed")

    @staticmethod
    async def _probe(session: WebSession | None) -> bool:
        if session is None or session.browser is None or session.page is None:
            return False
        if page_is_closed(session.page):
            return False
        try:
            await session.page.evaluate(LIVENESS_PROBE_SCRIPT)
        except Exception as exc:
            if is_page_closed_error(exc):
                logger.debug("Liveness probe hit a closed page: %s", exc)
            else:
                logger.warning("Liveness probe failed: %s", exc)
            return False
        return True


async def _shutdown(playwright: Any | None, browser: Any | None) -> None:
    # A crashed browser usually fails to close; the handles are dropped regardless.
    if browser is not None:
        try:
            await browser.close()
        except Exception as exc:
            logger.warning("Error closing browser: %s", exc)
    if playwright is not None:
        try:
            await playwright.stop()
        except Exception as exc:
            logger.warning("Error stopping playwright: %s", exc)
