"""Pattern commands translated into browser actions against the editor page."""

from __future__ import annotations

import logging
from typing import Any

from strudel_bridge.constants import PLAY_KEYS, PLAYING_MARKER_SELECTOR, STOP_KEYS
from strudel_bridge.errors import EvaluationFailure
from strudel_bridge.models import CommandResult, TempoValue
from strudel_bridge.web_editor import EditorSurface, detect_editor
from strudel_bridge.web_keyboard import press_combo
from strudel_bridge.web_session import SessionManager
from strudel_bridge.web_wait import settle, wait_until

logger = logging.getLogger(__name__)

IS_PLAYING_SCRIPT = f"() => document.querySelector('{PLAYING_MARKER_SELECTOR}') !== null"

# The cps value travels as an evaluation argument; the script text never changes.
SET_CPS_SCRIPT = """(cps) => {
  try {
    setcps(cps);
    return '';
  } catch (e) {
    return String((e && e.message) || e);
  }
}"""


class CommandBridge:
    def __init__(self, session: SessionManager) -> None:
        self._session = session
        self._wait = session.wait_policy

    async def execute_code(self, code: str) -> CommandResult:
        logger.debug("Executing pattern: %s", code[:50])
        try:
            async with self._session.lease() as page:
                editor = await detect_editor(page)
                await editor.replace(page, code)
                # The editor reparses the document after an edit.
                await settle(page, self._wait.content_settle_ms)
                applied = await wait_until(
                    lambda: _reads_back(editor, page, code),
                    timeout_ms=self._wait.content_settle_ms,
                    interval_ms=self._wait.poll_interval_ms,
                )
                if not applied:
                    logger.warning("Editor did not reflect the new pattern before playback")
                await press_combo(page, PLAY_KEYS)
                await settle(page, self._wait.playback_settle_ms)
        except Exception as exc:
            logger.debug("Pattern execution failed: %s", exc)
            raise EvaluationFailure("Failed to execute pattern", exc, operation="execute_code") from exc
        logger.debug("Pattern executed via %s editor", editor.kind)
        return CommandResult(success=True, code=code, playing=True)

    async def stop_playback(self) -> CommandResult:
        try:
            async with self._session.lease() as page:
                await press_combo(page, STOP_KEYS)
                await settle(page, self._wait.stop_settle_ms)
        except Exception as exc:
            raise EvaluationFailure("Failed to stop playback", exc, operation="stop_playback") from exc
        logger.debug("Playback stopped")
        return CommandResult(success=True, playing=False)

    async def start_playback(self) -> CommandResult:
        try:
            async with self._session.lease() as page:
                await press_combo(page, PLAY_KEYS)
                await settle(page, self._wait.playback_settle_ms)
        except Exception as exc:
            raise EvaluationFailure("Failed to start playback", exc, operation="start_playback") from exc
        logger.debug("Playback started")
        return CommandResult(success=True, playing=True)

    async def get_current_code(self) -> str:
        try:
            async with self._session.lease() as page:
                editor = await detect_editor(page)
                return await editor.read(page)
        except Exception as exc:
            logger.debug("Failed to get current code: %s", exc)
            return ""

    async def is_playing(self) -> bool:
        """Best effort: true only if the page exposes a playing marker attribute.

        The editor has no documented playback flag, so False can also mean
        "unknown".
        """
        try:
            async with self._session.lease() as page:
                return bool(await page.evaluate(IS_PLAYING_SCRIPT))
        except Exception as exc:
            logger.debug("Failed to check playing state: %s", exc)
            return False

    async def set_tempo(self, bpm: float) -> CommandResult:
        tempo = TempoValue.from_bpm(bpm)
        logger.debug("Setting tempo to %s BPM", tempo.bpm)
        try:
            async with self._session.lease() as page:
                page_error = await page.evaluate(SET_CPS_SCRIPT, tempo.cps)
                if page_error:
                    logger.warning("setcps failed in page: %s", page_error)
                await settle(page, self._wait.tempo_settle_ms)
        except Exception as exc:
            raise EvaluationFailure("Failed to set tempo", exc, operation="set_tempo") from exc
        logger.debug("Tempo set to %s BPM (%s CPS)", tempo.bpm, tempo.cps)
        return CommandResult.for_tempo(tempo)


async def _reads_back(editor: EditorSurface, page: Any, code: str) -> bool:
    return await editor.read(page) == code
