"""Keyboard macros sent to the focused editor."""

from __future__ import annotations

from typing import Any


async def press_combo(page: Any, keys: tuple[str, str]) -> None:
    modifier, key = keys
    await page.keyboard.down(modifier)
    try:
        await page.keyboard.press(key)
    finally:
        await page.keyboard.up(modifier)
