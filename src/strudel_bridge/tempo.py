"""Tempo conversions. One cycle is one bar of four beats (4/4)."""

from __future__ import annotations

from strudel_bridge.constants import BEATS_PER_CYCLE


def bpm_to_cps(bpm: float) -> float:
    return bpm / 60 / BEATS_PER_CYCLE


def cps_to_bpm(cps: float) -> float:
    return cps * 60 * BEATS_PER_CYCLE
