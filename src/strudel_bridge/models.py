"""Result and tempo models returned by the command bridge."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any

from strudel_bridge.errors import describe_error
from strudel_bridge.tempo import bpm_to_cps


@dataclass(frozen=True)
class TempoValue:
    bpm: float
    cps: float

    @classmethod
    def from_bpm(cls, bpm: Any) -> "TempoValue":
        value = _expect_positive_number(bpm, "bpm")
        return cls(bpm=value, cps=bpm_to_cps(value))


@dataclass(frozen=True)
class CommandResult:
    success: bool
    code: str | None = None
    playing: bool | None = None
    bpm: float | None = None
    cps: float | None = None
    error: str | None = None

    @classmethod
    def failure(cls, exc: BaseException) -> "CommandResult":
        return cls(success=False, error=describe_error(exc))

    @classmethod
    def for_tempo(cls, tempo: TempoValue) -> "CommandResult":
        return cls(success=True, bpm=tempo.bpm, cps=tempo.cps)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        for item in fields(self):
            if item.name == "success":
                continue
            value = getattr(self, item.name)
            if value is not None:
                payload[item.name] = value
        return payload


def _expect_positive_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    try:
        as_float = float(value)
    except OverflowError:
        raise ValueError(f"'{key}' is out of range") from None
    if not math.isfinite(as_float) or as_float <= 0:
        raise ValueError(f"'{key}' must be a finite number greater than zero")
    return value
