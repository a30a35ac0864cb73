"""Process-wide settings resolved once from the environment."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any

from strudel_bridge.constants import DEFAULT_BPM, DEFAULT_HEIGHT, DEFAULT_URL, DEFAULT_WIDTH


@dataclass(frozen=True)
class BridgeConfig:
    url: str = DEFAULT_URL
    headless: bool = True
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    debug: bool = False
    # Consumed by state tracking above the bridge, not by the session itself.
    default_bpm: int = DEFAULT_BPM

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(environ: dict[str, str] | None = None) -> BridgeConfig:
    env = os.environ if environ is None else environ
    url = str(env.get("STRUDEL_URL", "") or "").strip() or DEFAULT_URL
    return BridgeConfig(
        url=url,
        headless=str(env.get("HEADLESS", "")).strip().lower() != "false",
        width=_env_int(env, "WINDOW_WIDTH", DEFAULT_WIDTH),
        height=_env_int(env, "WINDOW_HEIGHT", DEFAULT_HEIGHT),
        debug=str(env.get("DEBUG", "")).strip().lower() == "true",
        default_bpm=_env_int(env, "DEFAULT_BPM", DEFAULT_BPM),
    )


def _env_int(env: Any, key: str, default: int) -> int:
    raw = str(env.get(key, "") or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
