"""Error taxonomy for the session manager and the command bridge."""

from __future__ import annotations


class BridgeError(Exception):
    """Base class; ``operation`` names the call that failed."""

    prefix = "Bridge operation failed"

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(f"{self.prefix}: {message}")
        self.operation = operation


class LaunchFailure(BridgeError):
    prefix = "Browser launch failed"


class EditorNotFoundError(BridgeError):
    prefix = "Editor not found"


class EvaluationFailure(BridgeError):
    """A remote action or script raised.

    The prefix depends on the operation, e.g. ``Failed to execute pattern``.
    """

    def __init__(self, prefix: str, cause: BaseException, *, operation: str = "") -> None:
        self.prefix = prefix
        super().__init__(str(cause), operation=operation)


class StaleSessionRecovered(Exception):
    """Internal signal: a probe failed and the session was discarded."""


def describe_error(exc: BaseException) -> str:
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current).strip() or type(current).__name__
        if not parts or text not in parts[-1]:
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
