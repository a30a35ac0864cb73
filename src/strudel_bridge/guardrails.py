"""Basic syntax guardrails applied to pattern code before it reaches the editor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GuardrailDecision:
    allowed: bool
    reason: str
    errors: list[str] = field(default_factory=list)


def evaluate_pattern_code(code: str) -> GuardrailDecision:
    if not str(code or "").strip():
        return GuardrailDecision(False, "Empty pattern code", ["Empty pattern code"])

    errors: list[str] = []
    depth = 0
    for char in code:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth < 0:
            errors.append("Unbalanced parentheses")
            break
    if depth > 0:
        errors.append("Unclosed parentheses")

    if code.count("'") % 2:
        errors.append("Unclosed single quotes")
    if code.count('"') % 2:
        errors.append("Unclosed double quotes")

    if errors:
        return GuardrailDecision(False, "; ".join(errors), errors)
    return GuardrailDecision(True, "Pattern code looks balanced")


def require_valid_pattern(code: str) -> None:
    decision = evaluate_pattern_code(code)
    if not decision.allowed:
        raise SystemExit(f"Pattern rejected: {decision.reason}")
