"""CLI entrypoint for strudel-bridge."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, TextIO

from strudel_bridge.command_bridge import CommandBridge
from strudel_bridge.config import BridgeConfig, load_config
from strudel_bridge.errors import BridgeError
from strudel_bridge.guardrails import evaluate_pattern_code, require_valid_pattern
from strudel_bridge.logging_setup import configure_logging
from strudel_bridge.models import CommandResult
from strudel_bridge.web_session import SessionManager

SHELL_HELP = "commands: play <code> | stop | start | tempo <bpm> | code | playing | status | restart | quit"


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    config = load_config()
    configure_logging(config.debug)

    if args.command == "config":
        _emit(config.to_dict())
        return
    if args.command == "play":
        require_valid_pattern(args.code)
        asyncio.run(play_command(args.code, hold_seconds=args.hold, config=config))
        return
    if args.command == "shell":
        asyncio.run(shell_command(config=config))
        return

    parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strudel-bridge",
        description="Drive the Strudel live-coding editor through a headless browser.",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("config", help="Show the resolved configuration")

    play_parser = subparsers.add_parser("play", help='Play a pattern: strudel-bridge play "<code>"')
    play_parser.add_argument("code", type=str)
    play_parser.add_argument(
        "--hold",
        type=float,
        default=0.0,
        help="Seconds to keep the browser (and the audio) running before closing.",
    )

    subparsers.add_parser("shell", help="Read commands from stdin against one long-lived session")
    return parser


async def play_command(code: str, *, hold_seconds: float, config: BridgeConfig) -> None:
    session = SessionManager(config)
    bridge = CommandBridge(session)
    try:
        try:
            result = await bridge.execute_code(code)
        except BridgeError as exc:
            _emit(CommandResult.failure(exc).to_dict())
            raise SystemExit(1) from exc
        _emit(result.to_dict())
        if hold_seconds > 0:
            await asyncio.sleep(hold_seconds)
    finally:
        await session.close()


async def shell_command(*, config: BridgeConfig, stream: TextIO | None = None) -> None:
    source = stream or sys.stdin
    session = SessionManager(config)
    bridge = CommandBridge(session)
    try:
        while True:
            line = await asyncio.to_thread(source.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue
            payload = await dispatch_line(bridge, session, line)
            if payload is None:
                break
            _emit(payload)
    finally:
        await session.close()


async def dispatch_line(bridge: CommandBridge, session: SessionManager, line: str) -> dict[str, Any] | None:
    verb, _, rest = line.strip().partition(" ")
    verb = verb.lower()
    rest = rest.strip()
    if verb in {"quit", "exit"}:
        return None
    try:
        if verb == "play":
            decision = evaluate_pattern_code(rest)
            if not decision.allowed:
                return {"success": False, "error": f"Pattern rejected: {decision.reason}"}
            return (await bridge.execute_code(rest)).to_dict()
        if verb == "stop":
            return (await bridge.stop_playback()).to_dict()
        if verb == "start":
            return (await bridge.start_playback()).to_dict()
        if verb == "tempo":
            return (await bridge.set_tempo(_parse_bpm(rest))).to_dict()
        if verb == "code":
            return {"success": True, "code": await bridge.get_current_code()}
        if verb == "playing":
            return {"success": True, "playing": await bridge.is_playing()}
        if verb == "status":
            alive = await session.is_alive()
            return {"success": True, "alive": alive, **session.status()}
        if verb == "restart":
            await session.restart()
            return {"success": True, **session.status()}
        if verb == "help":
            return {"success": True, "message": SHELL_HELP}
    except (BridgeError, ValueError) as exc:
        return CommandResult.failure(exc).to_dict()
    return {"success": False, "error": f"Unknown command: {verb}. {SHELL_HELP}"}


def _parse_bpm(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Invalid bpm: {raw!r}") from None
    return int(value) if value.is_integer() else value


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False), flush=True)


if __name__ == "__main__":
    main()
