#!/usr/bin/env python3
"""
Sidekick command line.

Usage:
    sidekick check                                   # is AbletonOSC answering?
    sidekick info                                    # tempo, signature, track count
    sidekick send /live/song/create_midi_track -1    # one-command batch
    sidekick batch commands.json                     # {"commands": [...], "description": "..."}
    sidekick chat                                    # talk to the agent

Exit 0 when the batch (or check) fully succeeds, 1 otherwise.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import ValidationError

from ableton_controls import AbletonQueryClient, QueryTimeout
from config import ConfigError, Settings
from logging_config import setup_logging
from osc_executor import BatchStatus, OscBatch, OscBatchExecutor
from osc_executor.pacing import from_milliseconds
from osc_preflight import run_preflight

logger = logging.getLogger("sidekick.cli")


def _non_negative_ms(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a number, got {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {raw!r}")
    return value


def coerce_arg(raw: str) -> Any:
    """Turn a command-line token into an OSC argument value."""
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def _parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        prog="sidekick",
        description="Control Ableton Live via AbletonOSC",
    )
    p.add_argument("--host", default=None, help="AbletonOSC host (default 127.0.0.1)")
    p.add_argument("--port", type=int, default=None, help="AbletonOSC port (default 11000)")
    p.add_argument("--delay-ms", type=_non_negative_ms, default=None,
                   help="Pause after each command in ms (default 100)")
    p.add_argument("--verbose", "-v", action="store_true", help="DEBUG output on console")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Verify AbletonOSC is responding")
    sub.add_parser("info", help="Print current project info as JSON")

    send = sub.add_parser("send", help="Send a single OSC command")
    send.add_argument("path", help="OSC address, e.g. /live/song/set/tempo")
    send.add_argument("args", nargs="*", help="Arguments (true/false, ints, floats, strings)")
    send.add_argument("--description", "-d", default="", help="What this command does")

    batch = sub.add_parser("batch", help="Execute a JSON batch file ('-' for stdin)")
    batch.add_argument("file")

    sub.add_parser("chat", help="Interactive chat with the Sidekick agent")

    return p.parse_args(argv)


def _make_executor(settings: Settings) -> OscBatchExecutor:
    return OscBatchExecutor(
        host=settings.osc_host,
        port=settings.osc_port,
        pacing=from_milliseconds(settings.osc_delay_ms),
    )


def _make_query_client(settings: Settings) -> AbletonQueryClient:
    return AbletonQueryClient(
        host=settings.osc_host,
        port=settings.osc_port,
        response_port=settings.osc_response_port,
        timeout=settings.query_timeout_s,
    )


def _run_batch(settings: Settings, batch: OscBatch) -> int:
    result = _make_executor(settings).execute_sync(batch)
    print(json.dumps(result.to_response(), indent=2))
    return 0 if result.status == BatchStatus.SUCCESS else 1


def cmd_check(settings: Settings) -> int:
    with _make_query_client(settings) as live:
        report = run_preflight(live, require_project=True, osc_attempts=3, osc_delay_s=0.5)
    for check in report["checks"]:
        print(f"[{'OK' if check['ok'] else 'FAIL'}] {check['name']}: {check['message']}")
    return 0 if report["ok"] else 1


def cmd_info(settings: Settings) -> int:
    with _make_query_client(settings) as live:
        try:
            info = live.get_project_info()
        except QueryTimeout as e:
            print(f"Could not reach Ableton Live: {e}", file=sys.stderr)
            return 1
    print(json.dumps(info.model_dump(), indent=2))
    return 0


def cmd_send(settings: Settings, path: str, raw_args: List[str], description: str) -> int:
    batch = OscBatch(
        commands=[{"path": path, "args": [coerce_arg(a) for a in raw_args]}],
        description=description or path,
    )
    return _run_batch(settings, batch)


def cmd_batch(settings: Settings, file: str) -> int:
    if file == "-":
        payload = json.load(sys.stdin)
    else:
        with open(file, "r", encoding="utf-8") as f:
            payload = json.load(f)
    return _run_batch(settings, OscBatch(**payload))


async def _chat_loop(agent):
    loop = asyncio.get_running_loop()
    print("Sidekick ready. Type 'quit' or 'exit' to stop.")
    while True:
        try:
            user_text = await loop.run_in_executor(None, lambda: input("You: "))
        except EOFError:
            break
        user_text = user_text.strip()
        if not user_text:
            continue
        if user_text.lower() in ("quit", "exit"):
            break
        if user_text.lower() == "reset":
            agent.reset()
            print("(conversation cleared)")
            continue
        try:
            reply = await agent.send(user_text)
        except Exception as e:
            logger.exception("Error processing message")
            print(f"Sidekick: error: {e}")
            continue
        print(f"Sidekick: {reply}")


def cmd_chat(settings: Settings) -> int:
    from agents import SidekickAgent, ToolDispatcher

    dispatcher = ToolDispatcher(
        executor=_make_executor(settings),
        query_client_factory=lambda: _make_query_client(settings),
    )
    agent = SidekickAgent(
        dispatcher=dispatcher,
        api_key=settings.api_key,
        model_id=settings.model_id,
    )
    asyncio.run(_chat_loop(agent))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        settings = Settings.from_env().with_overrides(
            osc_host=args.host,
            osc_port=args.port,
            osc_delay_ms=args.delay_ms,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(
        log_file=settings.log_file,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        if args.command == "check":
            return cmd_check(settings)
        if args.command == "info":
            return cmd_info(settings)
        if args.command == "send":
            return cmd_send(settings, args.path, args.args, args.description)
        if args.command == "batch":
            return cmd_batch(settings, args.file)
        if args.command == "chat":
            return cmd_chat(settings)
    except (ValidationError, ConfigError, json.JSONDecodeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 2


if __name__ == "__main__":
    sys.exit(main())
