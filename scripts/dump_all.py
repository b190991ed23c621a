#!/usr/bin/env python3
"""Dump what the pypaladins library can fetch with live credentials.

This script pings the API, opens a session, and calls a set of read-only
endpoints, printing the raw JSON so response shapes can be inspected.

Usage
-----
Set environment variables and run::

    export PALADINS_DEV_ID="1004"
    export PALADINS_AUTH_KEY="your-auth-key"
    python scripts/dump_all.py --player SomeName

Options::

    --player NAME        Also look up this player (name or numeric id)
    --platform ID        Portal id used to resolve --player (default: 5, Steam)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pypaladins import PaladinsClient, PaladinsConfig, PaladinsError


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


async def _dump(name: str, coro: Any, out: list[str], result: dict[str, Any]) -> None:
    try:
        body = await coro
    except PaladinsError as exc:
        out.append(_section(f"{name} FAILED"))
        out.append(f"  {type(exc).__name__}: {exc}")
        result[name] = {"error": {"type": type(exc).__name__, "message": str(exc)}}
        return
    out.append(_section(name))
    out.append(json.dumps(body, indent=2, ensure_ascii=False)[:4000])
    result[name] = body


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Dump data pypaladins can fetch for debugging / development.",
    )
    parser.add_argument("--player", help="Player name or numeric id to look up")
    parser.add_argument("--platform", type=int, default=5, help="Portal id used to resolve --player")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = PaladinsConfig.from_env()
    except PaladinsError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat()}
    out: list[str] = [_section("pypaladins dump_all"), f"  time      : {result['timestamp']}"]

    async with PaladinsClient(config) as client:
        await _dump("ping", client.ping(), out, result)
        await _dump("data_used", client.get_data_used(), out, result)
        await _dump("server_status", client.get_server_status(), out, result)
        await _dump("patch_info", client.get_patch_info(), out, result)
        await _dump("champions", client.get_champions(), out, result)
        if args.player:
            player: int | str = int(args.player) if args.player.isdigit() else args.player
            await _dump("player", client.get_player(player, platform=args.platform), out, result)

    payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    elif args.json_mode:
        print(payload)
    else:
        print("\n".join(out))

    failures = [name for name, body in result.items() if isinstance(body, dict) and "error" in body]
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
