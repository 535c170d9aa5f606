#!/usr/bin/env python3
"""
cli.py – tiny command-line client for the LIRC dispatcher

- sends one command sequence to lircd over TCP
- tokens are sent in order, DELAY|<ms> tokens just wait
- exits non-zero on the first transport error
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .lirc import DEFAULT_PORT, LircController, LircError

# ----------------- helpers -----------------


def split_tokens(items: list[str]) -> list[str]:
    """Accept tokens as separate args or comma separated."""
    out: list[str] = []
    for it in items:
        for part in it.split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


# ----------------- CLI -----------------


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Send a command sequence to lircd")
    ap.add_argument("--host", required=True, help="lircd host")
    ap.add_argument("--port", type=int, default=DEFAULT_PORT, help="lircd TCP port")
    ap.add_argument("--remote", required=True, help="remote name registered with lircd")
    ap.add_argument("--delay", type=int, default=0, help="settle delay after each key (ms)")
    ap.add_argument("--timeout", type=float, default=None, help="connect/write timeout (s)")
    ap.add_argument("-v", "--verbose", action="store_true")
    ap.add_argument("tokens", nargs="+", help="keys, or DELAY|<ms>")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    controller = LircController(
        args.host,
        args.port,
        args.remote,
        args.delay,
        timeout=args.timeout,
    )

    try:
        asyncio.run(controller.async_send_commands(split_tokens(args.tokens)))
    except LircError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
