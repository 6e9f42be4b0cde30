"""CLI entry point: python -m dustsweeper.mcp [--save PATH]"""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="python -m dustsweeper.mcp")
    parser.add_argument("--save", default=None, help="JSON save file (default: in-memory)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=args.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from dustsweeper.mcp.server import create_server
    from dustsweeper.persistence import JsonFileStore
    from dustsweeper.session import GameSession

    store = JsonFileStore(args.save) if args.save else None
    session = GameSession(store=store)
    if store is not None:
        session.load()

    server = create_server(session)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
