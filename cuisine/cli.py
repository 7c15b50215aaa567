"""Command-line entry point: open the database and serve the HTTP API."""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from collections.abc import Sequence
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from .app import create_app
from .database import connect, migrate

DEFAULT_DATABASE = "cuisine.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

log = logging.getLogger("cuisine")


class _LoggingRequestHandler(WSGIRequestHandler):
    """Request handler that reports through logging instead of raw stderr."""

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        log.info("%s - %s", self.address_string(), format % args)


def _port(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {raw!r}") from None
    if not 0 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Read the database path and listening address from the command line."""
    parser = argparse.ArgumentParser(
        prog="cuisine",
        description="Serve the French culinary glossary and recipes as a JSON API.",
    )
    parser.add_argument(
        "--database",
        default=DEFAULT_DATABASE,
        help=f"SQLite database file (default: {DEFAULT_DATABASE})",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"address to listen on (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=_port,
        default=DEFAULT_PORT,
        help=f"port to listen on (default: {DEFAULT_PORT})",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open and migrate the database, then serve until interrupted."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        conn = connect(args.database)
        migrate(conn)
    except sqlite3.Error as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        app = create_app(conn)
        try:
            server = make_server(
                args.host,
                args.port,
                app,
                server_class=WSGIServer,
                handler_class=_LoggingRequestHandler,
            )
        except OSError as exc:
            port = args.port
            print(f"Error: failed to bind port {port} — {exc}", file=sys.stderr)
            print(
                f"Hint: another process may already be using port {port}.",
                file=sys.stderr,
            )
            print(
                f"      Run: lsof -i :{port}  or  ss -tlnp | grep {port}",
                file=sys.stderr,
            )
            return 1

        with server:
            log.info("listening on http://%s:%d", args.host, server.server_port)
            try:
                server.serve_forever()
            except KeyboardInterrupt:
                log.info("shutting down")
        return 0
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())