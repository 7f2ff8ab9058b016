#!/usr/bin/env python3
"""
Launch the document store HTTP server.
Usage: python server.py [--host 127.0.0.1] [--port 5000] [--reload]
"""

from __future__ import annotations

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

from settings import get_settings


def main(argv: list[str] | None = None) -> int:
    load_dotenv("local.env")
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Launch the JSON document store")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--log-level", default="info", help="Logging level (default: info)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server listening on %s:%s", args.host, args.port)

    uvicorn.run("app:create_app", factory=True, host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
