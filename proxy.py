#!/usr/bin/env python3
"""Run the LongCat gateway with uvicorn."""

from __future__ import annotations

import argparse
import dataclasses
import sys

import uvicorn

from longcat_proxy.config_loader import load_settings
from longcat_proxy.core.exceptions import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OpenAI-compatible gateway for LongCat")
    parser.add_argument("--config", help="YAML config file (default: $LONGCAT_PROXY_CONFIG)")
    parser.add_argument("--host", help="Bind address (overrides $HOST)")
    parser.add_argument("--port", type=int, help="Listen port (overrides $PORT)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides $LOG_LEVEL)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc.message}", file=sys.stderr)
        return 2

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = dataclasses.replace(settings, **overrides)

    from longcat_proxy.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
