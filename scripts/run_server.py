#!/usr/bin/env python3
"""
Start the API: Telegram login (interactive on first run), then uvicorn.

On first run Telethon prompts for the login code and 2FA password in this
terminal and the resulting session string is logged; store it as
TELEGRAM_SESSION to skip the prompt next time.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from src.server import main as run_server


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the channel procurement API")
    parser.add_argument("--host", default=None, help="Bind address (default: SERVER_HOST or config)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: SERVER_PORT or config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return run_server(host=args.host, port=args.port)


if __name__ == "__main__":
    sys.exit(main())
