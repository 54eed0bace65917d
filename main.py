"""Nihilism — dev launcher. Starts the backend with uvicorn."""

import argparse
import logging
import os
from pathlib import Path

import uvicorn

from nihilism.config import load_settings

ROOT = Path(__file__).parent


def main():
    settings = load_settings(ROOT / ".env")

    parser = argparse.ArgumentParser(description="Nihilism game server")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Player save directory (default: ./data)")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true",
                        help="Restart on code changes")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # The app reads DATA_DIR when uvicorn imports it
    if args.data_dir:
        os.environ["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run("backend.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
