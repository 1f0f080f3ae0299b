#!/usr/bin/env python3
"""Serve the Whoa web application, e.g. ``./run_api.py --port 8080``."""

import argparse
import logging
import sys
from pathlib import Path

# Add project to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from whoa.config import get, load_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Serve the Whoa web application")
    parser.add_argument("-c", "--config", default=str(project_root / "config" / "app.yaml"),
                        help="Path to app.yaml")
    parser.add_argument("--host", help="Bind address (api.host by default)")
    parser.add_argument("--port", type=int, help="Port (api.port by default)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if not Path(args.config).exists():
        print(f"Error: {args.config} not found")
        print("Copy config/app.example.yaml to config/app.yaml and configure it")
        return 1

    config = load_config(args.config)
    logging.basicConfig(
        level=get("logging.level", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = args.host or get("api.host", "127.0.0.1")
    port = args.port or get("api.port", 8000)

    # Import here so a missing config is reported before the app is assembled
    import uvicorn
    from whoa.api import create_app

    app = create_app(config)
    logger.info(f"Serving '{app.title}' on http://{host}:{port} (docs at /docs)")

    uvicorn.run(app, host=host, port=port, log_level="info", access_log=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
