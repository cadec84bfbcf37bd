"""Command-line entry point: prepare the cache directory and serve the API."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from inventory import config
from inventory.main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-server", description="Inventory registry HTTP server"
    )
    parser.add_argument("-H", "--host", default=config.HOST, help="Server host")
    parser.add_argument("-p", "--port", type=int, default=config.PORT, help="Server port")
    parser.add_argument(
        "-c",
        "--cache",
        type=Path,
        default=config.CACHE_DIR,
        help="Cache directory for the inventory record and photos "
        "(defaults to $INVENTORY_CACHE_DIR)",
    )
    return parser


def prepare_cache_dir(cache_dir: Path) -> Path:
    if cache_dir.exists():
        logger.info("Using existing cache directory %s", cache_dir)
    else:
        cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Created cache directory %s", cache_dir)
    return cache_dir


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cache is None:
        parser.error("a cache directory is required: pass -c/--cache or set INVENTORY_CACHE_DIR")

    app = create_app(prepare_cache_dir(args.cache))
    logger.info("Starting inventory server on http://%s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
