#!/usr/bin/env python3
"""Create the row-store tables in the configured database."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from funeral_desk.core.logger import get_logger, init_logging, log_context
from funeral_desk.db import create_sync_engine
from funeral_desk.models import Base
from funeral_desk.store import SqlTabularStore

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", type=str, default=None, help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    engine = create_sync_engine(args.url)
    if args.drop:
        logger.warning("Dropping all row-store tables")
        Base.metadata.drop_all(engine)
    SqlTabularStore(engine).create_tables()
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    init_logging(app_name="init-db")
    log_context.bind(job="init_db")
    main()
