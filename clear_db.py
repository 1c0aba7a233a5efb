#!/usr/bin/env python3
"""Script to wipe the products database: ``python clear_db.py --clear``."""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from product_api.db.session import reset_db

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--clear",
        action="store_true",
        help="drop and recreate every table (all products are lost)",
    )
    args = parser.parse_args(argv)

    if not args.clear:
        parser.print_usage()
        return 0

    try:
        reset_db()
    except SQLAlchemyError as e:
        logger.error(f"Failed to clear database: {e}")
        print(f"Failed to clear database: {e}", file=sys.stderr)
        return 1

    print("Data eliminated successfully")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
