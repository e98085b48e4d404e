"""Utility script that persists the expiry of past-due notifications."""

from __future__ import annotations

import argparse
import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import expire_notifications
from app.infrastructure.database import SessionLocal, initialize_database

logger = logging.getLogger("expire_notifications")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the expiry sweep."""

    parser = argparse.ArgumentParser(
        description="Mark active notifications whose expiry has passed as expired.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Repeat the sweep every N seconds instead of running once (e.g. 30)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Lower the log level to DEBUG.",
    )
    return parser.parse_args(argv)


def run_once() -> int:
    """Run a single sweep and return the number of expired notifications."""

    session = SessionLocal()
    try:
        return expire_notifications(session)
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        session.close()


def main() -> None:
    """Run the sweep once or on a fixed interval."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    initialize_database()

    if args.interval is None:
        try:
            expired = run_once()
        except SQLAlchemyError as exc:
            raise SystemExit(f"Expiry sweep failed: {exc}") from exc
        print(f"Expired notifications: {expired}")
        return

    logger.info("Running expiry sweep every %s seconds", args.interval)
    while True:
        try:
            expired = run_once()
        except SQLAlchemyError as exc:
            logger.error("Expiry sweep failed: %s", exc)
        else:
            logger.debug("Sweep expired %s notification(s)", expired)
        time.sleep(args.interval)


if __name__ == "__main__":
    main()
