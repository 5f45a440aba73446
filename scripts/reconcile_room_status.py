import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from datetime import date

import structlog

from hotelhub.db.engine import engine
from hotelhub.db.store import SqlDataStore
from hotelhub.logging_config import setup_logging
from hotelhub.services.room_status import reconcile_room_statuses

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Repair room statuses left behind by failed best-effort updates.

    Meant to run shortly after midnight UTC, e.g. from cron:
        5 0 * * * python scripts/reconcile_room_status.py
    """
    parser = argparse.ArgumentParser(description="Mark rooms occupied for today's stays")
    parser.add_argument("--day", type=date.fromisoformat, help="Day to reconcile (YYYY-MM-DD)")
    args = parser.parse_args()

    logger.info("reconcile_started", day=args.day.isoformat() if args.day else "today")
    try:
        fixed = reconcile_room_statuses(SqlDataStore(engine), args.day)
    except Exception:
        logger.exception("reconcile_failed")
        raise
    logger.info("reconcile_completed", rooms_updated=len(fixed))


if __name__ == "__main__":
    main()
