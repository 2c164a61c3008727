"""Seed the demo account and a rotating set of punch scenarios.

Usage: python scripts/seed_db.py [START YYYY-MM-DD] [END YYYY-MM-DD]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from timeclock.common.datetime_utils import get_timezone, parse_iso_date
from timeclock.core.constants import DEFAULT_TIMEZONE
from timeclock.database.bootstrap import (
    DEMO_END,
    DEMO_START,
    DEMO_USER_EMAIL,
    ensure_demo_user,
    seed_demo_punches,
)

logger = logging.getLogger("seed_db")


def main(argv: list[str]) -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    tz = get_timezone(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    start = parse_iso_date(argv[0]) if len(argv) > 0 else DEMO_START
    end = parse_iso_date(argv[1]) if len(argv) > 1 else DEMO_END

    user_id = ensure_demo_user(db_config)
    count = seed_demo_punches(db_config, user_id=user_id, start=start, end=end, tz=tz)
    logger.info("seeded %s with %d punches (%s..%s)", DEMO_USER_EMAIL, count, start, end)


if __name__ == "__main__":
    main(sys.argv[1:])
