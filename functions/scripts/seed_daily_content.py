"""
CLI helper to create the daily quiz and India challenge ahead of time.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quiz.daily_quiz import get_or_create_daily_quiz, resolve_date
from quiz.india_challenge import get_or_create_challenge
from service.config import get_settings
from service.db import InMemoryDbClient
from service.dependencies import get_db_client
from service.errors import InvalidRequestError

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed daily quiz and challenge")
    parser.add_argument(
        "-d",
        "--date",
        type=str,
        default=None,
        help="Date to seed (YYYY-MM-DD, defaults to today in UTC)",
    )
    parser.add_argument(
        "--quiz",
        action="store_true",
        help="Only seed the daily quiz",
    )
    parser.add_argument(
        "--challenge",
        action="store_true",
        help="Only seed the India challenge",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    try:
        target_date = resolve_date(args.date)
    except InvalidRequestError as e:
        parser.error(e.message)

    db = get_db_client()
    if isinstance(db, InMemoryDbClient):
        logger.warning("No DATABASE_URL configured; seeded content will not persist")

    seed_all = not args.quiz and not args.challenge
    if seed_all or args.quiz:
        quiz, created = get_or_create_daily_quiz(db, settings, target_date)
        print(f"daily quiz {quiz.id} ({'created' if created else 'existing'}, {quiz.generation_method})")
    if seed_all or args.challenge:
        challenge = get_or_create_challenge(db, target_date)
        print(f"india challenge {challenge.id} ({challenge.participant_count} participants)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
