"""
Import deceased musicians into a Redis sorted set keyed by age at death, and
list the ones who died at an age close to a given person's current age.

Usage:
    python3 scripts/outlived.py -import data/musicians.csv
    python3 scripts/outlived.py -query 1990-09-25 -d 365
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from dotenv import load_dotenv

from src.services.errors import InvalidDateError, OutlivedError
from src.services.lifespans import DATE_FORMAT, age_parts, days_between, is_date_string
from src.services.musicians import Musician, read_csv
from src.services.sorted_set_store import SortedSetStore, StoreConfig, open_store

LOGGER = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DAY_RANGE = 365
NAME_WIDTH = 30
MARKER_LABEL = ">>> YOU ARE HERE"


def _age_columns(days: int) -> str:
    years, remainder = age_parts(days)
    return f"{years:3d} years and {remainder:3d} days"


def format_death_line(name: str, days: int) -> str:
    return f"{name:<{NAME_WIDTH}} (died aged {_age_columns(days)})"


def format_marker_line(days: int) -> str:
    return f"{MARKER_LABEL:<{NAME_WIDTH}} (     aged {_age_columns(days)})"


def import_dataset(path: Path, store: SortedSetStore) -> int:
    """Replace the stored dataset with the scored rows of ``path``.

    Every row is scored before anything is sent to the store, so a bad date
    leaves the previous dataset untouched.
    """
    print(f"Importing records from '{path}'")
    musicians = read_csv(path)
    print(f"Parsed {len(musicians)} records from file")
    scored = [(musician.age_at_death(), musician.serialize()) for musician in musicians]
    written = store.replace_all(scored)
    print("Successfully completed import into Redis")
    return written


def resolve_day_range(day_range: int | None) -> int:
    if day_range is None or day_range < 0:
        return DEFAULT_DAY_RANGE
    return day_range


def render_results(reference_age: int, members: Iterable[str]) -> list[str]:
    """Format query results, inserting the marker where ``reference_age`` falls.

    ``members`` must be in ascending score order. The marker goes before the
    first record that is strictly older than the reference age; if there is
    none it is appended after the last record.
    """
    lines: list[str] = []
    last_age = 0
    marker_pending = True
    for member in members:
        musician = Musician.deserialize(member)
        age = musician.age_at_death()
        if marker_pending and last_age <= reference_age < age:
            lines.append(format_marker_line(reference_age))
            marker_pending = False
        lines.append(format_death_line(musician.name, age))
        last_age = age
    if marker_pending and reference_age >= last_age:
        lines.append(format_marker_line(reference_age))
    return lines


def query_dataset(
    reference_date: str,
    day_range: int | None,
    store: SortedSetStore,
    today: date | None = None,
) -> list[str]:
    if not is_date_string(reference_date):
        raise InvalidDateError("invalid query date format: Dates must be in the format 'YYYY-MM-DD'")
    window = resolve_day_range(day_range)
    today = today or date.today()
    reference_age = days_between(reference_date, today.strftime(DATE_FORMAT))
    LOGGER.info("Reference age is %s days; querying +/- %s days", reference_age, window)
    members = store.range_by_score(reference_age - window, reference_age + window)
    return render_results(reference_age, members)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find out which deceased musicians you have outlived.",
    )
    parser.add_argument(
        "-import",
        dest="import_file",
        default="",
        help="Import the CSV file (name,YYYY-MM-DD,YYYY-MM-DD) into Redis, replacing existing data.",
    )
    parser.add_argument(
        "-query",
        dest="query",
        default="",
        help="Query the database using a date in the format 'YYYY-MM-DD'.",
    )
    parser.add_argument(
        "-d",
        dest="day_range",
        type=int,
        default=DEFAULT_DAY_RANGE,
        help="Number of days either side of the target age to return (default: 365).",
    )
    parser.add_argument(
        "--redis-url",
        default=None,
        help="Redis connection URL (default: $OUTLIVED_REDIS_URL or redis://127.0.0.1:6379/0).",
    )
    parser.add_argument(
        "--key",
        default=None,
        help="Sorted set key holding the dataset (default: $OUTLIVED_REDIS_KEY or musicians).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    if not args.import_file and not args.query:
        parser.print_help(sys.stderr)
        return 0

    if load_dotenv(dotenv_path=REPO_ROOT / ".env"):
        LOGGER.debug("Loaded environment variables from .env file.")
    config = StoreConfig.from_env()
    if args.redis_url:
        config.url = args.redis_url
    if args.key:
        config.key = args.key

    try:
        if args.import_file:
            with open_store(config) as store:
                import_dataset(Path(args.import_file), store)
        if args.query:
            with open_store(config) as store:
                lines = query_dataset(args.query, args.day_range, store)
            for line in lines:
                print(line)
    except OutlivedError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
