"""Render a timetable from a JSON file of lesson records as a table or JSON.

The JSON file holds either a list of lesson rows or an object with a
"lessons" list, in the shape the lesson source returns them.

Run with: python scripts/render_timetable.py data/lessons.json
List:     python scripts/render_timetable.py data/lessons.json --list
Past too: python scripts/render_timetable.py data/lessons.json --all
Week:     python scripts/render_timetable.py data/lessons.json --reference-date 2026-10-18
JSON:     python scripts/render_timetable.py data/lessons.json --json

Defaults for view mode and the upcoming filter come from TIMETABLE_* settings
(see src/timetable/config.py).

Exit codes:
  0 = success (table or JSON on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add src/ to path so the script runs from a checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from timetable.builder import build_timetable  # noqa: E402
from timetable.config import get_config  # noqa: E402
from timetable.errors import LessonContractError  # noqa: E402
from timetable.formatting import format_view  # noqa: E402
from timetable.logging import get_logger, setup_logging  # noqa: E402
from timetable.models import ViewMode  # noqa: E402

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Render a weekly timetable from lesson records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "lessons_file",
        type=Path,
        help="JSON file with a list of lesson records.",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--grid",
        dest="view_mode",
        action="store_const",
        const=ViewMode.GRID,
        help="Week pages with one row per time slot.",
    )
    mode_group.add_argument(
        "--list",
        dest="view_mode",
        action="store_const",
        const=ViewMode.LIST,
        help="Lessons grouped by date.",
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Include lessons dated before today.",
    )
    parser.add_argument(
        "--reference-date",
        type=date.fromisoformat,
        default=None,
        help="Start the grid at the week containing this date (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the view model as JSON instead of a table.",
    )
    return parser.parse_args(argv)


def _load_records(path: Path) -> list:
    """Read the lesson list from a bare JSON list or a {"lessons": [...]} object.

    Raises:
        LessonContractError: If the file holds anything else.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("lessons", [])
    if not isinstance(data, list):
        raise LessonContractError(
            f"{path} must hold a list of lesson records, got {type(data).__name__}"
        )
    return data


def main(args: argparse.Namespace) -> None:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    view_mode = args.view_mode or config.view_mode
    upcoming_only = config.upcoming_only and not args.all

    records = _load_records(args.lessons_file)
    log.info("lessons_loaded", path=str(args.lessons_file), records=len(records))

    view = build_timetable(
        records,
        view_mode=view_mode,
        upcoming_only=upcoming_only,
        reference_date=args.reference_date,
    )
    if view.skipped:
        log.warning("records_not_shown", count=len(view.skipped))

    if args.json:
        print(json.dumps(view.model_dump(mode="json"), indent=2))
    else:
        print(format_view(view))


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
