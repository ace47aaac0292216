#!/usr/bin/env python3
"""
Score a Yahtzee hand from the command line.

Usage:
    python yahtzee.py 2 2 3 3 3                          # Text table of all 13 options
    python yahtzee.py 1 2 3 4 5 --format json            # JSON snapshot
    python yahtzee.py 6 6 6 6 2 --filled chance=20       # Mark categories as played
    python yahtzee.py 6 6 6 6 2 --sheet sheet.json --available-only

Preferences (default format, available-only, log level) are read from
~/.yahtzee_scoring.json; flags override them, and --save-settings keeps
the flags given as the new defaults.
"""
import argparse
import json
import logging
import sys

from game_engine import ScoringError
from score_options import InvalidScoreSheet, get_options_snapshot, sheet_from_dict
from settings import OUTPUT_FORMATS, load_settings, save_settings

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments.

    Args:
        argv: Optional list of args (for testing). None uses sys.argv.

    Returns:
        Parsed argparse.Namespace.
    """
    parser = argparse.ArgumentParser(description="Score a Yahtzee hand in every category")
    parser.add_argument("dice", nargs="+", type=int, metavar="DIE",
                        help="The five die values, 1-6")
    parser.add_argument("--sheet", metavar="FILE",
                        help="JSON score sheet: {category key: score or null}")
    parser.add_argument("--filled", action="append", default=[], metavar="KEY=SCORE",
                        help="Record a played category (repeatable), e.g. full-house=25")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default=None,
                        help="Output format (default: from settings, else text)")
    parser.add_argument("--available-only", action=argparse.BooleanOptionalAction, default=None,
                        help="Only list categories still open on the sheet (default: from settings)")
    parser.add_argument("--settings", metavar="FILE", default=None,
                        help="Settings file (default: ~/.yahtzee_scoring.json)")
    parser.add_argument("--save-settings", action="store_true",
                        help="Keep this run's --format and --available-only as the new defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _parse_filled(entries):
    """Turn ["key=score", ...] into a {key: score} dict."""
    filled = {}
    for entry in entries:
        key, sep, raw_score = entry.partition("=")
        if not sep:
            raise InvalidScoreSheet(f"Expected KEY=SCORE, got {entry!r}")
        try:
            filled[key.strip()] = int(raw_score)
        except ValueError:
            raise InvalidScoreSheet(f"Score must be an integer in {entry!r}") from None
    return filled


def _load_sheet(args):
    """Build the ScoreSheet from --sheet and --filled."""
    data = {}
    if args.sheet:
        with open(args.sheet) as f:
            loaded = sheet_from_dict(json.load(f))
        data = {cat.key: score for cat, score in loaded.scores.items() if score is not None}
        logger.debug("Loaded %d played categories from %s", len(data), args.sheet)
    # --filled entries win over the file
    data.update(_parse_filled(args.filled))
    return sheet_from_dict(data)


def format_text(snapshot):
    """Render a snapshot as plain text lines, one per category."""
    lines = []
    for option in snapshot["options"]:
        marker = " " if option["is_available"] else "x"
        lines.append(f"{marker} {option['name']:<16}{option['score']:>4}")
    sheet = snapshot["sheet"]
    lines.append(f"  {'Upper bonus':<16}{sheet['upper_bonus']:>4}")
    lines.append(f"  {'Sheet total':<16}{sheet['total_score']:>4}")
    return "\n".join(lines)


def main(argv=None):
    """Entry point. Returns the process exit status."""
    args = parse_args(argv)
    settings = load_settings(args.settings)

    level = "DEBUG" if args.verbose else settings["log_level"]
    logging.basicConfig(level=getattr(logging, level),
                        format="%(levelname)s %(name)s: %(message)s")

    output_format = args.format or settings["format"]
    available_only = settings["available_only"] if args.available_only is None else args.available_only

    if args.save_settings:
        save_settings(dict(settings, format=output_format, available_only=available_only), args.settings)
        logger.debug("Saved settings: format=%s available_only=%s", output_format, available_only)

    try:
        sheet = _load_sheet(args)
        snapshot = get_options_snapshot(args.dice, sheet, available_only=available_only)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read score sheet %s", args.sheet, exc_info=True)
        print(f"error: could not read score sheet: {e}", file=sys.stderr)
        return 2
    except ScoringError as e:
        logger.debug("Scoring failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    if output_format == "json":
        print(json.dumps(snapshot, indent=2))
    else:
        print(format_text(snapshot))
    return 0


if __name__ == "__main__":
    sys.exit(main())
