"""Score options adapter: engine results as plain JSON-serializable data.

A display/selection layer renders the dicts built here; a game-session
controller hands its score sheet over as a plain key -> score dict (None for
categories not yet played). No rendering and no transport happen here.
"""

from game_engine import (
    Category, ScoreSheet, ScoringError,
    all_category_options, category_by_key, validate_hand,
)

# Derived keys, not recorded scores: ours from sheet_to_dict(), then the
# camelCase ones a game-session controller sends with its sheet
_SUMMARY_KEYS = (
    "upper_total", "upper_bonus", "lower_total", "total_score", "complete",
    "upperTotal", "upperBonus", "lowerTotal", "totalScore", "gameComplete",
)

# Category keys used by the game-session controller and its backend
_CONTROLLER_KEYS = {
    "threeOfkind": Category.THREE_OF_KIND,
    "threeofkind": Category.THREE_OF_KIND,
    "fourOfkind": Category.FOUR_OF_KIND,
    "fourofkind": Category.FOUR_OF_KIND,
    "fullHouse": Category.FULL_HOUSE,
    "fullhouse": Category.FULL_HOUSE,
    "smallStraight": Category.SMALL_STRAIGHT,
    "largeStraight": Category.LARGE_STRAIGHT,
}


class InvalidScoreSheet(ScoringError):
    """Score sheet data has a value that is not a non-negative integer or None"""


def option_to_dict(option):
    """Convert a CategoryScoreOption into a dict keyed for the display layer."""
    return {
        "category": option.category.key,
        "name": option.name,
        "description": option.category.description,
        "score": option.score,
        "is_available": option.is_available,
    }


def sheet_to_dict(sheet):
    """Return the sheet's recorded scores plus its section totals."""
    return {
        "scores": {cat.key: sheet.scores[cat] for cat in Category},
        "upper_total": sheet.get_upper_section_total(),
        "upper_bonus": sheet.get_upper_section_bonus(),
        "lower_total": sheet.get_lower_section_total(),
        "total_score": sheet.get_total_score(),
        "complete": sheet.is_complete(),
    }


def sheet_from_dict(data):
    """Build a ScoreSheet from a dict of category key -> score or None.

    Accepts either a flat mapping or the {"scores": {...}} shape produced by
    sheet_to_dict(). Keys may be category keys or the camelCase keys of the
    game-session controller ("fullHouse", "threeOfkind", ...). Derived total
    keys are ignored; missing categories are treated as not played.

    Raises:
        InvalidScoreSheet: data is not a dict, or a score is not a
            non-negative integer or None
        UnknownCategory: a key is not a category key
    """
    if not isinstance(data, dict):
        raise InvalidScoreSheet(f"Score sheet must be an object, got {type(data).__name__}")
    if isinstance(data.get("scores"), dict):
        data = data["scores"]

    scores = {}
    for key, score in data.items():
        if key in _SUMMARY_KEYS:
            continue
        if key in _CONTROLLER_KEYS:
            category = _CONTROLLER_KEYS[key]
        else:
            category = category_by_key(key)
        if score is not None and (isinstance(score, bool) or not isinstance(score, int) or score < 0):
            raise InvalidScoreSheet(f"Score for {key!r} must be a non-negative integer or null, got {score!r}")
        scores[category] = score
    return ScoreSheet(scores)


def get_options_snapshot(hand, sheet, available_only=False):
    """Return a complete JSON-serializable dict of the hand's scoring choices.

    Args:
        hand: Sequence of 5 dice
        sheet: ScoreSheet, or mapping of Category / key to score or None
        available_only: drop options for categories already filled

    Raises:
        InvalidHand: if the hand is malformed
    """
    if not isinstance(sheet, ScoreSheet):
        sheet = ScoreSheet(sheet)
    dice = list(validate_hand(hand))
    options = [option_to_dict(option) for option in all_category_options(dice, sheet)]
    if available_only:
        options = [option for option in options if option["is_available"]]
    return {
        "dice": dice,
        "options": options,
        "sheet": sheet_to_dict(sheet),
    }
