"""
Yahtzee Scoring Engine - Pure scoring logic without any game-flow dependencies

This module computes what a hand of five dice would score in each of the 13
categories and which categories are still open on a score sheet. It holds no
state: every function takes the hand and sheet it needs and returns a fresh
result, so it can be called from any number of game sessions at once.
"""
from dataclasses import dataclass
from enum import Enum
from collections import Counter
from functools import partial
from typing import Tuple
import logging

logger = logging.getLogger(__name__)

HAND_SIZE = 5
MIN_DIE = 1
MAX_DIE = 6

UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS = 35

FULL_HOUSE_SCORE = 25
SMALL_STRAIGHT_SCORE = 30
LARGE_STRAIGHT_SCORE = 40
YAHTZEE_SCORE = 50

UPPER = "upper"
LOWER = "lower"


class ScoringError(ValueError):
    """Base class for scoring engine errors"""


class InvalidHand(ScoringError):
    """Hand is not exactly five integer dice in the range 1-6"""


class UnknownCategory(ScoringError, KeyError):
    """Category identifier is not one of the 13 scoring categories"""

    def __str__(self):
        # KeyError would repr() the message
        return ValueError.__str__(self)


# ── Pattern checks ────────────────────────────────────────────────────────────

def count_values(values):
    """
    Count occurrences of each die value

    Args:
        values: Validated tuple of die values

    Returns:
        Counter object with die values as keys
    """
    return Counter(values)


def has_n_of_kind(values, n):
    """True if at least n dice share the same value"""
    return max(count_values(values).values()) >= n


def has_full_house(values):
    """
    Check if dice form a full house (3 of one value, 2 of another)

    Five of a kind has counts [5] and does not qualify.
    """
    return sorted(count_values(values).values()) == [2, 3]


def has_small_straight(values):
    """True if the dice contain 4 consecutive values"""
    distinct = set(values)
    # Possible small straights: 1-2-3-4, 2-3-4-5, 3-4-5-6
    small_straights = [{1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6}]
    return any(straight.issubset(distinct) for straight in small_straights)


def has_large_straight(values):
    """True if the dice are 1-2-3-4-5 or 2-3-4-5-6"""
    distinct = set(values)
    large_straights = [{1, 2, 3, 4, 5}, {2, 3, 4, 5, 6}]
    return any(straight == distinct for straight in large_straights)


def has_yahtzee(values):
    """True if all dice match"""
    return has_n_of_kind(values, HAND_SIZE)


# ── Category rules ────────────────────────────────────────────────────────────

def _upper_score(face, values):
    return count_values(values)[face] * face


def _three_of_kind_score(values):
    return sum(values) if has_n_of_kind(values, 3) else 0


def _four_of_kind_score(values):
    return sum(values) if has_n_of_kind(values, 4) else 0


def _full_house_score(values):
    return FULL_HOUSE_SCORE if has_full_house(values) else 0


def _small_straight_score(values):
    return SMALL_STRAIGHT_SCORE if has_small_straight(values) else 0


def _large_straight_score(values):
    return LARGE_STRAIGHT_SCORE if has_large_straight(values) else 0


def _yahtzee_score(values):
    return YAHTZEE_SCORE if has_yahtzee(values) else 0


def _chance_score(values):
    return sum(values)


class Category(Enum):
    """Yahtzee score categories, in canonical score sheet order.

    Each member carries its key, display name, description, section and
    scoring rule.
    """
    ONES = ("ones", "Ones", "Sum of all dice showing 1", UPPER, partial(_upper_score, 1))
    TWOS = ("twos", "Twos", "Sum of all dice showing 2", UPPER, partial(_upper_score, 2))
    THREES = ("threes", "Threes", "Sum of all dice showing 3", UPPER, partial(_upper_score, 3))
    FOURS = ("fours", "Fours", "Sum of all dice showing 4", UPPER, partial(_upper_score, 4))
    FIVES = ("fives", "Fives", "Sum of all dice showing 5", UPPER, partial(_upper_score, 5))
    SIXES = ("sixes", "Sixes", "Sum of all dice showing 6", UPPER, partial(_upper_score, 6))
    THREE_OF_KIND = ("three-of-a-kind", "Three of a Kind",
                     "3 of the same, score = sum of all dice", LOWER, _three_of_kind_score)
    FOUR_OF_KIND = ("four-of-a-kind", "Four of a Kind",
                    "4 of the same, score = sum of all dice", LOWER, _four_of_kind_score)
    FULL_HOUSE = ("full-house", "Full House",
                  "3 of one + 2 of another = 25", LOWER, _full_house_score)
    SMALL_STRAIGHT = ("small-straight", "Small Straight",
                      "4 consecutive dice = 30", LOWER, _small_straight_score)
    LARGE_STRAIGHT = ("large-straight", "Large Straight",
                      "5 consecutive dice = 40", LOWER, _large_straight_score)
    YAHTZEE = ("yahtzee", "YAHTZEE!", "All 5 dice the same = 50", LOWER, _yahtzee_score)
    CHANCE = ("chance", "Chance", "Sum of all dice, no pattern needed", LOWER, _chance_score)

    def __init__(self, key, display_name, description, section, rule):
        self.key = key
        self.display_name = display_name
        self.description = description
        self.section = section
        self.rule = rule

    @property
    def is_upper(self):
        return self.section == UPPER

    def score(self, values):
        """Apply this category's rule to an already validated tuple of values."""
        return self.rule(values)


CATEGORY_ORDER = tuple(Category)
UPPER_CATEGORIES = tuple(cat for cat in Category if cat.is_upper)
LOWER_CATEGORIES = tuple(cat for cat in Category if not cat.is_upper)

_CATEGORY_BY_KEY = {cat.key: cat for cat in Category}


def category_by_key(key):
    """
    Resolve a category identifier.

    Args:
        key: Category member or its key string (e.g. "full-house")

    Returns:
        The Category member

    Raises:
        UnknownCategory: if key is not one of the 13 categories
    """
    if isinstance(key, Category):
        return key
    try:
        return _CATEGORY_BY_KEY[key]
    except (KeyError, TypeError):
        raise UnknownCategory(f"Unknown category: {key!r}") from None


def category_by_name(name):
    """Look up a Category by its display name. Raises UnknownCategory."""
    for cat in Category:
        if cat.display_name == name:
            return cat
    raise UnknownCategory(f"Unknown category name: {name!r}")


# ── Hand validation ───────────────────────────────────────────────────────────

def _die_value(die):
    # Accept plain ints or die records with a .value attribute
    return getattr(die, "value", die)


def validate_hand(hand) -> Tuple[int, ...]:
    """
    Check a hand and return its die values as a tuple.

    Args:
        hand: Sequence of 5 ints, or of objects with an int .value

    Returns:
        Tuple of 5 ints in [1, 6], in the order given

    Raises:
        InvalidHand: if the hand is not exactly 5 dice in [1, 6]
    """
    try:
        values = tuple(_die_value(die) for die in hand)
    except TypeError:
        raise InvalidHand(f"Hand must be a sequence of dice, got {hand!r}") from None

    if len(values) != HAND_SIZE:
        raise InvalidHand(f"Hand must have exactly {HAND_SIZE} dice, got {len(values)}: {values!r}")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidHand(f"Die values must be integers, got {value!r} in {values!r}")
        if not MIN_DIE <= value <= MAX_DIE:
            raise InvalidHand(f"Die value {value} out of range {MIN_DIE}-{MAX_DIE} in {values!r}")
    return values


# ── Score sheet ───────────────────────────────────────────────────────────────

class ScoreSheet:
    """Read-side view of a player's score sheet.

    The game-session controller owns the sheet and records scores through
    with_score(); the scoring functions below only read it.
    """

    def __init__(self, scores=None):
        """Initialize a sheet; scores maps Category (or key) to int or None"""
        self.scores = {category: None for category in Category}
        if scores:
            for key, score in scores.items():
                self.scores[category_by_key(key)] = score

    def is_filled(self, category):
        """Check if a category has been filled"""
        return self.scores[category_by_key(category)] is not None

    def get_upper_section_total(self):
        """Calculate total for upper section (Ones through Sixes)"""
        return sum(self.scores[cat] for cat in UPPER_CATEGORIES
                   if self.scores[cat] is not None)

    def get_upper_section_bonus(self):
        """Calculate bonus (35 points if upper section >= 63)"""
        return UPPER_BONUS if self.get_upper_section_total() >= UPPER_BONUS_THRESHOLD else 0

    def get_lower_section_total(self):
        """Calculate total for lower section"""
        return sum(self.scores[cat] for cat in LOWER_CATEGORIES
                   if self.scores[cat] is not None)

    def get_total_score(self):
        """Upper total + upper bonus + lower total"""
        return (self.get_upper_section_total() +
                self.get_upper_section_bonus() +
                self.get_lower_section_total())

    def is_complete(self):
        """Check if all categories are filled"""
        return all(score is not None for score in self.scores.values())

    def copy(self):
        new_sheet = ScoreSheet()
        new_sheet.scores = self.scores.copy()
        return new_sheet

    def with_score(self, category, score):
        """Return new ScoreSheet with score set for category (filled ones are kept)"""
        category = category_by_key(category)
        new_sheet = self.copy()
        if not new_sheet.is_filled(category):
            new_sheet.scores[category] = score
        return new_sheet

    def __eq__(self, other):
        if not isinstance(other, ScoreSheet):
            return NotImplemented
        return self.scores == other.scores

    def __repr__(self):
        filled = {cat.key: score for cat, score in self.scores.items() if score is not None}
        return f"ScoreSheet({filled!r})"


def _recorded_score(sheet, category):
    """Recorded score for category, from a ScoreSheet or a plain mapping."""
    scores = sheet.scores if isinstance(sheet, ScoreSheet) else sheet
    if category in scores:
        return scores[category]
    return scores.get(category.key)


# ── Engine operations ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CategoryScoreOption:
    """What a hand would score in one category, and whether it can be taken"""
    category: Category
    name: str
    score: int
    is_available: bool


def score_for_category(hand, category):
    """
    Calculate the score for a given hand and category

    Args:
        hand: Sequence of 5 dice (ints or objects with .value)
        category: Category member or key string

    Returns:
        Integer score for the category (0 if the hand doesn't qualify)

    Raises:
        InvalidHand: if the hand is malformed
        UnknownCategory: if category is not recognised
    """
    values = validate_hand(hand)
    return category_by_key(category).score(values)


def category_availability(sheet, category):
    """
    Check whether a category is still open on a score sheet.

    Args:
        sheet: ScoreSheet, or mapping of Category / key to score or None
        category: Category member or key string

    Returns:
        True if no score has been recorded for the category
    """
    return _recorded_score(sheet, category_by_key(category)) is None


def all_category_options(hand, sheet):
    """
    Score a hand in every category, in canonical order.

    Filled categories still report their computed score but are marked
    unavailable. Nothing is cached; identical inputs give identical output.

    Raises:
        InvalidHand: if the hand is malformed
    """
    values = validate_hand(hand)
    options = [
        CategoryScoreOption(
            category=cat,
            name=cat.display_name,
            score=cat.score(values),
            is_available=category_availability(sheet, cat),
        )
        for cat in CATEGORY_ORDER
    ]
    logger.debug("Scored hand %s: %d of %d categories open", values,
                 sum(option.is_available for option in options), len(options))
    return options
