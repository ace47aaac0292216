"""Tests for score_options.py: engine results as plain data."""

import json

import pytest

from game_engine import Category, InvalidHand, ScoreSheet, UnknownCategory, all_category_options
from score_options import (
    InvalidScoreSheet,
    get_options_snapshot,
    option_to_dict,
    sheet_from_dict,
    sheet_to_dict,
)


# ── option_to_dict ───────────────────────────────────────────────────────────

class TestOptionToDict:
    def test_fields(self):
        option = all_category_options([2, 2, 3, 3, 3], ScoreSheet())[8]
        assert option_to_dict(option) == {
            "category": "full-house",
            "name": "Full House",
            "description": "3 of one + 2 of another = 25",
            "score": 25,
            "is_available": True,
        }

    def test_unavailable_option(self):
        sheet = ScoreSheet().with_score(Category.CHANCE, 11)
        option = all_category_options([1, 2, 3, 4, 5], sheet)[12]
        assert option_to_dict(option)["is_available"] is False
        assert option_to_dict(option)["score"] == 15


# ── sheet_to_dict ────────────────────────────────────────────────────────────

class TestSheetToDict:
    def test_empty_sheet(self):
        data = sheet_to_dict(ScoreSheet())
        assert list(data["scores"]) == [cat.key for cat in Category]
        assert all(v is None for v in data["scores"].values())
        assert data["upper_total"] == 0
        assert data["upper_bonus"] == 0
        assert data["lower_total"] == 0
        assert data["total_score"] == 0
        assert data["complete"] is False

    def test_totals(self):
        sheet = ScoreSheet({
            "ones": 3, "twos": 6, "threes": 9, "fours": 12, "fives": 15, "sixes": 18,
            "yahtzee": 50,
        })
        data = sheet_to_dict(sheet)
        assert data["upper_total"] == 63
        assert data["upper_bonus"] == 35
        assert data["lower_total"] == 50
        assert data["total_score"] == 148

    def test_complete_sheet(self):
        sheet = ScoreSheet({cat: 0 for cat in Category})
        assert sheet_to_dict(sheet)["complete"] is True


# ── sheet_from_dict ──────────────────────────────────────────────────────────

class TestSheetFromDict:
    def test_flat_mapping(self):
        sheet = sheet_from_dict({"ones": 2, "chance": None})
        assert sheet.scores[Category.ONES] == 2
        assert sheet.scores[Category.CHANCE] is None

    def test_missing_keys_are_not_played(self):
        sheet = sheet_from_dict({})
        assert sheet == ScoreSheet()

    def test_accepts_sheet_to_dict_output(self):
        original = ScoreSheet({"fours": 12, "full-house": 25})
        assert sheet_from_dict(sheet_to_dict(original)) == original

    def test_survives_json(self):
        original = ScoreSheet({"small-straight": 30})
        data = json.loads(json.dumps(sheet_to_dict(original)))
        assert sheet_from_dict(data) == original

    def test_summary_keys_ignored_in_flat_mapping(self):
        sheet = sheet_from_dict({"sixes": 18, "upper_total": 18, "upper_bonus": 0})
        assert sheet.scores[Category.SIXES] == 18

    def test_unknown_key_rejected(self):
        with pytest.raises(UnknownCategory):
            sheet_from_dict({"threeOfAKind": 12})

    def test_misspelled_four_of_a_kind_rejected(self):
        with pytest.raises(UnknownCategory):
            sheet_from_dict({"fouroOkind": 20})

    @pytest.mark.parametrize("bad", [-1, 1.5, "12", True, [3]])
    def test_bad_score_rejected(self, bad):
        with pytest.raises(InvalidScoreSheet):
            sheet_from_dict({"ones": bad})

    def test_non_dict_rejected(self):
        with pytest.raises(InvalidScoreSheet):
            sheet_from_dict([1, 2, 3])

    def test_zero_is_a_recorded_score(self):
        sheet = sheet_from_dict({"yahtzee": 0})
        assert sheet.is_filled(Category.YAHTZEE)

    def test_controller_initial_sheet(self):
        """The controller's fresh sheet, totals and camelCase keys included."""
        data = {
            "ones": None, "twos": None, "threes": None, "fours": None, "fives": None, "sixes": None,
            "upperBonus": 0, "upperTotal": 0,
            "threeOfkind": None, "fourOfkind": None, "fullHouse": None,
            "smallStraight": None, "largeStraight": None, "yahtzee": None, "chance": None,
            "lowerTotal": 0,
        }
        assert sheet_from_dict(data) == ScoreSheet()

    def test_controller_sheet_mid_game(self):
        data = {
            "threes": 9, "threeOfkind": 17, "fourOfkind": 0, "fullHouse": 25,
            "smallStraight": 30, "largeStraight": None,
            "upperBonus": 0, "upperTotal": 9, "lowerTotal": 72, "totalScore": 81,
            "gameComplete": False,
        }
        sheet = sheet_from_dict(data)
        assert sheet.scores[Category.THREE_OF_KIND] == 17
        assert sheet.scores[Category.FOUR_OF_KIND] == 0
        assert sheet.scores[Category.FULL_HOUSE] == 25
        assert sheet.scores[Category.SMALL_STRAIGHT] == 30
        assert sheet.scores[Category.LARGE_STRAIGHT] is None
        assert sheet.get_total_score() == 81

    def test_backend_lowercase_keys(self):
        sheet = sheet_from_dict({"threeofkind": 12, "fourofkind": 20, "fullhouse": 25})
        assert sheet.scores[Category.THREE_OF_KIND] == 12
        assert sheet.scores[Category.FOUR_OF_KIND] == 20
        assert sheet.scores[Category.FULL_HOUSE] == 25


# ── get_options_snapshot ─────────────────────────────────────────────────────

class TestOptionsSnapshot:
    def test_snapshot_is_json_serializable(self):
        snapshot = get_options_snapshot([6, 6, 6, 6, 2], ScoreSheet())
        parsed = json.loads(json.dumps(snapshot))
        assert parsed["dice"] == [6, 6, 6, 6, 2]
        assert len(parsed["options"]) == 13
        assert parsed["sheet"]["total_score"] == 0

    def test_options_in_canonical_order(self):
        snapshot = get_options_snapshot([1, 2, 3, 4, 5], ScoreSheet())
        assert [o["category"] for o in snapshot["options"]] == [cat.key for cat in Category]

    def test_scores(self):
        snapshot = get_options_snapshot([6, 6, 6, 6, 2], ScoreSheet())
        by_key = {o["category"]: o["score"] for o in snapshot["options"]}
        assert by_key["four-of-a-kind"] == 26
        assert by_key["three-of-a-kind"] == 26
        assert by_key["sixes"] == 24
        assert by_key["yahtzee"] == 0

    def test_available_only_drops_filled(self):
        sheet = ScoreSheet({"chance": 20, "sixes": 24})
        snapshot = get_options_snapshot([6, 6, 6, 6, 2], sheet, available_only=True)
        keys = [o["category"] for o in snapshot["options"]]
        assert len(keys) == 11
        assert "chance" not in keys
        assert "sixes" not in keys

    def test_filled_categories_still_listed_by_default(self):
        sheet = ScoreSheet({"chance": 20})
        snapshot = get_options_snapshot([6, 6, 6, 6, 2], sheet)
        chance = snapshot["options"][12]
        assert chance == {
            "category": "chance",
            "name": "Chance",
            "description": "Sum of all dice, no pattern needed",
            "score": 26,
            "is_available": False,
        }

    def test_die_records_become_ints(self):
        class Die:
            def __init__(self, value):
                self.value = value

        snapshot = get_options_snapshot([Die(v) for v in (1, 1, 1, 1, 1)], ScoreSheet())
        assert snapshot["dice"] == [1, 1, 1, 1, 1]

    def test_plain_dict_sheet(self):
        snapshot = get_options_snapshot([1, 2, 3, 4, 5], {"chance": 20, Category.ONES: None})
        chance = snapshot["options"][12]
        assert chance["is_available"] is False
        assert chance["score"] == 15
        assert snapshot["options"][0]["is_available"] is True
        assert snapshot["sheet"]["total_score"] == 20

    def test_plain_dict_sheet_matches_score_sheet(self):
        data = {"fours": 12, "full-house": 25}
        assert get_options_snapshot([4, 4, 4, 1, 1], data) == \
            get_options_snapshot([4, 4, 4, 1, 1], ScoreSheet(data))

    def test_invalid_hand(self):
        with pytest.raises(InvalidHand):
            get_options_snapshot([1, 2, 3, 4], ScoreSheet())
