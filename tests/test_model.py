from __future__ import annotations

import pytest

from clueboard.model import (
    DOLLAR_AMOUNTS,
    FALLBACK_TITLE,
    Board,
    Category,
    Clue,
    Coordinate,
    RevealState,
)

from .conftest import make_pairs


class TestCategory:
    def test_values_assigned_by_position(self):
        category = Category.from_pairs("Authors", make_pairs(1))

        assert [clue.value for clue in category] == [100, 200, 300, 400, 500]
        assert [clue.question for clue in category] == [f"Q1.{n}" for n in range(5)]

    def test_clues_start_hidden(self):
        category = Category.from_pairs("Authors", make_pairs(1))
        assert all(clue.state == RevealState.HIDDEN for clue in category)

    @pytest.mark.parametrize("count", [1, 4, 6])
    def test_wrong_number_of_clues_rejected(self, count):
        clues = [Clue(f"q{n}", f"a{n}", 100) for n in range(count)]
        with pytest.raises(ValueError):
            Category("Broken", clues)

    def test_from_pairs_needs_exactly_five(self):
        with pytest.raises(ValueError):
            Category.from_pairs("Short", make_pairs(1, 3))

    def test_fallback(self):
        category = Category.fallback()

        assert category.is_fallback
        assert category.title == FALLBACK_TITLE
        assert len(category) == 0

    def test_real_category_is_not_fallback(self):
        assert not Category.from_pairs("Authors", make_pairs(1)).is_fallback


class TestBoard:
    def _board(self) -> Board:
        return Board(
            [Category.from_pairs(f"C{i}", make_pairs(i)) for i in range(3)] + [Category.fallback()],
        )

    def test_clue_lookup(self):
        board = self._board()
        clue = board.clue(Coordinate(2, 3))

        assert clue is not None
        assert clue.question == "Q2.3"
        assert clue.value == DOLLAR_AMOUNTS[3]

    @pytest.mark.parametrize(
        "coordinate",
        [Coordinate(4, 0), Coordinate(-1, 0), Coordinate(0, 5), Coordinate(0, -1), Coordinate(3, 0)],
    )
    def test_missing_clue(self, coordinate):
        assert self._board().clue(coordinate) is None

    def test_snapshot_hides_unrevealed_text(self):
        board = self._board()
        snapshot = board.json()

        first = snapshot["categories"][0]
        assert first["title"] == "C0"
        assert first["fallback"] is False
        assert first["clues"][0] == {"value": 100, "state": "hidden", "text": None}
        assert snapshot["categories"][3] == {"title": FALLBACK_TITLE, "fallback": True, "clues": []}
        assert "A0.0" not in repr(snapshot)

    def test_snapshot_shows_revealed_text(self):
        board = self._board()
        clue = board.clue(Coordinate(1, 1))
        assert clue is not None

        clue.state = RevealState.QUESTION
        assert board.json()["categories"][1]["clues"][1]["text"] == "Q1.1"

        clue.state = RevealState.ANSWER
        assert board.json()["categories"][1]["clues"][1]["text"] == "A1.1"

    def test_len_and_order(self):
        board = self._board()
        assert len(board) == 4
        assert [c.title for c in board] == ["C0", "C1", "C2", FALLBACK_TITLE]
