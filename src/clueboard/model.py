# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Iterator, MutableMapping, MutableSequence, Sequence
from typing import NamedTuple, TypeAlias, Union

import dataclasses
import enum

JSON: TypeAlias = Union[None, int, str, bool, float, "JSONDict", "JSONList", list[str]]
JSONList: TypeAlias = MutableSequence[JSON]
JSONDict: TypeAlias = MutableMapping[str, JSON]

DOLLAR_AMOUNTS = (100, 200, 300, 400, 500)
CLUES_PER_CATEGORY = len(DOLLAR_AMOUNTS)
FALLBACK_TITLE = "Unknown"


class RevealState(enum.StrEnum):
    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"


class Coordinate(NamedTuple):
    category: int
    clue: int

    def json(self) -> JSONDict:
        return {"category": self.category, "clue": self.clue}


@dataclasses.dataclass
class Clue:
    question: str
    answer: str
    value: int
    state: RevealState = RevealState.HIDDEN

    @property
    def text(self) -> str | None:
        """
        The text currently visible on the board for this clue.
        """
        if self.state == RevealState.QUESTION:
            return self.question
        if self.state == RevealState.ANSWER:
            return self.answer
        return None

    def json(self) -> JSONDict:
        return {"value": self.value, "state": self.state, "text": self.text}


@dataclasses.dataclass
class Category:
    title: str
    clues: tuple[Clue, ...]

    def __init__(self, title: str, clues: Sequence[Clue] = ()) -> None:
        if len(clues) not in (0, CLUES_PER_CATEGORY):
            raise ValueError(  # noqa: TRY003
                f"Category '{title}' has {len(clues)} clues, expected {CLUES_PER_CATEGORY}",
            )

        self.title = title
        self.clues = tuple(clues)

    @classmethod
    def fallback(cls) -> Category:
        return cls(FALLBACK_TITLE)

    @classmethod
    def from_pairs(cls, title: str, pairs: Sequence[tuple[str, str]]) -> Category:
        """
        Build a category from (question, answer) pairs, assigning values by position.
        """
        return cls(
            title,
            [
                Clue(question, answer, value)
                for (question, answer), value in zip(pairs, DOLLAR_AMOUNTS, strict=True)
            ],
        )

    @property
    def is_fallback(self) -> bool:
        return not self.clues

    def __len__(self) -> int:
        return len(self.clues)

    def __iter__(self) -> Iterator[Clue]:
        return iter(self.clues)

    def json(self) -> JSONDict:
        return {
            "title": self.title,
            "fallback": self.is_fallback,
            "clues": [clue.json() for clue in self.clues],
        }


class Board:
    categories: tuple[Category, ...]

    __slots__ = ("categories",)

    def __init__(self, categories: Sequence[Category]) -> None:
        self.categories = tuple(categories)

    def __len__(self) -> int:
        return len(self.categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __getitem__(self, index: int) -> Category:
        return self.categories[index]

    def __repr__(self) -> str:
        return f"Board<{', '.join(c.title for c in self.categories)}>"

    def clue(self, coordinate: Coordinate) -> Clue | None:
        category, clue = coordinate

        if not 0 <= category < len(self.categories):
            return None

        clues = self.categories[category].clues
        if not 0 <= clue < len(clues):
            return None

        return clues[clue]

    def json(self) -> JSONDict:
        return {"categories": [category.json() for category in self.categories]}
