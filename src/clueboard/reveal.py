# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Callable
from typing import NamedTuple

from .model import Clue, RevealState


class Transition(NamedTuple):
    state: RevealState
    emission: str | None


_TRANSITIONS: dict[RevealState, tuple[RevealState, Callable[[Clue], str] | None]] = {
    RevealState.HIDDEN: (RevealState.QUESTION, lambda clue: clue.question),
    RevealState.QUESTION: (RevealState.ANSWER, lambda clue: clue.answer),
    RevealState.ANSWER: (RevealState.ANSWER, None),
}


def transition(state: RevealState, clue: Clue) -> Transition:
    """
    Work out what an interaction does to a clue in the given state,
    without modifying the clue.

    The answer state absorbs all further interactions and emits nothing.
    """
    new_state, emit = _TRANSITIONS[state]
    return Transition(new_state, emit(clue) if emit else None)


def reveal(clue: Clue) -> str | None:
    result = transition(clue.state, clue)
    clue.state = result.state
    return result.emission
