"""Shared teachers and fixtures for the L* tests."""

from typing import Callable, Hashable, List, Sequence, Tuple

import pytest

from core.automaton import Automaton, DfaState
from core.config import LearnerConfig
from grammars.tomita import generate_words
from teacher.base_teacher import Teacher


class ExhaustiveTeacher(Teacher):
    """
    Answers membership from a predicate and equivalence by checking every
    word up to ``max_length``, returning the shortest disagreement.
    """

    def __init__(self, predicate: Callable, alphabet: Sequence[Hashable], max_length: int = 8):
        self.predicate = predicate
        self.alphabet = list(alphabet)
        self.max_length = max_length
        self.membership_calls: List[Tuple[Hashable, ...]] = []
        self.hypotheses = []

    def membership_query(self, word):
        word = tuple(word)
        self.membership_calls.append(word)
        return self.predicate(word)

    def validate_hypothesis(self, hypothesis):
        self.hypotheses.append(hypothesis)
        for word in generate_words(self.alphabet, self.max_length):
            if hypothesis.accepts(word) != self.predicate(word):
                return {word}
        return None


class ScriptedTeacher(Teacher):
    """
    Answers membership from a predicate and equivalence from a fixed script
    of responses. ``on_validate`` is called before each response.
    """

    def __init__(self, predicate: Callable, alphabet: Sequence[Hashable], responses,
                 on_validate: Callable = None):
        self.predicate = predicate
        self.alphabet = list(alphabet)
        self.responses = list(responses)
        self.on_validate = on_validate
        self.hypotheses = []

    def membership_query(self, word):
        return self.predicate(tuple(word))

    def validate_hypothesis(self, hypothesis):
        self.hypotheses.append(hypothesis)
        if self.on_validate is not None:
            self.on_validate(hypothesis)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def quiet_config():
    return LearnerConfig(verbose=False)


@pytest.fixture
def exhaustive_teacher():
    """Factory for ExhaustiveTeacher instances."""
    return ExhaustiveTeacher


@pytest.fixture
def scripted_teacher():
    """Factory for ScriptedTeacher instances."""
    return ScriptedTeacher


def constant_automaton(accepting, alphabet=("a", "b")):
    """One-state automaton accepting everything or nothing."""
    state = DfaState((), accepting)
    automaton = Automaton(state)
    for symbol in alphabet:
        automaton.add_transition(state, state, symbol)
    return automaton


def parity_automaton():
    """Even number of a's over {a, b}."""
    even = DfaState((), True)
    odd = DfaState(("a",), False)
    automaton = Automaton(even)
    automaton.add_transition(even, odd, "a")
    automaton.add_transition(even, even, "b")
    automaton.add_transition(odd, even, "a")
    automaton.add_transition(odd, odd, "b")
    return automaton


@pytest.fixture
def parity_dfa():
    return parity_automaton()


@pytest.fixture
def accept_all_dfa():
    return constant_automaton(True)


@pytest.fixture
def reject_all_dfa():
    return constant_automaton(False)
