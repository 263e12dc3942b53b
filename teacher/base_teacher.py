"""
Abstract teacher for L* learning.

The learner depends on exactly two queries:
- membership: is a word in the target language?
- equivalence: does a hypothesis accept exactly the target language?

Concrete teachers (regex backed, predicate backed, interactive) implement
this interface and are injected into the learner.
"""

from abc import ABC, abstractmethod
from typing import Collection, Hashable, List, Optional, Sequence

from core.automaton import Automaton


class Teacher(ABC):
    """
    Minimally adequate teacher for L*.

    Teachers that know their input alphabet expose it as ``alphabet`` so the
    learner can be constructed without passing one explicitly.
    """

    alphabet: Optional[Sequence[Hashable]] = None

    @abstractmethod
    def membership_query(self, word: Sequence[Hashable]) -> bool:
        """
        Answer whether ``word`` belongs to the target language.

        Must answer consistently for the same word for the whole run.
        """
        pass

    def membership_queries(self, words: List[Sequence[Hashable]]) -> List[bool]:
        """Batch membership queries."""
        return [self.membership_query(word) for word in words]

    @abstractmethod
    def validate_hypothesis(self, hypothesis: Automaton) -> Optional[Collection[Sequence[Hashable]]]:
        """
        Equivalence query.

        Args:
            hypothesis: Candidate automaton built by the learner

        Returns:
            None if the hypothesis accepts exactly the target language,
            otherwise a non-empty collection of counterexample words.
            Words are tuples or lists of symbols; a ``str`` word is split
            into characters and is only accepted when every symbol of the
            alphabet is a single character.
        """
        pass
