"""
Concrete teachers for L*.

A teacher orchestrates a membership oracle (the target language) and an
equivalence oracle (a counterexample search strategy) behind the two-query
interface the learner consumes.
"""

import numpy as np
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Set, Tuple
import time

from core.automaton import Automaton
from .base_teacher import Teacher
from .language_oracle import LanguageOracle, RegexOracle
from .oracle_config import OracleConfig, create_equivalence_oracle


Word = Tuple[Hashable, ...]


class OracleTeacher(Teacher):
    """
    Teacher backed by a membership oracle and an equivalence oracle.

    The equivalence oracle is built from ``oracle_config`` unless an
    instance is passed directly.
    """

    def __init__(self, membership_oracle: LanguageOracle,
                 oracle_config: Optional[OracleConfig] = None,
                 equivalence_oracle=None):
        """
        Initialize teacher.

        Args:
            membership_oracle: Oracle for the target language
            oracle_config: Equivalence oracle configuration (default BFS)
            equivalence_oracle: Ready-made equivalence oracle, overrides config
        """
        self.membership_oracle = membership_oracle
        self.alphabet = membership_oracle.alphabet
        self.oracle_config = oracle_config or OracleConfig()

        if equivalence_oracle is None:
            equivalence_oracle = create_equivalence_oracle(
                self.oracle_config, membership_oracle, self.alphabet)
        self.equivalence_oracle = equivalence_oracle

        # Statistics
        self.hypotheses_proposed = 0
        self.counterexamples: List[Tuple[Word, float]] = []

    def membership_query(self, word: Sequence[Hashable]) -> bool:
        return self.membership_oracle.classify_word(word)

    def membership_queries(self, words: List[Sequence[Hashable]]) -> List[bool]:
        return self.membership_oracle.membership_queries(words)

    def validate_hypothesis(self, hypothesis: Automaton) -> Optional[Set[Word]]:
        """
        Equivalence query delegated to the configured oracle.

        Returns:
            None if no counterexample was found, else a singleton set
        """
        self.hypotheses_proposed += 1

        start_time = time.time()
        counterexample = self.equivalence_oracle.find_counterexample(
            hypothesis, self.hypotheses_proposed,
            time_limit=self.oracle_config.time_limit
        )

        if counterexample is None:
            return None

        self.counterexamples.append((counterexample, time.time() - start_time))
        return {counterexample}

    def get_statistics(self) -> Dict:
        """Get teacher statistics."""
        stats = {
            'hypotheses_proposed': self.hypotheses_proposed,
            'counterexamples': len(self.counterexamples),
            'oracle_type': self.oracle_config.oracle_type.value,
            'membership': self.membership_oracle.get_statistics(),
            'equivalence': self.equivalence_oracle.get_statistics(),
        }

        if self.counterexamples:
            ce_lengths = [len(ce) for ce, _ in self.counterexamples]
            ce_times = [t for _, t in self.counterexamples]
            stats['avg_ce_length'] = float(np.mean(ce_lengths))
            stats['avg_ce_time'] = float(np.mean(ce_times))
            stats['min_ce_length'] = min(ce_lengths)
            stats['max_ce_length'] = max(ce_lengths)

        return stats


class RegexTeacher(OracleTeacher):
    """Teacher for the language of a regular expression."""

    def __init__(self, pattern: str, alphabet: Iterable[Hashable],
                 oracle_config: Optional[OracleConfig] = None,
                 separator: str = ""):
        """
        Args:
            pattern: Target regular expression
            alphabet: Input alphabet
            oracle_config: Equivalence oracle configuration

        Raises:
            ValueError: If the pattern is invalid
        """
        super().__init__(RegexOracle(pattern, alphabet, separator=separator),
                         oracle_config)
        self.pattern = pattern


class PredicateTeacher(OracleTeacher):
    """Teacher for a language given as a predicate over words."""

    def __init__(self, predicate: Callable[[Word], bool], alphabet: Iterable[Hashable],
                 oracle_config: Optional[OracleConfig] = None):
        super().__init__(LanguageOracle(predicate, alphabet), oracle_config)
