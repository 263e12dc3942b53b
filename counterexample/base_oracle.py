"""
Abstract base class for equivalence oracles in L* learning.

An equivalence oracle searches for a word on which a hypothesis automaton
and the target language disagree. Different strategies trade completeness
for cost:
- BFS (exhaustive up to a depth)
- W-method (complete under a bound on target states)
- PAC (statistical sampling)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from core.automaton import Automaton


Word = Tuple[Hashable, ...]


class EquivalenceOracle(ABC):
    """
    Abstract base class for equivalence oracles.

    All equivalence oracles must implement the find_counterexample method
    and can optionally provide statistics about their performance.
    """

    def __init__(self, membership_oracle, alphabet: List[Hashable],
                 verbose: bool = True, **kwargs):
        """
        Initialize the equivalence oracle.

        Args:
            membership_oracle: Oracle answering ``classify_word``
            alphabet: Input alphabet
            verbose: Print progress
            **kwargs: Additional oracle-specific parameters
        """
        self.membership_oracle = membership_oracle
        self.alphabet = list(alphabet)
        self.verbose = verbose

        # Statistics tracking
        self.total_queries = 0
        self.counterexamples_found = 0
        self.total_time = 0.0

    @abstractmethod
    def find_counterexample(self,
                            hypothesis: Automaton,
                            iteration: int,
                            time_limit: Optional[float] = None) -> Optional[Word]:
        """
        Find a counterexample where the hypothesis and the target disagree.

        Args:
            hypothesis: Current hypothesis automaton from L*
            iteration: Current L* iteration number
            time_limit: Optional time limit in seconds

        Returns:
            Counterexample word or None if no disagreement was found
        """
        pass

    def _is_counterexample(self, word: Sequence[Hashable], hypothesis: Automaton) -> bool:
        return hypothesis.accepts(word) != self.membership_oracle.classify_word(word)

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get performance statistics for the oracle.

        Returns:
            Dictionary of statistics
        """
        return {
            'type': self.__class__.__name__,
            'total_queries': self.total_queries,
            'counterexamples_found': self.counterexamples_found,
            'total_time': self.total_time,
            'avg_time_per_query': self.total_time / max(1, self.total_queries)
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(alphabet_size={len(self.alphabet)})"
