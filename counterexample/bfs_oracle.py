"""
BFS (Breadth-First Search) Equivalence Oracle

Systematically explores words in breadth-first order to find counterexamples.
This provides a simple baseline that guarantees finding the shortest counterexample.
"""

import time
from collections import deque
from typing import Any, Dict, Hashable, List, Optional

from .base_oracle import EquivalenceOracle, Word
from core.automaton import Automaton


class BFSOracle(EquivalenceOracle):
    """
    BFS equivalence oracle for systematic exploration.

    Explores words in order of increasing length, guaranteeing that
    the shortest counterexample will be found first.
    """

    def __init__(self, membership_oracle, alphabet: List[Hashable],
                 max_depth: int = 20,
                 breadth_limit: int = 10000,
                 **kwargs):
        """
        Initialize BFS oracle.

        Args:
            membership_oracle: Oracle for membership queries
            alphabet: Input alphabet
            max_depth: Maximum word length to explore
            breadth_limit: Maximum words to check at each depth
        """
        super().__init__(membership_oracle, alphabet, **kwargs)
        self.max_depth = max_depth
        self.breadth_limit = breadth_limit

        # BFS-specific statistics
        self.total_words_checked = 0
        self.max_depth_reached = 0

    def find_counterexample(self, hypothesis: Automaton, iteration: int,
                            time_limit: Optional[float] = None) -> Optional[Word]:
        """
        Find counterexample using breadth-first search.

        Args:
            hypothesis: Current hypothesis automaton
            iteration: L* iteration number
            time_limit: Optional time limit

        Returns:
            Counterexample word or None
        """
        self._log(f"\nBFS Equivalence Query (iteration {iteration})")
        self._log(f"  Max depth: {self.max_depth}, breadth limit: {self.breadth_limit}")

        start_time = time.time()
        self.total_queries += 1

        words_checked = 1
        if self._is_counterexample((), hypothesis):
            return self._found((), words_checked, 0, start_time)

        current_depth = 0
        queue = deque([()])

        while queue and current_depth < self.max_depth:
            if time_limit and (time.time() - start_time) > time_limit:
                self._log(f"  Time limit reached at depth {current_depth}")
                break

            level_size = len(queue)
            depth_words_checked = 0

            for expanded in range(level_size):
                if depth_words_checked >= self.breadth_limit:
                    self._log(f"  Breadth limit reached at depth {current_depth + 1}")
                    # Unexpanded words of this level must not leak into the next one
                    for _ in range(level_size - expanded):
                        queue.popleft()
                    break

                current = queue.popleft()
                for symbol in self.alphabet:
                    child = current + (symbol,)
                    queue.append(child)
                    words_checked += 1
                    depth_words_checked += 1

                    if self._is_counterexample(child, hypothesis):
                        return self._found(child, words_checked, current_depth + 1, start_time)

            current_depth += 1

        self.total_words_checked += words_checked
        self.total_time += time.time() - start_time
        self.max_depth_reached = max(self.max_depth_reached, current_depth)

        self._log(f"  No counterexample found after checking {words_checked} words "
                  f"(depth {current_depth})")
        return None

    def _found(self, word: Word, words_checked: int, depth: int, start_time: float) -> Word:
        self.counterexamples_found += 1
        self.total_time += time.time() - start_time
        self.total_words_checked += words_checked
        self.max_depth_reached = max(self.max_depth_reached, depth)

        self._log(f"  Counterexample found: {word!r} (length {len(word)})")
        self._log(f"  Words checked: {words_checked}")
        return word

    def get_statistics(self) -> Dict[str, Any]:
        """Return oracle statistics."""
        stats = super().get_statistics()

        stats.update({
            'total_words_checked': self.total_words_checked,
            'max_depth': self.max_depth,
            'max_depth_reached': self.max_depth_reached,
            'breadth_limit': self.breadth_limit,
            'avg_words_per_query': (
                self.total_words_checked / max(1, self.total_queries)
            )
        })

        return stats
