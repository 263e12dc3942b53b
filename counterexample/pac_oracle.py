"""
PAC (Probably Approximately Correct) Equivalence Oracle

Implements statistical sampling-based equivalence checking:
- Draws samples according to a distribution
- Provides probabilistic guarantees on finding counterexamples
- Black-box approach (only membership queries on the target)
"""

import time
import numpy as np
from typing import Any, Dict, Hashable, List, Optional

from .base_oracle import EquivalenceOracle, Word
from core.automaton import Automaton


class PACEquivalenceOracle(EquivalenceOracle):
    """
    PAC equivalence oracle using statistical sampling.

    Guarantees: With probability at least (1 - δ), if the hypothesis
    has error rate > ε, we will find a counterexample.
    """

    DISTRIBUTIONS = ("uniform", "geometric")

    def __init__(self, membership_oracle, alphabet: List[Hashable],
                 epsilon: float = 0.1,
                 delta: float = 0.1,
                 max_length: int = 30,
                 distribution: str = "geometric",
                 seed: Optional[int] = None,
                 **kwargs):
        """
        Initialize PAC oracle.

        Args:
            membership_oracle: Oracle for membership queries
            alphabet: List of alphabet symbols
            epsilon: Error tolerance (default 0.1)
            delta: Confidence parameter (default 0.1)
            max_length: Maximum word length to test
            distribution: Length distribution ("uniform" or "geometric")
            seed: Seed for reproducible sampling

        Raises:
            ValueError: If the distribution or bounds are invalid
        """
        super().__init__(membership_oracle, alphabet, **kwargs)
        if distribution not in self.DISTRIBUTIONS:
            raise ValueError(f"Unknown distribution: {distribution}")
        if not 0 < epsilon < 1 or not 0 < delta < 1:
            raise ValueError("epsilon and delta must lie in (0, 1)")

        self.epsilon = epsilon
        self.delta = delta
        self.max_length = max_length
        self.distribution = distribution
        self.rng = np.random.default_rng(seed)

        # Round number for the PAC bound
        self.round = 0
        self.total_samples = 0

    def sample_size(self, round_number: int) -> int:
        """m = (1/ε) * (ln(1/δ) + round * ln(2))"""
        return int(np.ceil((1.0 / self.epsilon)
                           * (np.log(1.0 / self.delta) + round_number * np.log(2))))

    def find_counterexample(self, hypothesis: Automaton, iteration: int,
                            time_limit: Optional[float] = None) -> Optional[Word]:
        """
        Find counterexample using PAC sampling.

        Args:
            hypothesis: Current hypothesis automaton
            iteration: L* iteration number
            time_limit: Optional time limit

        Returns:
            Counterexample word or None
        """
        self.round += 1
        sample_size = self.sample_size(self.round)

        self._log(f"\nPAC Equivalence Query (iteration {iteration})")
        self._log(f"  Round: {self.round}, sample size: {sample_size} "
                  f"(ε={self.epsilon}, δ={self.delta}, {self.distribution})")

        start_time = time.time()
        samples_checked = 0
        self.total_queries += 1

        for _ in range(sample_size):
            if time_limit and (time.time() - start_time) > time_limit:
                self._log(f"  Time limit reached after {samples_checked} samples")
                break

            word = self._sample_word()
            samples_checked += 1

            if self._is_counterexample(word, hypothesis):
                self.counterexamples_found += 1
                self.total_time += time.time() - start_time
                self.total_samples += samples_checked

                self._log(f"  Counterexample found: {word!r} (length {len(word)})")
                self._log(f"  Samples checked: {samples_checked}")
                return word

        self.total_samples += samples_checked
        self.total_time += time.time() - start_time
        self._log(f"  No counterexample found in {samples_checked} samples")
        return None

    def _sample_word(self) -> Word:
        """Sample a word according to the chosen distribution."""
        if self.distribution == "uniform":
            length = int(self.rng.integers(0, self.max_length + 1))
        else:
            # P(length = k) = (1-p)^k * p, favouring short words
            length = min(int(self.rng.geometric(0.2)) - 1, self.max_length)

        indices = self.rng.integers(0, len(self.alphabet), size=length)
        return tuple(self.alphabet[i] for i in indices)

    def get_statistics(self) -> Dict[str, Any]:
        """Return oracle statistics."""
        stats = super().get_statistics()

        stats.update({
            'total_samples': self.total_samples,
            'current_round': self.round,
            'current_sample_size': self.sample_size(self.round),
            'epsilon': self.epsilon,
            'delta': self.delta,
            'distribution': self.distribution,
            'avg_samples_per_counterexample': (
                self.total_samples / max(1, self.counterexamples_found)
            )
        })

        return stats
