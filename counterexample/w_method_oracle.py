"""
W-method Equivalence Oracle

Implements Chow's W-method for equivalence testing, which systematically
tests the hypothesis DFA against the target using a characterization set.
"""

import itertools
import time
from collections import deque
from typing import Any, Dict, Hashable, List, Optional, Set

from .base_oracle import EquivalenceOracle, Word
from core.automaton import Automaton


class WMethodOracle(EquivalenceOracle):
    """
    W-method equivalence oracle for systematic testing.

    The W-method assumes an upper bound on the number of states in the
    target automaton; under that bound a hypothesis passing every test is
    equivalent to the target.
    """

    def __init__(self, membership_oracle, alphabet: List[Hashable],
                 max_target_states: int = 10,
                 **kwargs):
        """
        Initialize W-method oracle.

        Args:
            membership_oracle: Oracle for membership queries
            alphabet: Input alphabet
            max_target_states: Upper bound on number of states in target
        """
        super().__init__(membership_oracle, alphabet, **kwargs)
        self.max_target_states = max_target_states
        self._symbol_index = {a: i for i, a in enumerate(self.alphabet)}

        # Statistics specific to W-method
        self.total_test_words = 0

    def find_counterexample(self, hypothesis: Automaton, iteration: int,
                            time_limit: Optional[float] = None) -> Optional[Word]:
        """
        Find counterexample using W-method.

        Args:
            hypothesis: Current hypothesis automaton
            iteration: L* iteration number
            time_limit: Optional time limit

        Returns:
            Counterexample word or None
        """
        self._log(f"\nW-Method Equivalence Query (iteration {iteration})")

        depth = max(0, self.max_target_states + 1 - len(hypothesis))
        self._log(f"  Hypothesis states: {len(hypothesis)}, "
                  f"test depth: {depth} (max_target={self.max_target_states})")

        start_time = time.time()
        self.total_queries += 1

        transition_cover = self._compute_transition_cover(hypothesis)
        W = self._compute_characterization_set(hypothesis)
        test_words = self._generate_test_set(transition_cover, W, depth)
        self._log(f"  Transition cover: {len(transition_cover)}, "
                  f"characterization set: {len(W)}, test set: {len(test_words)}")

        words_checked = 0
        # Shorter words first
        for word in sorted(test_words, key=self._word_key):
            if time_limit and (time.time() - start_time) > time_limit:
                self._log(f"  Time limit reached after {words_checked} words")
                break

            words_checked += 1
            if self._is_counterexample(word, hypothesis):
                self.counterexamples_found += 1
                self.total_time += time.time() - start_time
                self.total_test_words += words_checked

                self._log(f"  Counterexample found: {word!r} (length {len(word)})")
                self._log(f"  Words checked: {words_checked}/{len(test_words)}")
                return word

        self.total_test_words += words_checked
        self.total_time += time.time() - start_time
        self._log(f"  No counterexample found after checking {words_checked} words")
        return None

    def _word_key(self, word: Word):
        index = self._symbol_index
        return (len(word), tuple(index.get(a, len(index)) for a in word))

    def _compute_state_cover(self, hypothesis: Automaton) -> Dict[Word, Word]:
        """
        Compute access sequences for all states.

        Returns a mapping from state to shortest word that reaches it.
        """
        initial = hypothesis.get_initial_state().state_id
        access_sequences = {initial: ()}
        queue = deque([initial])

        while queue:
            current = queue.popleft()
            transitions = hypothesis.states[current].transitions
            for symbol in self.alphabet:
                target = transitions.get(symbol)
                if target is not None and target not in access_sequences:
                    access_sequences[target] = access_sequences[current] + (symbol,)
                    queue.append(target)

        return access_sequences

    def _compute_transition_cover(self, hypothesis: Automaton) -> Set[Word]:
        """
        Compute a transition cover.

        Returns a set of words that covers every reachable transition,
        including the access sequences themselves.
        """
        access_sequences = self._compute_state_cover(hypothesis)

        transition_cover = set(access_sequences.values())
        for access_seq in access_sequences.values():
            for symbol in self.alphabet:
                transition_cover.add(access_seq + (symbol,))

        return transition_cover

    def _compute_characterization_set(self, hypothesis: Automaton) -> Set[Word]:
        """
        Compute a characterization set W.

        W is a set of words that distinguish between every pair of
        inequivalent states in the hypothesis.
        """
        W = {()}

        state_list = list(hypothesis.states)
        for i in range(len(state_list)):
            for j in range(i + 1, len(state_list)):
                distinguisher = hypothesis.minimal_diverging_suffix(
                    state_list[i], state_list[j], self.alphabet)
                if distinguisher is not None:
                    W.add(distinguisher)

        return W

    def _generate_test_set(self, P: Set[Word], W: Set[Word], depth: int) -> Set[Word]:
        """
        Generate the W-method test set.

        Test set = P · Σ^[0..depth] · W
        """
        middles = [()]
        for length in range(1, depth + 1):
            middles.extend(itertools.product(self.alphabet, repeat=length))

        return {p + m + w for p in P for m in middles for w in W}

    def get_statistics(self) -> Dict[str, Any]:
        """Return oracle statistics."""
        stats = super().get_statistics()

        stats.update({
            'total_test_words': self.total_test_words,
            'max_target_states': self.max_target_states,
            'avg_words_per_query': (
                self.total_test_words / max(1, self.total_queries)
            )
        })

        return stats
