"""
L* Algorithm implementation based on Angluin (1987).

Algorithm learns a minimal DFA for an unknown regular language using membership and
equivalence queries with polynomial complexity in the number of states and the length
of counterexamples.

The learner is an explicit state machine:

    FILLING -> CHECK_CONSISTENCY -> CHECK_CLOSEDNESS -> HYPOTHESIZING -> DONE

Any repair of the table sends it back to FILLING, so a hypothesis is only
built once both checks pass without modifying the table.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple
from enum import Enum
import time

from .automaton import Automaton, DfaState
from .config import CounterexampleMode, LearnerConfig
from .observation_table import ObservationTable, TableBudgetExceeded


Word = Tuple[Hashable, ...]


class ProtocolViolation(Exception):
    """Raised when the teacher answers outside its contract."""
    pass


class LearningBudgetExceeded(Exception):
    """Raised when a run exceeds its iteration, query or time budget."""

    def __init__(self, message: str, hypothesis: Optional[Automaton] = None):
        super().__init__(message)
        self.hypothesis = hypothesis


class Phase(Enum):
    FILLING = "filling"
    CHECK_CONSISTENCY = "check_consistency"
    CHECK_CLOSEDNESS = "check_closedness"
    HYPOTHESIZING = "hypothesizing"
    DONE = "done"


class LStarAlgorithm:
    """L* learning algorithm implementation."""

    def __init__(self, teacher, alphabet: Optional[Iterable[Hashable]] = None,
                 config: Optional[LearnerConfig] = None):
        """
        Initialize L* learner.

        Args:
            teacher: Oracle providing membership/equivalence queries
            alphabet: Input alphabet (defaults to ``teacher.alphabet``)
            config: Budgets and table options

        Raises:
            ValueError: If no alphabet is given and the teacher declares none
        """
        if alphabet is None:
            alphabet = getattr(teacher, "alphabet", None)
            if alphabet is None:
                raise ValueError("No alphabet given and the teacher does not declare one")
        self.teacher = teacher
        self.config = config or LearnerConfig()

        self.table = ObservationTable(
            alphabet, teacher,
            cache_queries=self.config.cache_queries,
            max_queries=self.config.max_membership_queries
        )
        self.alphabet = self.table.A
        # String counterexamples split unambiguously into symbols
        self._character_alphabet = all(isinstance(a, str) and len(a) == 1
                                       for a in self.alphabet)

        self.phase = Phase.FILLING
        self.hypothesis: Optional[Automaton] = None
        self.start_time = None

        # Statistics
        self.iterations = 0
        self.consistency_repairs = 0
        self.closedness_repairs = 0
        self.counterexamples: List[Word] = []
        self.hypotheses_history: List[Dict[str, Any]] = []
        self.refinement_times: List[float] = []
        self.equivalence_times: List[float] = []
        self._refinement_start = None

    def _log(self, message: str):
        if self.config.verbose:
            print(message)

    def run(self) -> Automaton:
        """
        Execute L* learning algorithm.

        Returns:
            The hypothesis accepted by the teacher

        Raises:
            ProtocolViolation: If the teacher's equivalence answer is malformed
            LearningBudgetExceeded: If a configured budget is exhausted
        """
        self._start()
        try:
            while self.phase is not Phase.DONE:
                self.step()
        except TableBudgetExceeded as e:
            raise LearningBudgetExceeded(str(e), self.hypothesis) from e

        return self.hypothesis

    def _start(self):
        if self.start_time is not None:
            return
        self.start_time = time.time()
        self._refinement_start = self.start_time
        if self.config.time_limit:
            self.table.set_time_limit(self.config.time_limit, self.start_time)

    def step(self):
        """Advance the state machine by one transition."""
        self._start()
        if self.phase is Phase.FILLING:
            self.table.fill()
            self.phase = Phase.CHECK_CONSISTENCY
        elif self.phase is Phase.CHECK_CONSISTENCY:
            self._check_consistency()
        elif self.phase is Phase.CHECK_CLOSEDNESS:
            self._check_closedness()
        elif self.phase is Phase.HYPOTHESIZING:
            self._hypothesize()

    def _check_consistency(self):
        witness = self.table.check_consistency()
        if witness is None:
            self.phase = Phase.CHECK_CLOSEDNESS
            return

        experiment = self.table.handle_inconsistency(witness)
        self.consistency_repairs += 1
        s1, s2, a = witness
        self._log(f"  Inconsistent: {s1!r} ~ {s2!r} on {a!r}, "
                  f"adding experiment {experiment!r}")
        self.phase = Phase.FILLING

    def _check_closedness(self):
        unclosed = self.table.check_closedness()
        if unclosed is None:
            self.phase = Phase.HYPOTHESIZING
            return

        self.table.add_prefix(unclosed)
        self.closedness_repairs += 1
        self._log(f"  Not closed: adding prefix {unclosed!r}")
        self.phase = Phase.FILLING

    def _hypothesize(self):
        self._check_budget()
        self.iterations += 1
        self.refinement_times.append(time.time() - self._refinement_start)

        hypothesis = self.build_hypothesis()
        self.hypothesis = hypothesis
        self._log(f"Iteration {self.iterations}: "
                  f"Constructed DFA with {len(hypothesis)} states "
                  f"(refinement: {self.refinement_times[-1]:.2f}s)")

        equiv_start = time.time()
        response = self.teacher.validate_hypothesis(hypothesis)
        self.equivalence_times.append(time.time() - equiv_start)
        counterexamples = self._parse_response(response)

        self.hypotheses_history.append({
            'iteration': self.iterations,
            'time': time.time() - self.start_time,
            'states': len(hypothesis),
            'table_states': len(self.table.S),
            'table_experiments': len(self.table.E),
            'counterexamples': counterexamples,
        })

        if counterexamples is None:
            self._log(f"Exact DFA learned in {self.iterations} iterations")
            self.phase = Phase.DONE
            return

        for word in counterexamples:
            self._log(f"  Counterexample: {word!r} (length {len(word)})")
            self.counterexamples.append(word)
            self.add_counterexample(word)

        self._refinement_start = time.time()
        self.phase = Phase.FILLING

    def _check_budget(self):
        max_iterations = self.config.max_iterations
        if max_iterations is not None and self.iterations >= max_iterations:
            raise LearningBudgetExceeded(
                f"No hypothesis accepted within {max_iterations} iterations",
                self.hypothesis)
        time_limit = self.config.time_limit
        if time_limit and time.time() - self.start_time > time_limit:
            raise LearningBudgetExceeded(
                f"Time limit of {time_limit}s exceeded", self.hypothesis)

    def _parse_response(self, response) -> Optional[List[Word]]:
        """
        Validate an equivalence answer.

        Returns:
            None if accepted, else counterexamples in canonical order
        """
        if response is None:
            return None
        if (isinstance(response, (str, bytes))
                or not isinstance(response, (set, frozenset, list, tuple))):
            raise ProtocolViolation(f"Unexpected response from teacher: {response!r}")
        if not response:
            raise ProtocolViolation("Teacher rejected the hypothesis without a counterexample")

        words = {}
        for word in response:
            if not isinstance(word, (str, tuple, list)):
                raise ProtocolViolation(f"Counterexample is not a word: {word!r}")
            if isinstance(word, str) and not self._character_alphabet:
                raise ProtocolViolation(
                    f"Counterexample {word!r} is a string but the alphabet has "
                    f"multi-character symbols; send a tuple of symbols")
            words[tuple(word)] = None
        return sorted(words, key=self.table.word_key)

    def add_counterexample(self, word: Sequence[Hashable]):
        """
        Add a counterexample to S.

        VERBATIM adds the word itself; PREFIXES adds each of its prefixes.
        """
        word = tuple(word)
        if self.config.counterexample_mode is CounterexampleMode.PREFIXES:
            new_prefixes = [word[:i] for i in range(len(word) + 1)]
        else:
            new_prefixes = [word]

        added = [p for p in new_prefixes if self.table.add_prefix(p)]
        if not added:
            self._log(f"  Counterexample {word!r} already in table, nothing added")

    def build_hypothesis(self) -> Automaton:
        """
        Construct DFA from closed and consistent observation table.

        States correspond to distinct rows in S, with transitions
        determined by row equivalences.
        """
        table = self.table
        if not table.is_closed() or not table.is_consistent():
            raise ValueError("Hypothesis requires a closed and consistent table")

        representatives = table.representatives()
        states = {s: DfaState(s, table.table[s][()])
                  for s in representatives.values()}

        automaton = Automaton(states[representatives[table.row(())]])
        for state in states.values():
            automaton.add_state(state)

        for s, state in states.items():
            for a in self.alphabet:
                target = states[representatives[table.row(s + (a,))]]
                automaton.add_transition(state, target, a)

        return automaton

    def get_statistics(self) -> Dict[str, Any]:
        """
        Return learning statistics.

        Returns:
            Dictionary with performance metrics
        """
        total_time = time.time() - self.start_time if self.start_time else 0.0

        stats = {
            "iterations": self.iterations,
            "total_time": total_time,
            "final_states": len(self.hypothesis) if self.hypothesis else 0,
            "hypotheses_tested": len(self.hypotheses_history),
            "counterexamples": len(self.counterexamples),
            "avg_ce_length": sum(len(ce) for ce in self.counterexamples) / max(1, len(self.counterexamples)),
            "consistency_repairs": self.consistency_repairs,
            "closedness_repairs": self.closedness_repairs,
            "table_stats": self.table.get_statistics(),
        }

        refinement_total = sum(self.refinement_times)
        equivalence_total = sum(self.equivalence_times)
        stats["time_breakdown"] = {
            "refinement": refinement_total,
            "equivalence": equivalence_total,
            "other": total_time - refinement_total - equivalence_total
        }

        return stats

    def print_summary(self):
        """Print learning summary."""
        stats = self.get_statistics()

        print("\n" + "=" * 50)
        print("L* Learning Summary")
        print("=" * 50)

        print(f"Iterations: {stats['iterations']}")
        print(f"Total time: {stats['total_time']:.2f}s")
        print(f"Final DFA states: {stats['final_states']}")

        print(f"\nCounterexamples: {stats['counterexamples']}")
        print(f"Average CE length: {stats['avg_ce_length']:.1f}")
        print(f"Repairs: {stats['consistency_repairs']} consistency, "
              f"{stats['closedness_repairs']} closedness")

        print(f"\nTable statistics:")
        table_stats = stats['table_stats']
        print(f"  States (|S|): {table_stats['states']}")
        print(f"  Experiments (|E|): {table_stats['experiments']}")
        print(f"  Total queries: {table_stats['total_queries']}")
        print(f"  Cache hit rate: {table_stats['cache_hit_rate']:.1%}")

        print("=" * 50)


def run_lstar(teacher, alphabet: Optional[Iterable[Hashable]] = None,
              config: Optional[LearnerConfig] = None) -> Automaton:
    """
    Convenience function: learn, print a summary, return the DFA.

    Args:
        teacher: Oracle providing queries
        alphabet: Input alphabet (defaults to ``teacher.alphabet``)
        config: Learner configuration

    Returns:
        Learned DFA
    """
    learner = LStarAlgorithm(teacher, alphabet, config)
    dfa = learner.run()
    if learner.config.verbose:
        learner.print_summary()
    return dfa
