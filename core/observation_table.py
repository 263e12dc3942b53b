"""
Observation Table implementation for L* algorithm.

Maintains the prefix set S (states) and suffix set E (experiments) with
function T: (S ∪ S·Σ) × E → {0,1} filled via membership queries.

Words are tuples of symbols and the empty word is ``()``. Every witness is
chosen in canonical order (length first, then alphabet position) so runs
are reproducible.
"""

from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple
import time


Word = Tuple[Hashable, ...]
Row = Tuple[bool, ...]


class TableBudgetExceeded(Exception):
    """Raised when table operations exceed the query budget or time limit."""
    pass


def ordered_alphabet(alphabet: Iterable[Hashable]) -> List[Hashable]:
    """
    Fix an iteration order for the alphabet.

    Sequences keep their order (duplicates dropped); unordered collections
    are sorted by ``repr`` so the order does not depend on the hash seed.
    """
    if isinstance(alphabet, (set, frozenset)):
        symbols = sorted(alphabet, key=repr)
    else:
        symbols = list(dict.fromkeys(alphabet))
    if not symbols:
        raise ValueError("Alphabet must contain at least one symbol")
    return symbols


class ObservationTable:
    """Observation table for L* learning with optional query caching."""

    def __init__(self, alphabet: Iterable[Hashable], teacher,
                 cache_queries: bool = True,
                 max_queries: Optional[int] = None):
        """
        Initialize observation table.

        Args:
            alphabet: Input alphabet Σ
            teacher: Oracle providing membership queries
            cache_queries: Serve repeated words from a cache instead of
                re-querying the teacher on every fill
            max_queries: Optional limit on queries sent to the teacher
        """
        self.A = ordered_alphabet(alphabet)
        self._symbol_index = {a: i for i, a in enumerate(self.A)}
        self.teacher = teacher
        self.cache_queries = cache_queries
        self.max_queries = max_queries

        # Insertion-ordered sets
        self.S: Dict[Word, None] = {(): None}
        self.E: Dict[Word, None] = {(): None}
        for a in self.A:
            self.E[(a,)] = None

        self.table: Dict[Word, Dict[Word, bool]] = {}
        self.T: Dict[Word, bool] = {}  # Membership cache: word → bool

        # Time management
        self.time_limit = None
        self.start_time = None

        # Statistics
        self.query_count = 0
        self.cache_hits = 0
        self.fill_count = 0

    def set_time_limit(self, time_limit: float, start_time: float):
        """Set time limit for table operations."""
        self.time_limit = time_limit
        self.start_time = start_time

    def _assert_not_timed_out(self):
        if self.time_limit is not None:
            if time.time() - self.start_time > self.time_limit:
                raise TableBudgetExceeded("Observation table timed out")

    def word_key(self, word: Word):
        """Sort key giving the canonical order on words."""
        return (len(word), tuple(self._symbol_key(a) for a in word))

    def _symbol_key(self, symbol: Hashable):
        # Symbols outside Σ (from counterexamples) sort after Σ
        index = self._symbol_index.get(symbol)
        if index is None:
            return (1, 0, repr(symbol))
        return (0, index, "")

    def prefixes(self) -> List[Word]:
        """S in canonical order."""
        return sorted(self.S, key=self.word_key)

    def extensions(self) -> List[Word]:
        """S·Σ in canonical order."""
        words = {s + (a,): None for s in self.S for a in self.A}
        return sorted(words, key=self.word_key)

    def rows(self) -> List[Word]:
        """S ∪ S·Σ in canonical order."""
        words = dict(self.S)
        for s in self.S:
            for a in self.A:
                words[s + (a,)] = None
        return sorted(words, key=self.word_key)

    def fill(self):
        """
        Fill T for every row in S ∪ S·Σ and every column in E.

        Without caching every cell is re-queried on each call; with caching
        only words never seen before reach the teacher. Table contents are
        the same either way.
        """
        rows = self.rows()
        columns = list(self.E)
        words = [row + col for row in rows for col in columns]
        answers = self._membership(words)

        for row in rows:
            cells = self.table.setdefault(row, {})
            for col in columns:
                cells[col] = answers[row + col]

        self.fill_count += 1
        self._assert_not_timed_out()

    def _membership(self, words: List[Word]) -> Dict[Word, bool]:
        if self.cache_queries:
            to_query = [w for w in dict.fromkeys(words) if w not in self.T]
            self.cache_hits += len(words) - len(to_query)
        else:
            to_query = words

        if to_query:
            if (self.max_queries is not None
                    and self.query_count + len(to_query) > self.max_queries):
                raise TableBudgetExceeded(
                    f"Membership query budget of {self.max_queries} exceeded "
                    f"({self.query_count} used, {len(to_query)} requested)")

            self.query_count += len(to_query)
            results = self.teacher.membership_queries(to_query)
            for word, result in zip(to_query, results):
                self.T[word] = bool(result)

        return {w: self.T[w] for w in words}

    def row(self, word: Sequence[Hashable]) -> Row:
        """
        Row signature of ``word``.

        Definition: row(s) = (T(s·e) for e in E)
        """
        cells = self.table[tuple(word)]
        return tuple(cells[e] for e in self.E)

    def representatives(self) -> Dict[Row, Word]:
        """Map each distinct row signature of S to its canonical prefix."""
        representatives = {}
        for s in self.prefixes():
            representatives.setdefault(self.row(s), s)
        return representatives

    def representative(self, word: Sequence[Hashable]) -> Word:
        """
        Find canonical representative for row equivalence class.

        Returns:
            Canonically minimal s ∈ S with row(s) = row(word)
        """
        signature = self.row(word)
        for s in self.prefixes():
            if self.row(s) == signature:
                return s
        raise ValueError(f"No matching row found for {word!r}")

    def live_rows(self) -> List[Word]:
        """
        Get canonical representatives for all equivalence classes of S.

        Used for DFA state construction.
        """
        return list(self.representatives().values())

    def check_consistency(self) -> Optional[Tuple[Word, Word, Hashable]]:
        """
        Find the first inconsistency.

        Table is inconsistent if ∃s1,s2 ∈ S, a ∈ Σ:
        row(s1) = row(s2) but row(s1·a) ≠ row(s2·a)

        Returns:
            Witness (s1, s2, a), or None if consistent
        """
        prefixes = self.prefixes()
        for i, s1 in enumerate(prefixes):
            row1 = self.row(s1)
            for s2 in prefixes[i + 1:]:
                if self.row(s2) != row1:
                    continue
                for a in self.A:
                    if self.row(s1 + (a,)) != self.row(s2 + (a,)):
                        return s1, s2, a
        return None

    def check_closedness(self) -> Optional[Word]:
        """
        Find the first unclosed extension.

        Table is closed if ∀s ∈ S, a ∈ Σ: ∃t ∈ S with row(s·a) = row(t)

        Returns:
            Extension s·a with no representative in S, or None if closed
        """
        signatures = {self.row(s) for s in self.S}
        for t in self.extensions():
            if self.row(t) not in signatures:
                return t
        return None

    def distinguishing_suffix(self, s1: Word, s2: Word, a: Hashable) -> Word:
        """
        First e ∈ E with T(s1·a·e) ≠ T(s2·a·e).

        Raises:
            ValueError: If row(s1·a) = row(s2·a)
        """
        row1 = self.table[s1 + (a,)]
        row2 = self.table[s2 + (a,)]
        for e in self.E:
            if row1[e] != row2[e]:
                return e
        raise ValueError(f"Rows {s1!r}·{a!r} and {s2!r}·{a!r} are not distinguished by E")

    def handle_inconsistency(self, witness: Tuple[Word, Word, Hashable]) -> Word:
        """
        Resolve an inconsistency by adding a·e to E.

        Returns:
            The new experiment
        """
        s1, s2, a = witness
        experiment = (a,) + self.distinguishing_suffix(s1, s2, a)
        self.add_suffix(experiment)
        return experiment

    def add_prefix(self, word: Sequence[Hashable]) -> bool:
        """Add ``word`` to S. Returns False if it was already there."""
        word = tuple(word)
        if word in self.S:
            return False
        self.S[word] = None
        return True

    def add_suffix(self, word: Sequence[Hashable]) -> bool:
        """Add ``word`` to E. Returns False if it was already there."""
        word = tuple(word)
        if word in self.E:
            return False
        self.E[word] = None
        return True

    def is_filled(self) -> bool:
        """Check T is defined on (S ∪ S·Σ) × E."""
        return all(row in self.table and all(e in self.table[row] for e in self.E)
                   for row in self.rows())

    def is_closed(self) -> bool:
        return self.check_closedness() is None

    def is_consistent(self) -> bool:
        return self.check_consistency() is None

    def get_statistics(self) -> Dict[str, float]:
        """Return performance statistics."""
        return {
            "states": len(self.S),
            "experiments": len(self.E),
            "cached_words": len(self.T),
            "total_queries": self.query_count,
            "cache_hits": self.cache_hits,
            "cache_hit_rate": self.cache_hits / max(1, self.cache_hits + self.query_count),
            "fills": self.fill_count,
        }

    def __str__(self) -> str:
        """String representation for debugging."""
        lines = ["Observation Table:"]
        lines.append(f"  |S| = {len(self.S)}, |E| = {len(self.E)}")

        if self.is_filled() and len(self.S) <= 10:
            lines.append(f"  Closed: {self.is_closed()}, Consistent: {self.is_consistent()}")
            header = " ".join(f"{_show(e):>4}" for e in self.E)
            lines.append(f"  {'':>6} {header}")
            for s in self.prefixes():
                cells = " ".join(f"{int(v):>4}" for v in self.row(s))
                lines.append(f"  {_show(s):>6} {cells}")

        return "\n".join(lines)


def _show(word: Word) -> str:
    return "".join(str(a) for a in word) or "ε"
