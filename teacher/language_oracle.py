"""
Membership oracles for L* learning.

A membership oracle classifies words of the target language. Oracles cache
their answers since equivalence oracles tend to re-test the same words
across rounds.
"""

from typing import Callable, Dict, Hashable, Iterable, List, Sequence, Tuple
from collections import OrderedDict
import re

from core.observation_table import ordered_alphabet


Word = Tuple[Hashable, ...]


class LanguageOracle:
    """
    Membership oracle backed by a predicate over words.

    The predicate receives the word as a tuple of symbols.
    """

    def __init__(self,
                 predicate: Callable[[Word], bool],
                 alphabet: Iterable[Hashable],
                 cache_size: int = 100000):
        """
        Initialize oracle.

        Args:
            predicate: Decides membership of a word
            alphabet: Input alphabet
            cache_size: Maximum cached queries
        """
        self.predicate = predicate
        self.alphabet = ordered_alphabet(alphabet)

        # Caching with LRU eviction
        self.cache: "OrderedDict[Word, bool]" = OrderedDict()
        self.cache_size = cache_size

        # Statistics
        self.query_count = 0
        self.cache_hits = 0
        self.evaluations = 0

    def classify_word(self, word: Sequence[Hashable]) -> bool:
        """Single membership query."""
        word = tuple(word)
        self.query_count += 1

        if word in self.cache:
            self.cache_hits += 1
            self.cache.move_to_end(word)
            return self.cache[word]

        label = bool(self.predicate(word))
        self.evaluations += 1
        self._add_to_cache(word, label)
        return label

    def membership_queries(self, words: List[Sequence[Hashable]]) -> List[bool]:
        """Batch membership queries."""
        return [self.classify_word(word) for word in words]

    def _add_to_cache(self, word: Word, label: bool):
        self.cache[word] = label
        if len(self.cache) > self.cache_size:
            self.cache.popitem(last=False)

    def get_statistics(self) -> Dict[str, float]:
        return {
            'total_queries': self.query_count,
            'cache_hits': self.cache_hits,
            'evaluations': self.evaluations,
            'cache_hit_rate': self.cache_hits / max(1, self.query_count),
        }


class RegexOracle(LanguageOracle):
    """
    Membership oracle for a regular expression.

    A word is a member iff the concatenation of its symbols fully matches
    the pattern.
    """

    def __init__(self, pattern: str, alphabet: Iterable[Hashable],
                 separator: str = "", cache_size: int = 100000):
        """
        Args:
            pattern: Regular expression (``re`` syntax)
            alphabet: Input alphabet
            separator: String placed between symbols before matching

        Raises:
            ValueError: If the pattern does not compile
        """
        try:
            self.regex = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern {pattern!r}: {e}") from e
        self.pattern = pattern
        self.separator = separator
        super().__init__(self._matches, alphabet, cache_size=cache_size)

    def _matches(self, word: Word) -> bool:
        text = self.separator.join(str(symbol) for symbol in word)
        return self.regex.fullmatch(text) is not None

    def __repr__(self) -> str:
        return f"RegexOracle({self.pattern!r}, alphabet={self.alphabet!r})"
