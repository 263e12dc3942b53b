"""
Small regular languages over {a, b} and {a}.

Used as targets for the examples and tests.
"""

from typing import Hashable, Sequence


def even_as(word: Sequence[Hashable]) -> bool:
    """Words with an even number of a's."""
    return sum(1 for symbol in word if symbol == "a") % 2 == 0


def only_as(word: Sequence[Hashable]) -> bool:
    """a*: words made only of a's, including the empty word."""
    return all(symbol == "a" for symbol in word)


def even_length(word: Sequence[Hashable]) -> bool:
    """Words of even length."""
    return len(word) % 2 == 0


def ends_with_ab(word: Sequence[Hashable]) -> bool:
    """(a|b)*ab"""
    return tuple(word[-2:]) == ("a", "b")
