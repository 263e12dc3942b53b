"""
Tomita Grammars Implementation
Based on Tomita (1982) - classic benchmark grammars over the alphabet {0, 1}

Each grammar takes a word as a sequence of "0"/"1" symbols (a tuple or a
plain string).
"""

from typing import Callable, Dict, Hashable, List, Sequence, Tuple
import itertools
import re


TOMITA_ALPHABET = ["0", "1"]


def _text(word: Sequence[Hashable]) -> str:
    return "".join(str(symbol) for symbol in word)


def tomita_1(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 1: 1*
    Accepts words containing only 1s (no 0s allowed).
    """
    return "0" not in _text(word)


def tomita_2(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 2: (10)*
    Accepts words that are repetitions of "10".
    """
    w = _text(word)
    return w == "10" * (len(w) // 2)


# Words containing an odd series of consecutive ones and then later an odd series of consecutive zeros
_not_tomita_3 = re.compile("((0|1)*0)*1(11)*(0(0|1)*1)*0(00)*(1(0|1)*)*$")


def tomita_3(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 3: Complement of specific pattern
    Accepts words that are NOT:
    - words containing an odd series of consecutive ones and then later an odd series of consecutive zeros
    """
    return _not_tomita_3.match(_text(word)) is None


def tomita_4(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 4: No three consecutive 0s
    """
    return "000" not in _text(word)


def tomita_5(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 5: Even 0s and even 1s
    """
    w = _text(word)
    return (w.count("0") % 2 == 0) and (w.count("1") % 2 == 0)


def tomita_6(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 6: Difference of 0s and 1s divisible by 3
    """
    w = _text(word)
    return ((w.count("0") - w.count("1")) % 3) == 0


def tomita_7(word: Sequence[Hashable]) -> bool:
    """
    Tomita Grammar 7: At most one occurrence of "10"
    Equivalent to 0*1*0*1*.
    """
    return _text(word).count("10") <= 1


# Dictionary of all Tomita grammars: id -> (function, description, minimal DFA size)
TOMITA_GRAMMARS: Dict[int, Tuple[Callable[[Sequence[Hashable]], bool], str, int]] = {
    1: (tomita_1, "1* (no zeros allowed)", 2),
    2: (tomita_2, "(10)* (alternating 10 pattern)", 3),
    3: (tomita_3, "complement of odd consecutive 1s then odd consecutive 0s", 5),
    4: (tomita_4, "no three consecutive 0s", 4),
    5: (tomita_5, "even 0s AND even 1s", 4),
    6: (tomita_6, "(#0s - #1s) mod 3 = 0", 3),
    7: (tomita_7, "at most one occurrence of '10'", 5),
}


def get_tomita_grammar(grammar_id: int) -> Tuple[Callable[[Sequence[Hashable]], bool], str, int]:
    """
    Get Tomita grammar function, description and minimal DFA size by ID.

    Raises:
        ValueError: If grammar_id is not in 1-7
    """
    if grammar_id not in TOMITA_GRAMMARS:
        raise ValueError(f"Unknown Tomita grammar ID: {grammar_id}. Valid IDs are 1-7.")
    return TOMITA_GRAMMARS[grammar_id]


def generate_words(alphabet: Sequence[Hashable], max_length: int) -> List[Tuple[Hashable, ...]]:
    """
    Generate all words over ``alphabet`` up to max_length, shortest first.

    Returns:
        List of words including the empty word
    """
    words = []
    for length in range(max_length + 1):
        words.extend(itertools.product(alphabet, repeat=length))
    return words
