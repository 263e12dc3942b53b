"""Target languages for L* experiments."""

from .tomita import (
    tomita_1, tomita_2, tomita_3, tomita_4,
    tomita_5, tomita_6, tomita_7,
    TOMITA_ALPHABET,
    TOMITA_GRAMMARS,
    get_tomita_grammar,
    generate_words
)
from .languages import even_as, only_as, even_length, ends_with_ab

__all__ = [
    'tomita_1', 'tomita_2', 'tomita_3', 'tomita_4',
    'tomita_5', 'tomita_6', 'tomita_7',
    'TOMITA_ALPHABET',
    'TOMITA_GRAMMARS',
    'get_tomita_grammar',
    'generate_words',
    'even_as', 'only_as', 'even_length', 'ends_with_ab',
]
