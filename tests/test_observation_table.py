import pytest
from hypothesis import given, settings, strategies as st

from core.observation_table import ObservationTable, TableBudgetExceeded, ordered_alphabet
from grammars.languages import even_as, ends_with_ab


class CountingTeacher:
    """Membership-only teacher counting the words it is asked about."""

    def __init__(self, predicate):
        self.predicate = predicate
        self.asked = []

    def membership_queries(self, words):
        self.asked.extend(words)
        return [self.predicate(word) for word in words]


def length_two(word):
    return len(word) == 2


words_ab = st.lists(st.sampled_from("ab"), max_size=4).map(tuple)


def test_initial_sets():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))

    assert list(table.S) == [()]
    assert list(table.E) == [(), ("a",), ("b",)]
    assert table.A == ["a", "b"]


def test_ordered_alphabet():
    assert ordered_alphabet(["b", "a", "b"]) == ["b", "a"]
    assert ordered_alphabet({"b", "a"}) == ["a", "b"]
    assert ordered_alphabet("ab") == ["a", "b"]
    with pytest.raises(ValueError):
        ordered_alphabet([])


def test_fill_queries_every_row_and_column():
    teacher = CountingTeacher(even_as)
    table = ObservationTable(["a", "b"], teacher)
    table.fill()

    assert table.rows() == [(), ("a",), ("b",)]
    assert table.is_filled()
    assert table.row(()) == (True, False, True)
    assert table.row(("a",)) == (False, True, False)
    assert table.row(("b",)) == (True, False, True)
    # ε, a, b, aa, ab, ba, bb
    assert len(set(teacher.asked)) == 7


def test_fill_without_cache_requeries_every_cell():
    teacher = CountingTeacher(even_as)
    table = ObservationTable(["a", "b"], teacher, cache_queries=False)
    table.fill()
    table.fill()

    assert len(teacher.asked) == 2 * 3 * 3
    assert table.query_count == 18


def test_fill_with_cache_queries_each_word_once():
    teacher = CountingTeacher(even_as)
    table = ObservationTable(["a", "b"], teacher)
    table.fill()
    table.fill()

    assert len(teacher.asked) == 7
    assert table.cache_hits == 2 * 9 - 7


def test_query_budget():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as), max_queries=5)

    with pytest.raises(TableBudgetExceeded):
        table.fill()


def test_time_limit():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))
    table.set_time_limit(1.0, start_time=0.0)

    with pytest.raises(TableBudgetExceeded):
        table.fill()


def test_check_closedness_returns_first_unclosed_extension():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))
    table.fill()

    assert table.check_closedness() == ("a",)
    assert not table.is_closed()

    table.add_prefix(("a",))
    table.fill()

    assert table.check_closedness() is None
    assert table.is_consistent()


def test_inconsistency_is_repaired_with_prefixed_suffix():
    table = ObservationTable(["a"], CountingTeacher(length_two))
    table.add_prefix(("a", "a", "a"))
    table.fill()

    assert table.row(()) == table.row(("a", "a", "a"))
    witness = table.check_consistency()
    assert witness == ((), ("a", "a", "a"), "a")

    # The disagreeing column is already in E
    assert table.distinguishing_suffix(*witness) == ("a",)
    assert ("a",) in table.E

    assert table.handle_inconsistency(witness) == ("a", "a")
    table.fill()

    assert list(table.E) == [(), ("a",), ("a", "a")]
    assert table.is_consistent()


def test_distinguishing_suffix_requires_distinct_rows():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))
    table.add_prefix(("b",))
    table.fill()

    with pytest.raises(ValueError):
        table.distinguishing_suffix((), ("b",), "a")


def test_representatives_use_canonical_order():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))
    for prefix in [("b", "b"), ("a",), ("b",)]:
        table.add_prefix(prefix)
    table.fill()

    assert table.prefixes() == [(), ("a",), ("b",), ("b", "b")]
    assert table.representative(("b", "b")) == ()
    assert table.representative(("b", "a")) == ("a",)
    assert table.live_rows() == [(), ("a",)]


def test_add_prefix_and_suffix_are_monotone():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))

    assert table.add_prefix("ab")
    assert not table.add_prefix(("a", "b"))
    assert table.add_suffix(("b", "b"))
    assert not table.add_suffix(("b", "b"))
    assert list(table.S) == [(), ("a", "b")]


def test_foreign_symbols_sort_after_alphabet():
    table = ObservationTable(["b", "a"], CountingTeacher(even_as))

    assert sorted([("a",), ("z",), ("b",)], key=table.word_key) == [("b",), ("a",), ("z",)]


def test_str_renders_small_tables():
    table = ObservationTable(["a", "b"], CountingTeacher(even_as))
    table.fill()
    text = str(table)

    assert "|S| = 1, |E| = 3" in text
    assert "Closed: False, Consistent: True" in text


@settings(max_examples=50, deadline=None)
@given(prefixes=st.lists(words_ab, max_size=5), suffixes=st.lists(words_ab, max_size=3))
def test_fill_is_total_and_idempotent(prefixes, suffixes):
    table = ObservationTable(["a", "b"], CountingTeacher(ends_with_ab))
    for p in prefixes:
        table.add_prefix(p)
    for e in suffixes:
        table.add_suffix(e)

    table.fill()
    assert table.is_filled()
    snapshot = {row: dict(cells) for row, cells in table.table.items()}
    queries = table.query_count

    table.fill()
    assert table.table == snapshot
    assert table.query_count == queries


@settings(max_examples=50, deadline=None)
@given(prefixes=st.lists(words_ab, max_size=5))
def test_cells_match_membership(prefixes):
    table = ObservationTable(["a", "b"], CountingTeacher(ends_with_ab), cache_queries=False)
    for p in prefixes:
        table.add_prefix(p)
    table.fill()

    for row, cells in table.table.items():
        for col, value in cells.items():
            assert value == ends_with_ab(row + col)
