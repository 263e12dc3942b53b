import pytest

from counterexample import BFSOracle, PACEquivalenceOracle, WMethodOracle
from grammars.languages import even_as
from teacher.language_oracle import LanguageOracle


ALPHABET = ["a", "b"]


def at_least_five(word):
    return len(word) >= 5


@pytest.fixture
def even_as_oracle():
    return LanguageOracle(even_as, ALPHABET)


def test_bfs_finds_shortest_counterexample(even_as_oracle, accept_all_dfa, reject_all_dfa,
                                           parity_dfa):
    oracle = BFSOracle(even_as_oracle, ALPHABET, max_depth=6, verbose=False)

    assert oracle.find_counterexample(accept_all_dfa, 1) == ("a",)
    assert oracle.find_counterexample(reject_all_dfa, 2) == ()
    assert oracle.find_counterexample(parity_dfa, 3) is None

    stats = oracle.get_statistics()
    assert stats['total_queries'] == 3
    assert stats['counterexamples_found'] == 2


def test_bfs_respects_max_depth(reject_all_dfa):
    membership = LanguageOracle(at_least_five, ALPHABET)

    shallow = BFSOracle(membership, ALPHABET, max_depth=4, verbose=False)
    deep = BFSOracle(membership, ALPHABET, max_depth=5, verbose=False)

    assert shallow.find_counterexample(reject_all_dfa, 1) is None
    assert deep.find_counterexample(reject_all_dfa, 1) == ("a",) * 5


def test_w_method_finds_counterexample(even_as_oracle, accept_all_dfa, parity_dfa):
    oracle = WMethodOracle(even_as_oracle, ALPHABET, max_target_states=2, verbose=False)

    assert oracle.find_counterexample(accept_all_dfa, 1) == ("a",)
    assert oracle.find_counterexample(parity_dfa, 2) is None


def test_w_method_depth_grows_with_target_bound(reject_all_dfa):
    membership = LanguageOracle(at_least_five, ALPHABET)

    assert WMethodOracle(membership, ALPHABET, max_target_states=3,
                         verbose=False).find_counterexample(reject_all_dfa, 1) is None
    assert WMethodOracle(membership, ALPHABET, max_target_states=6,
                         verbose=False).find_counterexample(reject_all_dfa, 1) == ("a",) * 5


def test_w_method_test_suite_parts(even_as_oracle, parity_dfa):
    oracle = WMethodOracle(even_as_oracle, ALPHABET, verbose=False)

    assert oracle._compute_state_cover(parity_dfa) == {(): (), ("a",): ("a",)}
    assert oracle._compute_characterization_set(parity_dfa) == {()}
    assert oracle._compute_transition_cover(parity_dfa) == {
        (), ("a",), ("b",), ("a", "a"), ("a", "b")}
    assert oracle._generate_test_set({()}, {()}, 2) == {
        (), ("a",), ("b",), ("a", "a"), ("a", "b"), ("b", "a"), ("b", "b")}


def test_pac_sample_size(even_as_oracle):
    oracle = PACEquivalenceOracle(even_as_oracle, ALPHABET, epsilon=0.1, delta=0.1,
                                  verbose=False)

    assert oracle.sample_size(1) == 30
    assert oracle.sample_size(2) > oracle.sample_size(1)


def test_pac_finds_counterexample(even_as_oracle, accept_all_dfa):
    oracle = PACEquivalenceOracle(even_as_oracle, ALPHABET, epsilon=0.1, delta=0.1,
                                  seed=1, verbose=False)

    counterexample = oracle.find_counterexample(accept_all_dfa, 1)
    assert counterexample is not None
    assert not even_as(counterexample)


def test_pac_accepts_correct_hypothesis(even_as_oracle, parity_dfa):
    oracle = PACEquivalenceOracle(even_as_oracle, ALPHABET, seed=0, verbose=False)

    assert oracle.find_counterexample(parity_dfa, 1) is None
    assert oracle.get_statistics()['total_samples'] == oracle.sample_size(1)


def test_pac_sampling_is_reproducible(even_as_oracle):
    first = PACEquivalenceOracle(even_as_oracle, ALPHABET, seed=7, verbose=False)
    second = PACEquivalenceOracle(even_as_oracle, ALPHABET, seed=7, verbose=False)

    assert [first._sample_word() for _ in range(20)] == [second._sample_word() for _ in range(20)]


def test_pac_uniform_lengths_are_bounded(even_as_oracle):
    oracle = PACEquivalenceOracle(even_as_oracle, ALPHABET, max_length=4,
                                  distribution="uniform", seed=3, verbose=False)

    words = [oracle._sample_word() for _ in range(200)]
    assert all(len(word) <= 4 for word in words)
    assert all(symbol in ALPHABET for word in words for symbol in word)


@pytest.mark.parametrize("kwargs", [
    {"distribution": "poisson"},
    {"epsilon": 0},
    {"delta": 1.5},
])
def test_pac_rejects_invalid_parameters(even_as_oracle, kwargs):
    with pytest.raises(ValueError):
        PACEquivalenceOracle(even_as_oracle, ALPHABET, **kwargs)


def test_oracle_logging(even_as_oracle, accept_all_dfa, capsys):
    oracle = BFSOracle(even_as_oracle, ALPHABET, max_depth=2)
    oracle.find_counterexample(accept_all_dfa, 4)

    out = capsys.readouterr().out
    assert "BFS Equivalence Query (iteration 4)" in out
    assert "Counterexample found: ('a',)" in out


def test_bfs_breadth_limit_keeps_levels_separate(reject_all_dfa):
    membership = LanguageOracle(lambda word: word == ("b", "b"), ALPHABET)
    oracle = BFSOracle(membership, ALPHABET, max_depth=3, breadth_limit=2, verbose=False)

    # The limit stops "b" from being expanded, so "bb" is never generated
    assert oracle.find_counterexample(reject_all_dfa, 1) is None

    unlimited = BFSOracle(membership, ALPHABET, max_depth=3, verbose=False)
    assert unlimited.find_counterexample(reject_all_dfa, 1) == ("b", "b")
