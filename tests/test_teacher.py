import pytest

from counterexample import BFSOracle, PACEquivalenceOracle, WMethodOracle
from teacher import (LanguageOracle, OracleConfig, OracleTeacher, OracleType, PredicateTeacher,
                     RegexOracle, RegexTeacher, create_equivalence_oracle, get_default_configs)
from grammars.languages import even_as


QUIET_BFS = OracleConfig(max_depth=6, verbose=False)


class TestRegexOracle:

    def test_full_match(self):
        oracle = RegexOracle("a*", ["a", "b"])

        assert oracle.classify_word(())
        assert oracle.classify_word("aaa")
        assert not oracle.classify_word(("a", "b"))

    def test_separator(self):
        oracle = RegexOracle("ab|cd,ef", ["ab", "cd", "ef"], separator=",")

        assert oracle.classify_word(["ab"])
        assert oracle.classify_word(["cd", "ef"])
        assert not oracle.classify_word(["ab", "cd"])

    def test_invalid_pattern(self):
        with pytest.raises(ValueError, match="Invalid regex pattern"):
            RegexOracle("(ab", ["a", "b"])

    def test_empty_alphabet(self):
        with pytest.raises(ValueError):
            RegexOracle("a*", [])


class TestLanguageOracle:

    def test_cache_statistics(self):
        calls = []

        def predicate(word):
            calls.append(word)
            return even_as(word)

        oracle = LanguageOracle(predicate, ["a", "b"])
        assert oracle.membership_queries(["aa", "aa", ("a", "a"), "b"]) == [True, True, True, True]

        assert calls == [("a", "a"), ("b",)]
        stats = oracle.get_statistics()
        assert stats['total_queries'] == 4
        assert stats['cache_hits'] == 2
        assert stats['evaluations'] == 2
        assert stats['cache_hit_rate'] == 0.5

    def test_lru_eviction(self):
        oracle = LanguageOracle(even_as, ["a", "b"], cache_size=2)
        oracle.classify_word("a")
        oracle.classify_word("b")
        oracle.classify_word("a")
        oracle.classify_word("aa")

        assert list(oracle.cache) == [("a",), ("a", "a")]


class TestOracleTeacher:

    def test_accepts_correct_hypothesis(self, parity_dfa):
        teacher = PredicateTeacher(even_as, ["a", "b"], QUIET_BFS)

        assert teacher.alphabet == ["a", "b"]
        assert teacher.membership_query("aa")
        assert teacher.membership_queries(["a", "b"]) == [False, True]
        assert teacher.validate_hypothesis(parity_dfa) is None

    def test_rejects_with_singleton_set(self, accept_all_dfa, reject_all_dfa):
        teacher = PredicateTeacher(even_as, ["a", "b"], QUIET_BFS)

        assert teacher.validate_hypothesis(accept_all_dfa) == {("a",)}
        assert teacher.validate_hypothesis(reject_all_dfa) == {()}

        stats = teacher.get_statistics()
        assert stats['hypotheses_proposed'] == 2
        assert stats['counterexamples'] == 2
        assert stats['avg_ce_length'] == 0.5
        assert stats['oracle_type'] == "bfs"

    def test_explicit_equivalence_oracle(self, accept_all_dfa):
        membership = LanguageOracle(even_as, ["a", "b"])
        equivalence = WMethodOracle(membership, ["a", "b"], max_target_states=2, verbose=False)
        teacher = OracleTeacher(membership, equivalence_oracle=equivalence)

        assert teacher.equivalence_oracle is equivalence
        assert teacher.validate_hypothesis(accept_all_dfa) == {("a",)}

    def test_regex_teacher(self, parity_dfa):
        teacher = RegexTeacher("b*(ab*ab*)*", ["a", "b"], QUIET_BFS)

        assert teacher.pattern == "b*(ab*ab*)*"
        assert teacher.validate_hypothesis(parity_dfa) is None

    def test_regex_teacher_invalid_pattern(self):
        with pytest.raises(ValueError):
            RegexTeacher("[ab", ["a", "b"])


class TestOracleConfig:

    def test_string_oracle_type(self):
        assert OracleConfig(oracle_type="pac").oracle_type is OracleType.PAC

    def test_unknown_oracle_type(self):
        with pytest.raises(ValueError, match="Unknown oracle type"):
            OracleConfig(oracle_type="random")

    def test_to_dict(self):
        assert OracleConfig(oracle_type="w_method", max_target_states=4).to_dict() == {
            'oracle_type': 'w_method',
            'time_limit': None,
            'max_target_states': 4,
        }
        assert OracleConfig().to_dict()['max_depth'] == 10

    @pytest.mark.parametrize("name, oracle_class", [
        ("bfs", BFSOracle),
        ("w_method", WMethodOracle),
        ("pac", PACEquivalenceOracle),
    ])
    def test_factory(self, name, oracle_class):
        config = get_default_configs()[name]
        membership = LanguageOracle(even_as, ["a", "b"])
        oracle = create_equivalence_oracle(config, membership, ["a", "b"])

        assert isinstance(oracle, oracle_class)
        assert config.oracle_type.value == name
