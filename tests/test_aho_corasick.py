import random

import pytest
from search import ROOT, ACAutomaton, ac_search


def naive_contains_all(text, patterns):
    return all(p in text for p in patterns)


def node_by_path(automaton, path):
    state = ROOT
    for char in path:
        state = automaton.nodes[state].children[char]
    return state


def depth(automaton, state):
    result = 0
    while automaton.nodes[state].parent is not None:
        state = automaton.nodes[state].parent
        result += 1
    return result


def test_scenarios():
    """
    Basic scenarios: patterns found separately, overlapping, and missing.
    """
    assert ac_search("xayb", ["a", "b"], 2)
    assert ac_search("aba", ["ab", "ba"], 2)
    assert not ac_search("xyz", ["a", "b"], 2)


def test_empty_pattern_set():
    """
    Nothing is required for an empty pattern set.
    """
    assert ac_search("anything", [], 0)
    assert ac_search("", [], 0)


def test_required_count_defaults_to_all_patterns():
    assert ac_search("abc", ["a", "c"])
    assert not ac_search("abc", ["a", "d"])


def test_required_count_limits_patterns():
    """
    Indices at or above required_count are ignored.
    """
    assert ac_search("abc", ["a", "zzz"], 1)
    assert not ac_search("abc", ["zzz", "a"], 1)


def test_negative_required_count():
    with pytest.raises(ValueError):
        ac_search("abc", ["a"], -1)


def test_duplicate_patterns_tracked_separately():
    """
    Both indices of a duplicated pattern end at the same node and are
    satisfied by the same occurrence; other indices still need their own.
    """
    automaton = ACAutomaton(["ab", "ab", "cd"])
    state = node_by_path(automaton, "ab")
    assert automaton.nodes[state].pattern_indices == [0, 1]

    assert automaton.contains_all("xxabxx", 2)
    assert not automaton.contains_all("xxabxx", 3)
    assert automaton.contains_all("abcd", 3)


def test_nested_patterns_found_through_output_links():
    """
    Pattern "he" ends inside "she"; it must be reported via the output link.
    """
    assert ac_search("ushe", ["she", "he"], 2)
    assert ac_search("ahishers", ["he", "she", "his", "hers"], 4)
    assert not ac_search("ahisher", ["he", "she", "his", "hers"], 4)


def test_empty_pattern_matches_any_text():
    """
    The empty pattern is a substring of every text, including the empty one.
    """
    assert ac_search("", [""], 1)
    assert ac_search("abc", ["", "b"], 2)
    assert not ac_search("abc", ["", "z"], 2)


def test_bytes_input():
    assert ac_search(b"\x00\x01\xff\x02", [b"\x01\xff", b"\x02"], 2)
    assert not ac_search(b"\x00\x01", [b"\x01\x00"], 1)


def test_suffix_links():
    """
    Check suffix and output links for the classic he/she/his/hers set.
    """
    automaton = ACAutomaton(["he", "she", "his", "hers"])
    nodes = automaton.nodes

    assert automaton.suffix_link(ROOT) == ROOT
    assert nodes[ROOT].parent is None
    assert automaton.suffix_link(node_by_path(automaton, "h")) == ROOT
    assert automaton.suffix_link(node_by_path(automaton, "sh")) == node_by_path(automaton, "h")
    assert automaton.suffix_link(node_by_path(automaton, "she")) == node_by_path(automaton, "he")
    assert automaton.suffix_link(node_by_path(automaton, "his")) == node_by_path(automaton, "s")
    assert automaton.suffix_link(node_by_path(automaton, "hers")) == node_by_path(automaton, "s")

    assert automaton.output_link(node_by_path(automaton, "she")) == node_by_path(automaton, "he")
    assert automaton.output_link(node_by_path(automaton, "hers")) == ROOT


def test_link_invariants():
    """
    Suffix links point to shallower nodes; output link chains reach the root
    and pass only through terminal nodes.
    """
    automaton = ACAutomaton(["abab", "bab", "ab", "b", "aabba", "ba"])
    for state in range(1, len(automaton)):
        assert depth(automaton, automaton.suffix_link(state)) < depth(automaton, state)

        seen = set()
        link = automaton.output_link(state)
        while link != ROOT:
            assert link not in seen
            seen.add(link)
            assert automaton.nodes[link].is_terminal
            link = automaton.output_link(link)


def test_transition_is_memoized():
    automaton = ACAutomaton(["abc", "bcd"])
    state = node_by_path(automaton, "ab")

    target = automaton.transition(state, "x")
    assert target == ROOT
    assert automaton.nodes[state].goto["x"] == ROOT

    bc = automaton.transition(state, "c")
    assert bc == node_by_path(automaton, "abc")
    assert automaton.transition(bc, "d") == node_by_path(automaton, "bcd")
    assert automaton.nodes[bc].goto["d"] == node_by_path(automaton, "bcd")


def test_insert_after_build_rejected():
    automaton = ACAutomaton(["a"])
    with pytest.raises(RuntimeError):
        automaton.insert("b", 1)


def test_automaton_reused_for_many_texts():
    automaton = ACAutomaton(["6", "2", "8", "7"])
    assert automaton.contains_all("6287", 4)
    assert not automaton.contains_all("12 Мая 2720", 4)
    assert automaton.contains_all("7-8-2-6", 4)


def test_find_all():
    """
    find_all reports start offsets of every occurrence, overlaps included.
    """
    automaton = ACAutomaton(["aa", "a", "ba"])
    result = automaton.find_all("baaa")
    assert result == {0: [1, 2], 1: [1, 2, 3], 2: [0]}


def test_iter_matches():
    automaton = ACAutomaton(["he", "she"])
    assert sorted(automaton.iter_matches("she")) == [(2, 0), (2, 1)]


def test_matches_naive_search():
    """
    Compare against naive substring checks on random inputs.
    """
    rnd = random.Random(20240519)
    for _ in range(300):
        text = "".join(rnd.choice("abc") for _ in range(rnd.randint(0, 12)))
        patterns = ["".join(rnd.choice("abc") for _ in range(rnd.randint(1, 4)))
                    for _ in range(rnd.randint(1, 4))]
        assert ac_search(text, patterns, len(patterns)) == naive_contains_all(text, patterns)
