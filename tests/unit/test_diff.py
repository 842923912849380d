import pytest

from jotter.content import DiffSegment, DiffType, diff_texts, summarize_diff
from jotter.content.diff import new_side, old_side, tokenize

PAIRS = [
    ("Hello world", "Hello there world"),
    ("the quick brown fox", "the slow brown dog"),
    ("  leading and trailing  ", "leading\nand trailing"),
    ("a b c d e", "e d c b a"),
    ("", "fresh text"),
    ("old text", ""),
    ("same", "same"),
]


@pytest.mark.parametrize("old,new", PAIRS)
def test_sides_reconstruct_inputs(old, new):
    segments = diff_texts(old, new)
    assert old_side(segments) == old
    assert new_side(segments) == new


@pytest.mark.parametrize("old,new", PAIRS)
def test_adjacent_segments_differ_in_type(old, new):
    segments = diff_texts(old, new)
    for left, right in zip(segments, segments[1:]):
        assert left.type is not right.type


def test_identical_texts_give_single_unchanged_segment():
    text = "one two  three\nfour"
    assert diff_texts(text, text) == [DiffSegment(DiffType.UNCHANGED, text)]


def test_both_empty_gives_no_segments():
    assert diff_texts("", "") == []


def test_empty_old_is_single_addition():
    assert diff_texts("", "new words") == [DiffSegment(DiffType.ADDED, "new words")]


def test_empty_new_is_single_removal():
    assert diff_texts("gone now", "") == [DiffSegment(DiffType.REMOVED, "gone now")]


def test_disjoint_inputs_have_no_unchanged_segment():
    segments = diff_texts("alpha", "beta")
    assert {s.type for s in segments} == {DiffType.ADDED, DiffType.REMOVED}
    assert old_side(segments) == "alpha"
    assert new_side(segments) == "beta"


def test_insertion_in_the_middle():
    segments = diff_texts("Hello world", "Hello there world")
    assert segments == [
        DiffSegment(DiffType.UNCHANGED, "Hello"),
        DiffSegment(DiffType.ADDED, " there"),
        DiffSegment(DiffType.UNCHANGED, " world"),
    ]


def test_replacement_lists_removal_before_addition():
    # on equal LCS lengths the backtrack takes the added token first,
    # which puts the removal ahead of it once the script is reversed
    segments = diff_texts("red", "blue")
    assert segments == [
        DiffSegment(DiffType.REMOVED, "red"),
        DiffSegment(DiffType.ADDED, "blue"),
    ]


def test_whitespace_runs_are_tokens():
    assert tokenize("  a\t b ") == ["  ", "a", "\t ", "b", " "]
    assert tokenize("") == []


def test_summary_counts_words():
    segments = diff_texts("the quick brown fox", "the slow brown dog")
    assert summarize_diff(segments) == {"unchanged": 2, "added": 2, "removed": 2}
