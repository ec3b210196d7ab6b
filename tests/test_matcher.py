"""Tests for the fuzzy matcher: similarity, scoring and arg-max selection."""

import pytest

from smart_mouse.vision.matcher import (
    MatchPolicy,
    find_best_match,
    rank_elements,
    score_element,
    text_similarity,
)
from smart_mouse.vision.models import ElementType

from fakes import element


@pytest.mark.parametrize("query", ["ok", "Submit", "a", " "])
def test_empty_text_never_matches(query):
    assert text_similarity("", query) == 0.0


def test_containment_is_symmetric_and_case_insensitive():
    assert text_similarity("Submit Order", "submit") == 0.9
    assert text_similarity("submit", "Submit Order") == 0.9
    assert text_similarity("OK", "ok") == 0.9


def test_character_overlap_without_containment():
    # "cancel" shares no characters with "ok"
    assert text_similarity("Cancel", "ok") == 0.0
    # every character of "save" occurs in "vase"; 4 / 4
    assert text_similarity("save", "vase") == 1.0
    # c, l, o, s of "close" occur in "cools", e does not: 4 / 5
    assert text_similarity("close", "cools") == pytest.approx(0.8)


def test_repeated_characters_count_every_occurrence():
    # both 'a's of "aab" occur in "ac", 'b' does not: 2 / max(3, 2)
    assert text_similarity("aab", "ac") == pytest.approx(2 / 3)


def test_ok_button_beats_cancel_text():
    ok = element("OK", ElementType.BUTTON, confidence=80)
    cancel = element("Cancel", ElementType.TEXT, confidence=95)

    assert score_element(ok, "ok") == pytest.approx(0.864)
    assert score_element(cancel, "ok") <= 0.33 * 0.95
    assert find_best_match([ok, cancel], "ok") is ok


def test_no_shared_characters_reports_no_match():
    elements = [element("Submit"), element("Cancel", ElementType.BUTTON)]
    assert find_best_match(elements, "zzz") is None


def test_empty_list_reports_no_match():
    assert find_best_match([], "anything") is None


def test_best_score_at_threshold_is_no_match():
    ok = element("ok", ElementType.TEXT, confidence=50)
    policy = MatchPolicy(threshold=score_element(ok, "ok"))
    assert find_best_match([ok], "ok", policy) is None
    assert find_best_match([ok], "ok") is ok


def test_tie_goes_to_first_in_fusion_order():
    first = element("Save", x=0)
    second = element("Save", x=200)
    assert find_best_match([first, second], "save") is first


def test_button_outscores_text_with_same_similarity_and_confidence():
    text = element("Next", ElementType.TEXT, confidence=90)
    button = element("Next", ElementType.BUTTON, confidence=90)
    assert score_element(button, "next") > score_element(text, "next")
    assert find_best_match([text, button], "next") is button


def test_button_boost_is_not_clamped():
    assert score_element(element("OK", ElementType.BUTTON, confidence=100), "ok") == pytest.approx(1.08)


def test_empty_query_prefers_highest_confidence_button():
    hello = element("Hello", ElementType.TEXT, confidence=95)
    ok = element("OK", ElementType.BUTTON, confidence=60)
    go = element("Go", ElementType.BUTTON, confidence=80)
    assert find_best_match([hello, ok, go], "") is go


def test_geometric_elements_without_labels_are_ignored():
    blank_button = element("", ElementType.BUTTON, confidence=70)
    assert find_best_match([blank_button], "submit") is None


def test_rank_elements_orders_by_score_stably():
    a = element("Open", confidence=50)
    b = element("Open", ElementType.BUTTON, confidence=90)
    c = element("Open", confidence=50, x=300)
    ranked = rank_elements([a, b, c], "open")
    assert [s.element for s in ranked] == [b, a, c]
    assert ranked[0].element is b
    assert ranked[1].element is a
