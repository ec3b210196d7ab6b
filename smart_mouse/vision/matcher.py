"""Fuzzy matching of a free-text query against fused UI elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.config import Config
from ..core.logger import log
from .models import ElementType, ScoredElement, UIElement


@dataclass(frozen=True, slots=True)
class MatchPolicy:
    """Scoring constants for ``find_best_match``."""

    button_boost: float = 1.2
    containment_score: float = 0.9
    threshold: float = 0.3

    @classmethod
    def from_config(cls, cfg: Config) -> MatchPolicy:
        return cls(
            button_boost=cfg.match_button_boost,
            containment_score=cfg.match_containment_score,
            threshold=cfg.match_threshold,
        )


DEFAULT_POLICY = MatchPolicy()


def text_similarity(a: str, b: str, containment_score: float = DEFAULT_POLICY.containment_score) -> float:
    """Cheap case-insensitive similarity between element text ``a`` and query ``b``.

    Containment either way scores ``containment_score``. Otherwise the score
    is the number of characters of ``a`` (every occurrence) found anywhere in
    ``b``, divided by the longer length. This is a bag-of-characters overlap,
    not an edit distance, so anagrams score high.
    """
    lower_a = a.casefold()
    lower_b = b.casefold()
    if not lower_a:
        return 0.0

    if lower_b in lower_a or lower_a in lower_b:
        return containment_score

    matches = sum(1 for c in lower_a if c in lower_b)
    return matches / max(len(lower_a), len(lower_b))


def score_element(element: UIElement, query: str, policy: MatchPolicy = DEFAULT_POLICY) -> float:
    """Similarity, boosted for buttons, weighted by detection confidence."""
    score = text_similarity(element.text, query, policy.containment_score)

    # Prefer clickable elements
    if element.element_type is ElementType.BUTTON:
        score *= policy.button_boost

    return score * (element.confidence / 100.0)


def score_elements(
    elements: Sequence[UIElement],
    query: str,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> list[ScoredElement]:
    """Score every element, keeping fusion order."""
    return [ScoredElement(element, score_element(element, query, policy)) for element in elements]


def rank_elements(
    elements: Sequence[UIElement],
    query: str,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> list[ScoredElement]:
    """Scored elements, best first; ties keep fusion order."""
    return sorted(score_elements(elements, query, policy), key=lambda s: s.score, reverse=True)


def find_best_match(
    elements: Sequence[UIElement],
    query: str,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> UIElement | None:
    """Return the element with the strictly greatest score, or ``None``.

    The first element reaching the maximum wins. A best score at or below
    ``policy.threshold`` counts as no match.
    """
    best: UIElement | None = None
    best_score = 0.0

    for scored in score_elements(elements, query, policy):
        if scored.score > best_score:
            best_score = scored.score
            best = scored.element

    if best is None or best_score <= policy.threshold:
        log.log_match_decision(query, None, best_score)
        return None

    log.log_match_decision(query, best.text, best_score)
    return best
