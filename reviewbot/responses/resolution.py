"""Decide whether a defense is strong enough to resolve a review thread.

A defense resolves the thread only when both hold:
- its justification score reaches RESOLVE_THRESHOLD
- it carries enough detail (length, code, or a reference)

A bare dismissal ("it works", "it's fine") scoring under the dismissal
floor is rejected outright.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .classifier import ResponseAnalysis, ResponseType
from .rules import (
    CODE_BONUS,
    DETAIL_MIN_WORDS,
    DISMISSAL_SCORE_FLOOR,
    REFERENCE_BONUS,
    RESOLUTION_RULES,
    RESOLVE_THRESHOLD,
    has_code_example,
    has_reference,
    is_dismissal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefenseVerdict:
    """How a defense was scored and what was decided."""

    score: float
    matched_rules: tuple[str, ...]
    has_code: bool
    has_reference: bool
    word_count: int
    dismissed: bool  # penalty gate fired
    sufficient_detail: bool
    resolved: bool


def count_words(text: str) -> int:
    """Number of pieces when splitting on whitespace runs.

    Leading or trailing whitespace counts as an empty piece, so "" is 1.
    """
    return len(re.split(r"\s+", text))


def score_defense(text: str) -> tuple[float, tuple[str, ...]]:
    """Sum the weight of every resolution rule the text matches."""
    score = 0.0
    matched = []
    for rule in RESOLUTION_RULES:
        if rule.matches(text):
            score += rule.weight
            matched.append(rule.name)
    return score, tuple(matched)


def evaluate_defense(text: str) -> DefenseVerdict:
    """Score a defense and apply the dismissal and detail gates."""
    score, matched = score_defense(text)
    code = has_code_example(text)
    reference = has_reference(text)

    if code:
        score += CODE_BONUS
    if reference:
        score += REFERENCE_BONUS

    word_count = count_words(text)
    sufficient_detail = word_count > DETAIL_MIN_WORDS or code or reference
    dismissed = is_dismissal(text) and score < DISMISSAL_SCORE_FLOOR

    return DefenseVerdict(
        score=score,
        matched_rules=matched,
        has_code=code,
        has_reference=reference,
        word_count=word_count,
        dismissed=dismissed,
        sufficient_detail=sufficient_detail,
        resolved=not dismissed and score >= RESOLVE_THRESHOLD and sufficient_detail,
    )


def should_resolve(text: str, analysis: ResponseAnalysis) -> bool:
    """Whether the reply justifies resolving the comment it answers.

    Only defenses can resolve a comment; every other type returns False.
    """
    if analysis.type is not ResponseType.DEFENSE:
        return False

    verdict = evaluate_defense(text)
    logger.debug(
        f"Defense score {verdict.score:.2f} (rules={list(verdict.matched_rules)}, "
        f"words={verdict.word_count}, dismissed={verdict.dismissed}) -> "
        f"resolve={verdict.resolved}"
    )
    return verdict.resolved
