"""Classify a committer's reply to a review comment.

The reply type is decided by a three-stage cascade over the lower-cased
text, where later stages overwrite earlier ones:

1. question: a literal "?" or an interrogative cue
2. defense: a justification cue, unless already a question or the reply
   concedes ("you're right", "good point")
3. acknowledgment: any thanks/agreement cue, overriding both of the above

Acknowledgment is also the default, so "Thanks, but why?" and an empty
reply are both acknowledgments.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .rules import (
    ACKNOWLEDGMENT_CUES,
    CONCERN_RULES,
    DEFENSE_CUES,
    DEFENSE_VETO_CUES,
    FALLBACK_KEY_POINTS,
    FALLBACK_MIN_WORDS,
    KEY_POINT_CUES,
    MAX_KEY_POINTS,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    QUESTION_CUES,
    contains_any,
)

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


class ResponseType(str, Enum):
    QUESTION = "question"
    DEFENSE = "defense"
    ACKNOWLEDGMENT = "acknowledgment"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class ResponseAnalysis:
    """Result of classifying one reply."""

    type: ResponseType
    sentiment: Sentiment
    key_points: tuple[str, ...]
    concerns: tuple[str, ...]  # only ever non-empty for defenses
    original_comment: Any  # echoed back untouched


def classify_type(text: str) -> ResponseType:
    """Run the question -> defense -> acknowledgment cascade."""
    lower = text.lower()
    response_type = ResponseType.ACKNOWLEDGMENT

    if "?" in text or contains_any(lower, QUESTION_CUES):
        response_type = ResponseType.QUESTION

    if (
        response_type is not ResponseType.QUESTION
        and contains_any(lower, DEFENSE_CUES)
        and not contains_any(lower, DEFENSE_VETO_CUES)
    ):
        response_type = ResponseType.DEFENSE

    if contains_any(lower, ACKNOWLEDGMENT_CUES):
        response_type = ResponseType.ACKNOWLEDGMENT

    return response_type


def analyze_sentiment(text: str) -> Sentiment:
    """Compare how many positive vs negative words appear in the text."""
    lower = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lower)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lower)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and drop blank fragments. Not trimmed."""
    return [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def extract_key_points(text: str) -> tuple[str, ...]:
    """Pick out the sentences carrying the reasoning.

    Sentences with a causal keyword win; otherwise the first two sentences
    of more than five words. At most three, in text order.
    """
    sentences = split_sentences(text)

    points = [s.strip() for s in sentences if contains_any(s.strip().lower(), KEY_POINT_CUES)]

    if not points:
        substantial = [s.strip() for s in sentences if len(s.split()) > FALLBACK_MIN_WORDS]
        points = substantial[:FALLBACK_KEY_POINTS]

    return tuple(points[:MAX_KEY_POINTS])


def identify_concerns(text: str) -> tuple[str, ...]:
    """Messages for each weak-defense pattern found, in rule order."""
    lower = text.lower()
    return tuple(rule.message for rule in CONCERN_RULES if rule.matches(lower))


def classify(text: str, original_comment: Any = None) -> ResponseAnalysis:
    """Classify a reply and extract what a follow-up needs.

    Args:
        text: The reply body.
        original_comment: The review comment being answered. Not inspected.

    Returns:
        ResponseAnalysis. Never raises; empty text is a neutral
        acknowledgment with no key points.
    """
    response_type = classify_type(text)
    concerns = identify_concerns(text) if response_type is ResponseType.DEFENSE else ()

    analysis = ResponseAnalysis(
        type=response_type,
        sentiment=analyze_sentiment(text),
        key_points=extract_key_points(text),
        concerns=concerns,
        original_comment=original_comment,
    )
    logger.debug(
        f"Classified reply as {analysis.type.value} "
        f"(sentiment={analysis.sentiment.value}, concerns={len(concerns)})"
    )
    return analysis
