"""Cue tables for reply classification and resolution scoring.

Each table is plain ordered data so every rule can be tested on its own.
Cue lists are matched by substring containment against lower-cased text;
ResolutionRule patterns are case-insensitive regex searches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Response type cues
QUESTION_CUES = (
    "why",
    "how",
    "what",
    "when",
    "where",
    "could you",
    "can you",
    "would you",
    "should i",
    "is there",
    "are there",
)

DEFENSE_CUES = (
    "but",
    "however",
    "actually",
    "because",
    "the reason",
    "this is",
    "i disagree",
    "i think",
    "in my opinion",
    "i believe",
    "necessary",
    "required",
    "needed",
    "intentional",
    "on purpose",
)

# Agreement phrases that veto the defense stage
DEFENSE_VETO_CUES = ("you're right", "good point")

ACKNOWLEDGMENT_CUES = (
    "thanks",
    "thank you",
    "will fix",
    "will change",
    "good point",
    "you're right",
    "agreed",
    "makes sense",
    "fixed",
    "done",
    "updated",
)

# Sentiment word lists
POSITIVE_WORDS = (
    "thanks",
    "thank",
    "appreciate",
    "good",
    "great",
    "excellent",
    "helpful",
    "agree",
    "right",
    "correct",
    "perfect",
)

NEGATIVE_WORDS = (
    "disagree",
    "wrong",
    "incorrect",
    "bad",
    "unnecessary",
    "don't",
    "won't",
    "can't",
    "shouldn't",
)

# Not consulted when scoring sentiment (see DESIGN.md)
NEUTRAL_WORDS = ("however", "but", "although", "because", "actually")

# Sentences containing these are kept as key points
KEY_POINT_CUES = (
    "because",
    "reason",
    "since",
    "due to",
    "therefore",
    "this is",
    "this allows",
    "this ensures",
    "this prevents",
    "required",
    "necessary",
    "needed",
    "must",
)

MAX_KEY_POINTS = 3
FALLBACK_KEY_POINTS = 2
FALLBACK_MIN_WORDS = 5  # strictly more than this many words


@dataclass(frozen=True)
class ConcernRule:
    """Phrases that mark a weak defense, and the message posted for them."""

    name: str
    phrases: tuple[str, ...]
    message: str

    def matches(self, lower_text: str) -> bool:
        return any(phrase in lower_text for phrase in self.phrases)


CONCERN_RULES = (
    ConcernRule(
        "it_works",
        ("it works", "it's working"),
        '"It works" is not sufficient justification. Code should also be '
        "maintainable, secure, and follow best practices.",
    ),
    ConcernRule(
        "past_practice",
        ("always done", "we always"),
        "Past practices should be evaluated against current best practices and standards.",
    ),
    ConcernRule(
        "no_time",
        ("don't have time", "quick fix"),
        "Technical debt should be minimized. Quick fixes often lead to "
        "long-term maintenance issues.",
    ),
    ConcernRule(
        "nobody_cares",
        ("no one will notice", "doesn't matter"),
        "Code quality matters regardless of visibility. This affects "
        "maintainability and team standards.",
    ),
)


@dataclass(frozen=True)
class ResolutionRule:
    """A justification pattern and the weight it adds to a defense."""

    name: str
    pattern: re.Pattern
    weight: float

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


RESOLUTION_RULES = (
    ResolutionRule(
        "performance",
        re.compile(r"(performance|optimization|faster|efficient)", re.IGNORECASE),
        0.8,
    ),
    ResolutionRule(
        "compatibility",
        re.compile(r"(backward compatibility|legacy|existing)", re.IGNORECASE),
        0.9,
    ),
    ResolutionRule(
        "framework",
        re.compile(r"(framework|library) (requirement|convention|standard)", re.IGNORECASE),
        0.9,
    ),
    ResolutionRule(
        "design",
        re.compile(r"(design pattern|architecture|by design)", re.IGNORECASE),
        0.8,
    ),
    ResolutionRule(
        "test_code",
        re.compile(r"(test|mock|stub) (data|code|setup)", re.IGNORECASE),
        0.7,
    ),
    ResolutionRule(
        "temporary",
        re.compile(r"temporary|placeholder|will be replaced", re.IGNORECASE),
        0.5,
    ),
)

CODE_BONUS = 0.3
REFERENCE_BONUS = 0.2

_FENCED_CODE = re.compile(r"```")
_INLINE_CODE = re.compile(r"`[^`]+`")
_REFERENCE = re.compile(r"http|link|documentation|docs|spec", re.IGNORECASE)

DISMISSAL_PATTERNS = (
    re.compile(r"it works", re.IGNORECASE),
    re.compile(r"no problem", re.IGNORECASE),
    re.compile(r"don't worry", re.IGNORECASE),
    re.compile(r"it's fine", re.IGNORECASE),
)

# Dismissals only sink a defense scoring below this
DISMISSAL_SCORE_FLOOR = 0.5
RESOLVE_THRESHOLD = 0.7
DETAIL_MIN_WORDS = 20  # strictly more than this many words


def contains_any(lower_text: str, cues: tuple[str, ...]) -> bool:
    """True if any cue is a substring of the (already lower-cased) text."""
    return any(cue in lower_text for cue in cues)


def has_code_example(text: str) -> bool:
    """Fenced block or inline code span."""
    return bool(_FENCED_CODE.search(text) or _INLINE_CODE.search(text))


def has_reference(text: str) -> bool:
    """Link, docs or spec mention."""
    return bool(_REFERENCE.search(text))


def is_dismissal(text: str) -> bool:
    return any(pattern.search(text) for pattern in DISMISSAL_PATTERNS)
