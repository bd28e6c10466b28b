"""Classification of committer replies to review comments.

Rule-based: fixed cue tables, no trained model.

This package provides:
- Reply classification (question / defense / acknowledgment, sentiment,
  key points, weak-defense concerns)
- Resolution policy for defenses (weighted justification rules + gates)
- Reply templates driven by the two above
"""

from .classifier import (
    ResponseAnalysis,
    ResponseType,
    Sentiment,
    analyze_sentiment,
    classify,
    extract_key_points,
    identify_concerns,
)
from .replies import (
    ACKNOWLEDGMENT_REPLY,
    RESOLVED_MARKER,
    ReplyPlan,
    plan_reply,
    respond_to,
)
from .resolution import DefenseVerdict, evaluate_defense, should_resolve

__all__ = [
    # Classification
    "classify",
    "ResponseAnalysis",
    "ResponseType",
    "Sentiment",
    "analyze_sentiment",
    "extract_key_points",
    "identify_concerns",
    # Resolution
    "should_resolve",
    "evaluate_defense",
    "DefenseVerdict",
    # Replies
    "plan_reply",
    "respond_to",
    "ReplyPlan",
    "ACKNOWLEDGMENT_REPLY",
    "RESOLVED_MARKER",
]
