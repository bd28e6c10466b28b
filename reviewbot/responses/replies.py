"""Reply text for each kind of committer response."""

from __future__ import annotations

from dataclasses import dataclass

from .classifier import ResponseAnalysis, ResponseType, classify
from .resolution import should_resolve

ACKNOWLEDGMENT_REPLY = "👍 Thank you for addressing this feedback!"

RESOLVED_MARKER = "\n\n✅ **Resolved**: The committer's explanation is valid."


@dataclass(frozen=True)
class ReplyPlan:
    """What to post back, and whether to mark the original comment resolved."""

    body: str
    resolve: bool
    analysis: ResponseAnalysis


def _bullets(items: tuple[str, ...]) -> str:
    return "\n".join(f"• {item}" for item in items)


def question_reply(text: str, analysis: ResponseAnalysis) -> str:
    lower = text.lower()

    if "why" in lower or "reason" in lower:
        return (
            "This suggestion is made to improve code quality, maintainability, or security. "
            "The specific concern is highlighted in the original review comment. "
            "If you need more clarification on any particular point, please let me know!"
        )
    if "how" in lower:
        return (
            "Here's how you can address this:\n\n"
            "1. Review the suggested change in the comment above\n"
            "2. Apply the recommended pattern or approach\n"
            "3. Test the change to ensure it works as expected\n\n"
            "If you need specific code examples or further guidance, please ask!"
        )
    if "alternative" in lower or "better way" in lower:
        return (
            "The approach suggested in the review comment is considered a best practice. "
            "However, if you have a specific alternative in mind that addresses the same "
            "concerns, please share it and I'll be happy to review it!"
        )

    if analysis.key_points:
        detail = f"The main concern here is: {analysis.key_points[0]}"
    else:
        detail = "Please refer to the review comment above for details."
    return f"Good question! {detail} Feel free to ask for more specific guidance if needed."


def resolution_reply(analysis: ResponseAnalysis) -> str:
    return (
        "✅ Thank you for the explanation! Your reasoning is valid:\n\n"
        f"{_bullets(analysis.key_points)}\n\n"
        "This addresses the concern raised in the review. Marking this as resolved."
    )


def counter_reply(analysis: ResponseAnalysis) -> str:
    return (
        "I understand your perspective, but I'd like to clarify:\n\n"
        f"{_bullets(analysis.concerns)}\n\n"
        "The original suggestion still stands as it addresses important concerns about "
        "code quality, security, or maintainability. If you have additional context that "
        "I'm missing, please share it!"
    )


def plan_reply(text: str, analysis: ResponseAnalysis) -> ReplyPlan:
    """Pick the reply template for an analyzed response."""
    if analysis.type is ResponseType.QUESTION:
        return ReplyPlan(question_reply(text, analysis), False, analysis)

    if analysis.type is ResponseType.DEFENSE:
        if should_resolve(text, analysis):
            return ReplyPlan(resolution_reply(analysis), True, analysis)
        return ReplyPlan(counter_reply(analysis), False, analysis)

    return ReplyPlan(ACKNOWLEDGMENT_REPLY, False, analysis)


def respond_to(text: str, original_comment=None) -> ReplyPlan:
    """Classify a reply and plan the follow-up in one step."""
    return plan_reply(text, classify(text, original_comment))
