"""Tests for reply templates."""

from reviewbot.responses import ACKNOWLEDGMENT_REPLY, ResponseType, classify, plan_reply, respond_to
from reviewbot.responses.replies import counter_reply, question_reply
from reviewbot.responses.rules import CONCERN_RULES


class TestQuestionReply:
    """Test which answer a question gets."""

    def test_why(self):
        text = "Why is this change needed?"
        body = question_reply(text, classify(text))
        assert body.startswith("This suggestion is made to improve code quality")

    def test_how(self):
        text = "How do I do that?"
        body = question_reply(text, classify(text))
        assert body.startswith("Here's how you can address this")
        assert "1. Review the suggested change" in body

    def test_alternative(self):
        text = "Is there a better way?"
        body = question_reply(text, classify(text))
        assert "specific alternative in mind" in body

    def test_generic_with_key_point(self):
        text = "Can you clarify this? It is needed for the release"
        body = question_reply(text, classify(text))
        assert body.startswith("Good question! The main concern here is: It is needed for the release")

    def test_generic_without_key_point(self):
        text = "Is this ok?"
        body = question_reply(text, classify(text))
        assert "Please refer to the review comment above for details." in body


class TestPlanReply:
    """Test template selection and the resolve flag."""

    def test_question(self):
        plan = respond_to("Why is this change needed? Can you explain?")
        assert plan.analysis.type is ResponseType.QUESTION
        assert plan.resolve is False

    def test_resolved_defense(self):
        text = (
            "This is necessary because of backward compatibility requirements. "
            "The legacy system requires this specific format. "
            "We have documentation here: https://docs.example.com/legacy-api"
        )
        plan = respond_to(text)
        assert plan.resolve is True
        assert "• This is necessary because of backward compatibility requirements" in plan.body
        assert plan.body.endswith("Marking this as resolved.")

    def test_unresolved_defense_gets_counter(self):
        plan = respond_to("Because it works.")
        assert plan.analysis.type is ResponseType.DEFENSE
        assert plan.resolve is False
        assert plan.body.startswith("I understand your perspective")
        assert f"• {CONCERN_RULES[0].message}" in plan.body

    def test_acknowledgment(self):
        plan = respond_to("Thanks for the feedback! Will fix this.")
        assert plan.body == ACKNOWLEDGMENT_REPLY
        assert plan.resolve is False

    def test_plan_keeps_analysis(self):
        comment = {"id": 9}
        analysis = classify("Done", comment)
        assert plan_reply("Done", analysis).analysis.original_comment is comment

    def test_counter_without_concerns(self):
        body = counter_reply(classify("I think this is needed"))
        assert "The original suggestion still stands" in body
