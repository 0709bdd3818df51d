"""Tests for the rule-based fallback router."""

import pytest

from pulsechat.domain.services import get_fallback_action_plan


class TestGetFallbackActionPlan:
    """Tests for get_fallback_action_plan."""

    def test_urgent_message(self, context_factory) -> None:
        """Priority keywords route to priority with high priority."""
        plan = get_fallback_action_plan(
            context_factory(text="URGENT: prod is down, need help ASAP")
        )

        assert "priority" in plan.actions
        assert plan.priority == "high"

    def test_meeting_message(self, context_factory) -> None:
        """Calendar keywords and a time route to calendar."""
        plan = get_fallback_action_plan(
            context_factory(text="Let's meet tomorrow at 3pm")
        )

        assert plan.actions == ["calendar"]
        assert plan.priority is None
        assert plan.reasoning is not None
        assert "calendar=True" in plan.reasoning
        assert "times=True" in plan.reasoning

    def test_nothing_matches(self, context_factory) -> None:
        """Without any signal both actions run with low priority."""
        plan = get_fallback_action_plan(context_factory(text="Thanks!"))

        assert plan.actions == ["priority", "calendar"]
        assert plan.priority == "low"

    def test_both_fire(self, context_factory) -> None:
        plan = get_fallback_action_plan(
            context_factory(text="Urgent: the deadline meeting moved to 2024-01-20")
        )

        assert plan.actions == ["priority", "calendar"]
        assert plan.priority == "high"

    def test_priority_keyword_in_history(self, context_factory) -> None:
        """Priority keywords in previous messages also count."""
        plan = get_fallback_action_plan(
            context_factory(
                text="any update?",
                previous=["This is a blocker for the release"],
            )
        )

        assert plan.actions == ["priority"]
        assert plan.priority == "high"

    def test_calendar_keyword_in_history_ignored(self, context_factory) -> None:
        """Calendar signals are only read from the current message."""
        plan = get_fallback_action_plan(
            context_factory(text="sounds good", previous=["meeting on friday?"])
        )

        assert plan.actions == ["priority", "calendar"]
        assert plan.priority == "low"

    @pytest.mark.parametrize(
        "text",
        [
            "see you 1/20",
            "due 12-31",
            "launch on 2024-03-01",
            "kickoff on Mar 5",
            "ok at 10:30",
            "dinner 7 pm?",
        ],
    )
    def test_date_and_time_patterns(self, context_factory, text: str) -> None:
        plan = get_fallback_action_plan(context_factory(text=text))

        assert plan.actions == ["calendar"]

    def test_case_insensitive(self, context_factory) -> None:
        plan = get_fallback_action_plan(context_factory(text="this is CRITICAL"))

        assert plan.actions == ["priority"]

    def test_deterministic(self, context_factory) -> None:
        context = context_factory(text="Emergency call tomorrow")

        assert get_fallback_action_plan(context) == get_fallback_action_plan(context)

    @pytest.mark.parametrize(
        "text",
        ["", "ok", "lol", "Thanks!", "URGENT", "Let's meet tomorrow at 3pm"],
    )
    def test_never_empty(self, context_factory, text: str) -> None:
        plan = get_fallback_action_plan(context_factory(text=text))

        assert plan.actions
        assert set(plan.actions) <= {"priority", "calendar"}
