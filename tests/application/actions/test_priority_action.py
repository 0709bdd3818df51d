"""Tests for PriorityAction."""

from unittest.mock import AsyncMock

import pytest

from pulsechat.application.actions import PriorityAction
from pulsechat.domain.entities import Priority, PriorityDetection


@pytest.fixture
def detector() -> AsyncMock:
    detector = AsyncMock()
    detector.detect.return_value = PriorityDetection(
        is_priority=True, level="urgent", reason="Production is down"
    )
    return detector


@pytest.fixture
def repository() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def action(detector: AsyncMock, repository: AsyncMock) -> PriorityAction:
    return PriorityAction(detector, repository)


class TestPriorityAction:
    """Tests for PriorityAction.handle."""

    def test_name(self, action: PriorityAction) -> None:
        assert action.name == "priority"

    async def test_priority_written_to_chat_and_participants(
        self, action: PriorityAction, repository: AsyncMock, context_factory
    ) -> None:
        context = context_factory(
            text="URGENT: prod is down, need help ASAP",
            participants=[("u1", "Alice"), ("u2", "Bob"), ("u3", "Carol")],
        )

        result = await action.handle(context)

        expected = Priority(
            message_id="m1",
            level="urgent",
            reason="Production is down",
            timestamp=context.current_message.created_at,
        )
        assert result.success is True
        assert result.data == {"priority": "urgent", "reason": "Production is down"}
        repository.append_to_chat.assert_awaited_once_with("chat1", [expected])
        assert repository.append_to_user.await_count == 3
        written = {
            call.args[0]: call.args[1]
            for call in repository.append_to_user.await_args_list
        }
        assert written == {
            user_id: [expected.with_chat("chat1")] for user_id in ("u1", "u2", "u3")
        }

    async def test_projections_agree(
        self, action: PriorityAction, repository: AsyncMock, context
    ) -> None:
        """Every user copy equals the chat copy plus chat_id."""
        await action.handle(context)

        chat_copy = repository.append_to_chat.await_args.args[1][0]
        for call in repository.append_to_user.await_args_list:
            user_copy = call.args[1][0]
            assert user_copy.chat_id == "chat1"
            assert user_copy.with_chat(None) == chat_copy  # type: ignore[arg-type]

    async def test_default_reason(
        self,
        action: PriorityAction,
        detector: AsyncMock,
        repository: AsyncMock,
        context,
    ) -> None:
        detector.detect.return_value = PriorityDetection(is_priority=True, level="high")

        await action.handle(context)

        written = repository.append_to_chat.await_args.args[1][0]
        assert written.reason == "Priority detected"

    async def test_not_priority(
        self,
        action: PriorityAction,
        detector: AsyncMock,
        repository: AsyncMock,
        context,
    ) -> None:
        detector.detect.return_value = PriorityDetection(is_priority=False)

        result = await action.handle(context)

        assert result.success is True
        assert result.data == {"is_priority": False}
        repository.append_to_chat.assert_not_awaited()
        repository.append_to_user.assert_not_awaited()

    async def test_priority_without_level_is_ignored(
        self,
        action: PriorityAction,
        detector: AsyncMock,
        repository: AsyncMock,
        context,
    ) -> None:
        detector.detect.return_value = PriorityDetection(is_priority=True)

        result = await action.handle(context)

        assert result.data == {"is_priority": False}
        repository.append_to_chat.assert_not_awaited()

    @pytest.mark.parametrize("text", ["", "   "])
    async def test_blank_text_skipped(
        self,
        action: PriorityAction,
        detector: AsyncMock,
        repository: AsyncMock,
        context_factory,
        text: str,
    ) -> None:
        result = await action.handle(context_factory(text=text))

        assert result.success is True
        assert result.data == {"skipped": "no text content"}
        detector.detect.assert_not_awaited()
        repository.append_to_chat.assert_not_awaited()

    async def test_detector_receives_history(
        self, action: PriorityAction, detector: AsyncMock, context_factory
    ) -> None:
        context = context_factory(text="any update?", previous=["prod is down"])

        await action.handle(context)

        detector.detect.assert_awaited_once_with(
            context.previous_messages, context.current_message
        )

    async def test_write_error_becomes_failed_result(
        self, action: PriorityAction, repository: AsyncMock, context
    ) -> None:
        repository.append_to_chat.side_effect = RuntimeError("database is locked")

        result = await action.handle(context)

        assert result.success is False
        assert result.action_name == "priority"
        assert result.error == "database is locked"
