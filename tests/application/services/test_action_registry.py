"""Tests for ActionRegistry."""

from unittest.mock import MagicMock

from pulsechat.application.services import ActionRegistry, create_action_registry


def create_handler(name: str) -> MagicMock:
    handler = MagicMock()
    handler.name = name
    return handler


class TestActionRegistry:
    """Tests for ActionRegistry."""

    def test_register_and_get(self) -> None:
        registry = ActionRegistry()
        handler = create_handler("priority")

        registry.register(handler)

        assert registry.get("priority") is handler
        assert registry.has("priority")
        assert registry.names() == ["priority"]

    def test_unknown(self) -> None:
        registry = ActionRegistry()

        assert registry.get("summarize") is None
        assert not registry.has("summarize")

    def test_register_replaces_same_name(self) -> None:
        registry = ActionRegistry()
        first = create_handler("calendar")
        second = create_handler("calendar")

        registry.register(first)
        registry.register(second)

        assert registry.get("calendar") is second
        assert registry.names() == ["calendar"]


class TestCreateActionRegistry:
    """Tests for create_action_registry."""

    def test_registers_all(self) -> None:
        registry = create_action_registry(
            create_handler("priority"), create_handler("calendar")
        )

        assert registry.names() == ["priority", "calendar"]
