"""Adapter from message-created trigger payloads to domain events."""

import logging
from typing import Any

from pulsechat.domain.entities import (
    CollectionType,
    Event,
    EventType,
    MessageData,
    ProcessMessageParams,
)

logger = logging.getLogger(__name__)


class InvalidTriggerPayloadError(ValueError):
    """Trigger payload is missing required fields or has invalid values."""


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidTriggerPayloadError(f"Missing or invalid field: {key}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _created_at(data: dict[str, Any]) -> int | None:
    value = data.get("createdAt")
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def parse_trigger_payload(payload: dict[str, Any]) -> ProcessMessageParams:
    """Convert a trigger payload into ProcessMessageParams.

    Expected shape::

        {
            "messageData": {"senderId": ..., "text": ..., "imageUrl": ...,
                            "createdAt": ..., "status": ...},
            "messageId": ...,
            "chatId": ...,
            "collectionType": "chats" | "groups",
        }

    A non-numeric ``createdAt`` is dropped and later replaced by the
    processing time.

    Args:
        payload: Decoded JSON payload.

    Returns:
        ProcessMessageParams.

    Raises:
        InvalidTriggerPayloadError: If required fields are missing or invalid.
    """
    message_data = payload.get("messageData")
    if not isinstance(message_data, dict):
        raise InvalidTriggerPayloadError("Missing or invalid field: messageData")

    collection_value = _require_str(payload, "collectionType")
    try:
        collection_type = CollectionType(collection_value)
    except ValueError as e:
        raise InvalidTriggerPayloadError(
            f"Unknown collectionType: {collection_value}"
        ) from e

    created_at = _created_at(message_data)
    if created_at is None:
        logger.debug("Trigger payload has no numeric createdAt")

    return ProcessMessageParams(
        message_data=MessageData(
            sender_id=_require_str(message_data, "senderId"),
            text=_optional_str(message_data, "text"),
            image_url=_optional_str(message_data, "imageUrl"),
            created_at=created_at,
            status=_optional_str(message_data, "status"),
        ),
        message_id=_require_str(payload, "messageId"),
        chat_id=_require_str(payload, "chatId"),
        collection_type=collection_type,
    )


def build_new_message_event(payload: dict[str, Any]) -> Event:
    """Build a NEW_MESSAGE event from a trigger payload.

    Raises:
        InvalidTriggerPayloadError: If the payload is invalid.
    """
    params = parse_trigger_payload(payload)
    return Event(type=EventType.NEW_MESSAGE, payload={"params": params})
