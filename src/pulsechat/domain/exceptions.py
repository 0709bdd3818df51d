"""Domain exceptions."""


class ChatNotFoundError(Exception):
    """The chat or group a message belongs to does not exist.

    Treated as a misconfiguration: the message is left unprocessed
    and not retried.
    """

    def __init__(self, chat_id: str, collection_type: str = "", message: str = "") -> None:
        """Initialize.

        Args:
            chat_id: ID of the missing chat or group.
            collection_type: Collection that was searched.
            message: Error message (optional).
        """
        self.chat_id = chat_id
        self.collection_type = collection_type
        super().__init__(message or f"Chat/group {chat_id} not found")


class AIUnavailableError(Exception):
    """No AI model is configured for an operation that requires one."""
