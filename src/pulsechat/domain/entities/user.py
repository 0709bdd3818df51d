"""User entity."""

from dataclasses import dataclass

UNKNOWN_USER_NAME = "Unknown"


@dataclass(frozen=True)
class User:
    """User profile.

    Attributes:
        id: User ID (uid).
        display_name: Display name set by the user (optional).
        email: Email address (optional).
    """

    id: str
    display_name: str | None = None
    email: str | None = None

    @property
    def resolved_name(self) -> str:
        """Name shown to the models.

        Falls back from display name to the local part of the email
        address, then to "Unknown".
        """
        if self.display_name:
            return self.display_name
        if self.email:
            local_part = self.email.split("@")[0]
            if local_part:
                return local_part
        return UNKNOWN_USER_NAME
