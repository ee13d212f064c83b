"""Domain model for the user profile shown by the dashboard."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Profile:
    """User profile data."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    bio: str | None = None

    def display_name(self, fallback: str = "Usuário") -> str:
        """Return the name to greet the user with.

        Args:
            fallback: Name used when the profile has no name at all.

        Returns:
            str: Full name, else first and last name, else first name.
        """
        if self.full_name:
            return self.full_name
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name or fallback


__all__ = ["Profile"]
