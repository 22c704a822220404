from enum import Enum


class Gender(str, Enum):
    """Genders a user record may carry; always persisted upper-case."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str | None) -> "Gender | None":
        """Case-insensitive lookup; ``None`` for anything unrecognized."""
        if not isinstance(value, str) or not value.strip():
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None
