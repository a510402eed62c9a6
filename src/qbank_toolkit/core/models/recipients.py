"""
Module: recipients

Purpose:
    Roster entries - the external identity a generated exam is attached to.

Key Classes:
    - Recipient: Display name plus external identifier
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Recipient:
    """
    Exam recipient (immutable).

    Attributes:
        name: Display name
        id: External identifier (student number, employee id, ...)

    Example:
        >>> Recipient("Ada", "2024-001").is_anonymous
        False
        >>> Recipient.anonymous().is_anonymous
        True
    """

    name: str
    id: str

    @classmethod
    def anonymous(cls) -> Recipient:
        """Synthetic recipient used for self-study and single sessions."""
        return cls(name="", id="")

    @property
    def is_anonymous(self) -> bool:
        return not self.name and not self.id

    def to_dict(self) -> dict:
        return {"name": self.name, "id": self.id}

    @classmethod
    def from_dict(cls, data: dict) -> Recipient:
        return cls(name=str(data.get("name", "")), id=str(data.get("id", "")))
