"""Module providing a base class for string enums with docstrings."""

from enum import StrEnum
from typing import Self


class StrEnumWithDoc(StrEnum):
    """Base class for string enums with docstrings.

    Implementation based on this article: https://guicommits.com/add-docstrings-python-enum-members/
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj

    @classmethod
    def parse(cls, text: str) -> Self:
        """Look up a member by value, ignoring case and surrounding whitespace.

        Args:
            text: The textual value, e.g. ``"Directed"`` or ``" qasm "``.

        Returns:
            The matching member.

        Raises:
            ValueError: If no member has the given value.

        """
        normalized = text.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(member.value for member in cls)
        msg = f"Unknown {cls.__name__} '{text}'. Expected one of: {choices}"
        raise ValueError(msg)

    @classmethod
    def choices(cls) -> list[str]:
        """Return all member values in declaration order."""
        return [member.value for member in cls]
