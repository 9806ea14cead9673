"""
Minimal `StrEnum` so that code tables compare and format as their string values.
"""

from enum import Enum


class StrEnum(str, Enum):
    """
    Enum whose members are also `str` instances.
    """

    def __str__(self) -> str:
        return str(self.value)
