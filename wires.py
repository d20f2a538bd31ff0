"""
wires.py

Identifier types and wire records.

WireID and LabelID are separate frozen dataclasses rather than ints so the two
can never be mixed up with each other or with a plain integer: WireID(1) is not
equal to LabelID(1) nor to 1.
"""

from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True, order=True)
class WireID:
    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"WireID index must be an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValueError(f"WireID index must be non-negative, got {self.index}")

    @property
    def is_constant(self) -> bool:
        return self.index == 0

    def __repr__(self):
        return f"WireID({self.index})"


@dataclass(frozen=True, order=True)
class LabelID:
    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"LabelID index must be an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValueError(f"LabelID index must be non-negative, got {self.index}")

    def __repr__(self):
        return f"LabelID({self.index})"


CONSTANT_WIRE = WireID(0)
CONSTANT_LABEL = LabelID(0)


class Visibility(IntEnum):
    """Wire class. The integer values are the tags used by the binary format."""
    CONSTANT = 0
    PUBLIC_INPUT = 1
    PUBLIC_OUTPUT = 2
    PRIVATE = 3


@dataclass(frozen=True)
class Wire:
    wire_id: WireID
    label_id: LabelID
    visibility: Visibility

    def __repr__(self):
        return f"Wire({self.wire_id.index}, label={self.label_id.index}, {self.visibility.name.lower()})"
