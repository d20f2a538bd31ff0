"""
r1cs.py

Constraint triples and the immutable R1CS snapshot.

An R1CS is only created by R1CSBuilder.finalize() or codec.decode(); it has no
mutating methods and its linear combinations are frozen copies, so one instance
can be shared by encoders and validators running at the same time.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from finite_field import FieldParams
from linear_combination import LinearCombination
from wires import CONSTANT_LABEL, CONSTANT_WIRE, LabelID, Visibility, Wire, WireID


@dataclass(frozen=True)
class Constraint:
    """
    Asserts (a . w) * (b . w) == (c . w) mod p.
    """
    a: LinearCombination
    b: LinearCombination
    c: LinearCombination

    def parts(self) -> Tuple[LinearCombination, LinearCombination, LinearCombination]:
        return self.a, self.b, self.c

    def wires(self) -> Iterator[WireID]:
        """Every wire referenced by A, B or C (may repeat)."""
        for lc in self.parts():
            yield from lc.wires


class R1CS:
    """
    Frozen constraint system: wires in allocation order, constraints in insertion
    order, the field in effect and the derived counters.
    """

    def __init__(self, field: FieldParams, wires: Iterable[Wire], constraints: Iterable[Constraint]):
        self._field = field
        self._wires: Tuple[Wire, ...] = tuple(wires)
        self._constraints: Tuple[Constraint, ...] = tuple(
            Constraint(c.a.frozen_copy(), c.b.frozen_copy(), c.c.frozen_copy()) for c in constraints
        )
        if not self._wires or self._wires[0] != Wire(CONSTANT_WIRE, CONSTANT_LABEL, Visibility.CONSTANT):
            raise ValueError("wire 0 must be the constant wire")
        counts: Dict[Visibility, int] = {v: 0 for v in Visibility}
        for w in self._wires:
            counts[w.visibility] += 1
        if counts[Visibility.CONSTANT] != 1:
            raise ValueError("exactly one wire may be the constant wire")
        self._counts = counts

    @property
    def field(self) -> FieldParams:
        return self._field

    @property
    def modulus(self) -> int:
        return self._field.modulus

    @property
    def field_byte_width(self) -> int:
        return self._field.byte_width

    @property
    def wires(self) -> Tuple[Wire, ...]:
        return self._wires

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return self._constraints

    @property
    def labels(self) -> Tuple[LabelID, ...]:
        return tuple(w.label_id for w in self._wires)

    @property
    def wire_count(self) -> int:
        return len(self._wires)

    @property
    def label_count(self) -> int:
        return len(self._wires)

    @property
    def constraint_count(self) -> int:
        return len(self._constraints)

    @property
    def num_public_inputs(self) -> int:
        return self._counts[Visibility.PUBLIC_INPUT]

    @property
    def num_public_outputs(self) -> int:
        return self._counts[Visibility.PUBLIC_OUTPUT]

    @property
    def num_private(self) -> int:
        return self._counts[Visibility.PRIVATE]

    def wire(self, wire_id: WireID) -> Wire:
        """
        Look up a wire record; raises KeyError for an unknown wire.
        """
        if not 0 <= wire_id.index < len(self._wires):
            raise KeyError(wire_id)
        return self._wires[wire_id.index]

    def has_wire(self, wire_id: WireID) -> bool:
        return 0 <= wire_id.index < len(self._wires)

    def __eq__(self, other):
        if not isinstance(other, R1CS):
            return NotImplemented
        return (self._field == other._field
                and self._wires == other._wires
                and self._constraints == other._constraints)

    __hash__ = None

    def __repr__(self):
        return (f"R1CS(p={self.modulus}, wires={self.wire_count}, "
                f"public_inputs={self.num_public_inputs}, public_outputs={self.num_public_outputs}, "
                f"private={self.num_private}, constraints={self.constraint_count})")
