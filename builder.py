"""
builder.py

Mutable construction of a constraint system.

The builder starts with the constant wire 0 registered, hands out WireID and
LabelID values in lockstep, checks that constraints only reference allocated
wires, and finally converts itself once into an immutable R1CS.
Constraints are not checked for satisfiability here; see validator.py.
"""

import logging
from typing import List, Optional, Tuple

from config import DEFAULT_CONFIG
from errors import BuilderFinalizedError, StructuralError, UnallocatedWireError
from finite_field import FieldParams, resolve_field
from linear_combination import LinearCombination, Term
from r1cs import R1CS, Constraint
from wires import CONSTANT_LABEL, CONSTANT_WIRE, LabelID, Visibility, Wire, WireID

logger = logging.getLogger(__name__)


class R1CSBuilder:
    """
    Incremental R1CS construction API.

    Usage:
        b = R1CSBuilder(modulus)
        x, _ = b.add_wire(Visibility.PUBLIC_INPUT)
        b.add_constraint(b.linear_combination((x, 1)), b.linear_combination((x, 1)),
                         b.linear_combination((b.constant_wire, 1)))
        r1cs = b.finalize()
    """

    def __init__(self, modulus: Optional[int] = None, field: Optional[FieldParams] = None):
        """
        :param modulus: prime modulus; ignored when field is given. Defaults to
                        DEFAULT_CONFIG["default_modulus"] (BN254).
        :param field: ready-made FieldParams
        """
        if field is None:
            field = resolve_field(modulus if modulus is not None else DEFAULT_CONFIG["default_modulus"])
        self._field = field
        self._wires: Optional[List[Wire]] = [Wire(CONSTANT_WIRE, CONSTANT_LABEL, Visibility.CONSTANT)]
        self._constraints: Optional[List[Constraint]] = []
        self._next_wire = 1
        self._next_label = 1

    def _check_open(self) -> None:
        if self._wires is None:
            raise BuilderFinalizedError("builder has already been finalized")

    @property
    def field(self) -> FieldParams:
        return self._field

    @property
    def constant_wire(self) -> WireID:
        return CONSTANT_WIRE

    @property
    def is_finalized(self) -> bool:
        return self._wires is None

    @property
    def is_empty(self) -> bool:
        """True while only the constant wire exists and no constraint was added."""
        self._check_open()
        return len(self._wires) == 1 and not self._constraints

    @property
    def wire_count(self) -> int:
        self._check_open()
        return len(self._wires)

    @property
    def label_count(self) -> int:
        self._check_open()
        return self._next_label

    @property
    def constraint_count(self) -> int:
        self._check_open()
        return len(self._constraints)

    @property
    def next_label(self) -> LabelID:
        self._check_open()
        return LabelID(self._next_label)

    def add_wire(self, visibility: Visibility) -> Tuple[WireID, LabelID]:
        """
        Allocate the next wire and its label.

        :param visibility: PUBLIC_INPUT, PUBLIC_OUTPUT or PRIVATE
        :return: (WireID, LabelID) of the new wire
        """
        self._check_open()
        visibility = Visibility(visibility)
        if visibility is Visibility.CONSTANT:
            raise ValueError("only wire 0 can be the constant wire")
        wire_id = WireID(self._next_wire)
        label_id = LabelID(self._next_label)
        self._wires.append(Wire(wire_id, label_id, visibility))
        self._next_wire += 1
        self._next_label += 1
        return wire_id, label_id

    def add_wires(self, visibility: Visibility, count: int) -> List[WireID]:
        """Allocate count wires of the same visibility; returns their ids."""
        return [self.add_wire(visibility)[0] for _ in range(count)]

    def linear_combination(self, *terms: Term) -> LinearCombination:
        """
        Convenience: LinearCombination over this builder's field.
        """
        return LinearCombination(self._field, terms)

    def add_constraint(self, a: LinearCombination, b: LinearCombination, c: LinearCombination) -> int:
        """
        Append the constraint a * b = c.

        The combinations are copied, so later inserts by the caller do not
        affect the stored constraint.

        :return: index of the new constraint
        :raises UnallocatedWireError: a term refers to a wire not allocated here
        """
        self._check_open()
        for name, lc in (("A", a), ("B", b), ("C", c)):
            if not isinstance(lc, LinearCombination):
                raise TypeError(f"{name} must be a LinearCombination, got {type(lc).__name__}")
            if lc.field != self._field:
                raise StructuralError(
                    f"{name} is over GF({lc.field.modulus}) but the builder uses GF({self._field.modulus})")
            for wire in lc.wires:
                if wire.index >= self._next_wire:
                    raise UnallocatedWireError(wire, self._next_wire)
        self._constraints.append(Constraint(a.copy(), b.copy(), c.copy()))
        return len(self._constraints) - 1

    def finalize(self) -> R1CS:
        """
        Produce the immutable R1CS. The builder cannot be used afterwards.
        """
        self._check_open()
        wires, constraints = self._wires, self._constraints
        self._wires = None
        self._constraints = None
        r1cs = R1CS(self._field, wires, constraints)
        logger.debug("finalized R1CS with %d wires and %d constraints", r1cs.wire_count, r1cs.constraint_count)
        return r1cs
