"""
validator.py

Checks a witness against every constraint of an R1CS.

For each constraint i the validator computes a = A.w, b = B.w, c = C.w (mod p)
and records a ConstraintViolation when a * b != c. All constraints are scanned
and every violation is collected into one ValidationReport.

A witness that lacks a value for a referenced wire is malformed rather than
unsatisfying: MissingWitnessError is raised at once.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from errors import RangeError, StructuralError
from r1cs import R1CS
from wires import CONSTANT_WIRE, WireID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintViolation:
    index: int
    a: int
    b: int
    c: int

    def to_dict(self) -> Dict[str, Any]:
        # field values as strings: JSON consumers often cannot hold 254-bit ints
        return {"index": self.index, "a": str(self.a), "b": str(self.b), "c": str(self.c)}


@dataclass
class ValidationReport:
    constraint_count: int
    violations: List[ConstraintViolation] = field(default_factory=list)

    @property
    def is_satisfied(self) -> bool:
        return not self.violations

    @property
    def violated_indices(self) -> List[int]:
        return [v.index for v in self.violations]

    @property
    def satisfied_count(self) -> int:
        return self.constraint_count - len(self.violations)

    def __bool__(self) -> bool:
        return self.is_satisfied

    def to_dict(self) -> Dict[str, Any]:
        return {
            "satisfied": self.is_satisfied,
            "constraint_count": self.constraint_count,
            "violation_count": len(self.violations),
            "violations": [v.to_dict() for v in self.violations],
        }


class WitnessValidator:
    """
    Validator bound to one R1CS. Holds no mutable state, so one instance may be
    shared between threads.
    """

    def __init__(self, r1cs: R1CS):
        self.r1cs = r1cs

    def _prepare(self, witness: Mapping[WireID, int]) -> Dict[WireID, int]:
        """
        Check value ranges and supply the constant wire.
        """
        f = self.r1cs.field
        full: Dict[WireID, int] = {}
        for wire, value in witness.items():
            if not isinstance(wire, WireID):
                raise TypeError(f"witness keys must be WireID, got {type(wire).__name__}")
            if isinstance(value, bool) or not isinstance(value, int):
                raise RangeError(f"wire {wire.index}: value must be an int, got {type(value).__name__}")
            if not f.is_element(value):
                raise RangeError(f"wire {wire.index}: {value} is outside [0, {f.modulus})")
            full[wire] = value
        one = full.setdefault(CONSTANT_WIRE, 1)
        if one != 1:
            raise StructuralError(f"constant wire 0 must be 1, got {one}")
        return full

    def validate(self, witness: Mapping[WireID, int]) -> ValidationReport:
        """
        Evaluate every constraint against witness.

        :param witness: mapping WireID -> field element; wire 0 may be omitted
        :return: report listing every unsatisfied constraint
        :raises MissingWitnessError: a referenced wire has no value
        :raises RangeError: a value is negative or >= p
        """
        f = self.r1cs.field
        w = self._prepare(witness)
        report = ValidationReport(constraint_count=self.r1cs.constraint_count)
        for i, constraint in enumerate(self.r1cs.constraints):
            a = constraint.a.evaluate(w)
            b = constraint.b.evaluate(w)
            c = constraint.c.evaluate(w)
            if f.mul(a, b) != c:
                report.violations.append(ConstraintViolation(i, a, b, c))
        if report.violations:
            logger.info("witness violates %d of %d constraints", len(report.violations), report.constraint_count)
        else:
            logger.debug("witness satisfies all %d constraints", report.constraint_count)
        return report


def validate(r1cs: R1CS, witness: Mapping[WireID, int]) -> ValidationReport:
    return WitnessValidator(r1cs).validate(witness)
