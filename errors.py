"""
errors.py

Exception hierarchy shared by the builder, codec, witness loader and validator.

 - StructuralError: a reference to a wire that does not exist (during build) or
   a witness that lacks a value for a referenced wire.
 - RangeError: a field value outside [0, p).
 - FormatError: a byte stream that is not a valid encoded R1CS.
 - BuilderFinalizedError: a builder used after finalize().

Unsatisfied constraints are not errors; they are reported by the validator.
"""


class R1CSError(Exception):
    """Base class for all errors raised by this package."""


class StructuralError(R1CSError):
    pass


class UnallocatedWireError(StructuralError):
    """A constraint references a wire the builder never allocated."""

    def __init__(self, wire, allocated: int):
        self.wire = wire
        self.allocated = allocated
        super().__init__(f"wire {wire.index} was never allocated (allocated wires: 0..{allocated - 1})")


class MissingWitnessError(StructuralError):
    """The witness has no value for a wire referenced by a constraint."""

    def __init__(self, wire):
        self.wire = wire
        super().__init__(f"witness has no value for wire {wire.index}")


class RangeError(R1CSError, ValueError):
    pass


class FormatError(R1CSError, ValueError):
    pass


class BuilderFinalizedError(R1CSError, RuntimeError):
    pass
