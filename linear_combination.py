"""
linear_combination.py

Sparse linear combination sum(c_i * w_i) over a prime field.

Terms are kept as a list of (WireID, coefficient) pairs in strictly ascending
WireID order. This order is the canonical form used for equality and for the
binary encoding. Inserting a second term for a wire adds the coefficients mod p;
a merged coefficient that reaches 0 stays as an explicit zero term.
"""

from bisect import bisect_left
from functools import total_ordering
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from errors import MissingWitnessError
from finite_field import FieldParams
from wires import WireID

Term = Tuple[WireID, int]


@total_ordering
class LinearCombination:
    """
    Canonical sparse map WireID -> coefficient in GF(p).
    """
    __slots__ = ("_field", "_wires", "_coeffs", "_frozen")

    def __init__(self, field: FieldParams, terms: Optional[Iterable[Term]] = None):
        self._field = field
        # parallel lists, both ordered by wire
        self._wires: List[WireID] = []
        self._coeffs: List[int] = []
        self._frozen = False
        if terms is not None:
            for wire, coeff in terms:
                self.insert(wire, coeff)

    @property
    def field(self) -> FieldParams:
        return self._field

    @property
    def terms(self) -> Tuple[Term, ...]:
        return tuple(zip(self._wires, self._coeffs))

    @property
    def wires(self) -> Tuple[WireID, ...]:
        return tuple(self._wires)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def insert(self, wire: WireID, coefficient: int) -> None:
        """
        Add coefficient * wire, merging with an existing term for the same wire.

        :param wire: wire the term refers to
        :param coefficient: any int (not bool); reduced mod p, so -1 becomes p - 1
        """
        if self._frozen:
            raise TypeError("cannot insert into a frozen linear combination")
        if not isinstance(wire, WireID):
            raise TypeError(f"expected WireID, got {type(wire).__name__}")
        if isinstance(coefficient, bool) or not isinstance(coefficient, int):
            raise TypeError(f"coefficient must be an int, got {type(coefficient).__name__}")
        coeff = self._field.reduce(coefficient)
        pos = bisect_left(self._wires, wire)
        if pos < len(self._wires) and self._wires[pos] == wire:
            self._coeffs[pos] = self._field.add(self._coeffs[pos], coeff)
        else:
            self._wires.insert(pos, wire)
            self._coeffs.insert(pos, coeff)

    def coefficient(self, wire: WireID) -> Optional[int]:
        """Coefficient of wire, or None if the wire has no term."""
        pos = bisect_left(self._wires, wire)
        if pos < len(self._wires) and self._wires[pos] == wire:
            return self._coeffs[pos]
        return None

    def evaluate(self, witness: Mapping[WireID, int]) -> int:
        """
        Compute sum(c_i * witness[w_i]) mod p.

        :param witness: mapping WireID -> field element
        :raises MissingWitnessError: if a referenced wire has no value
        """
        f = self._field
        acc = 0
        for wire, coeff in zip(self._wires, self._coeffs):
            try:
                value = witness[wire]
            except KeyError:
                raise MissingWitnessError(wire) from None
            acc = f.add(acc, f.mul(coeff, value))
        return acc

    def copy(self) -> "LinearCombination":
        out = LinearCombination(self._field)
        out._wires = list(self._wires)
        out._coeffs = list(self._coeffs)
        return out

    def frozen_copy(self) -> "LinearCombination":
        """
        Read-only copy; used for combinations owned by an R1CS snapshot.
        """
        if self._frozen:
            return self
        out = self.copy()
        out._frozen = True
        return out

    def __len__(self) -> int:
        return len(self._wires)

    def __iter__(self) -> Iterator[Term]:
        return iter(zip(self._wires, self._coeffs))

    def __bool__(self) -> bool:
        return bool(self._wires)

    def __eq__(self, other):
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return (self._field == other._field
                and self._wires == other._wires
                and self._coeffs == other._coeffs)

    def __lt__(self, other):
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return self.terms < other.terms

    __hash__ = None

    def __repr__(self):
        body = ", ".join(f"({w.index}, {c})" for w, c in self)
        return f"LinearCombination([{body}])"
