"""
finite_field.py

Prime-field parameters for constraint coefficients and witness values.

Classes:
 - FieldParams: the working prime modulus p, its fixed encoding width and the
   modular helpers (reduce/add/mul) used by linear combinations and the
   witness validator.

Values are plain Python ints (arbitrary precision), always kept in [0, p).
"""

from typing import Optional

from sympy import isprime

# Scalar field of the BN254 (alt_bn128) curve, the default for circom/snarkjs.
BN254_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617
# Scalar field of BLS12-381.
BLS12_381_SCALAR_FIELD = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001


def byte_width_for(modulus: int) -> int:
    """
    Minimum number of bytes able to hold any value in [0, modulus).

    :param modulus: field modulus p (> 1)
    :return: ceil(bit_length(p) / 8)
    """
    if modulus < 2:
        raise ValueError(f"modulus must be >= 2, got {modulus}")
    return (int(modulus).bit_length() + 7) // 8


class FieldParams:
    """
    Describes GF(p). Instances are immutable and compare by modulus.
    """
    __slots__ = ("_p", "_width")

    def __init__(self, modulus: int):
        modulus = int(modulus)
        if modulus < 2:
            raise ValueError(f"modulus must be >= 2, got {modulus}")
        if not isprime(modulus):
            raise ValueError(f"modulus {modulus} is not prime")
        self._p = modulus
        self._width = byte_width_for(modulus)

    @property
    def modulus(self) -> int:
        return self._p

    @property
    def byte_width(self) -> int:
        return self._width

    def reduce(self, value: int) -> int:
        return int(value) % self._p

    def is_element(self, value: int) -> bool:
        """True if value is already a canonical field element."""
        return 0 <= value < self._p

    def add(self, a: int, b: int) -> int:
        return (a + b) % self._p

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self._p

    def to_bytes(self, value: int) -> bytes:
        """
        Fixed-width big-endian encoding of a field element.
        """
        if not self.is_element(value):
            raise ValueError(f"value {value} is not an element of GF({self._p})")
        return int(value).to_bytes(self._width, "big")

    def from_bytes(self, data: bytes) -> int:
        """
        Decode a fixed-width big-endian field element; rejects values >= p.
        """
        if len(data) != self._width:
            raise ValueError(f"expected {self._width} bytes, got {len(data)}")
        value = int.from_bytes(data, "big")
        if value >= self._p:
            raise ValueError(f"value {value} is not below the modulus {self._p}")
        return value

    def __eq__(self, other):
        if isinstance(other, FieldParams):
            return self._p == other._p
        return NotImplemented

    def __hash__(self):
        return hash(self._p)

    def __repr__(self):
        return f"FieldParams(p={self._p}, byte_width={self._width})"


def resolve_field(modulus: Optional[int] = None) -> FieldParams:
    """
    Build FieldParams for modulus, falling back to the BN254 scalar field.
    """
    if modulus is None:
        modulus = BN254_SCALAR_FIELD
    return FieldParams(modulus)
