"""
codec.py

Binary serialization of an R1CS.

Layout (all integers big-endian):

    magic            4 bytes   b"r1cs"
    version          u32
    field_width      u32       ceil(bitlen(p) / 8)
    modulus          field_width bytes
    wire_count       u32       includes the constant wire
    public_inputs    u32
    public_outputs   u32
    private          u32
    constraint_count u32
    label_count      u64
    wires            wire_count x (visibility u8, label u64)
    constraints      constraint_count x [A, B, C], each combination as
                     term_count u32, then term_count x (wire u32, coefficient)

Coefficients are always field_width bytes so sizes can be computed up front.
Wires and constraints are written in stored order; terms in ascending wire order.
"""

import logging
import struct
from pathlib import Path
from typing import List, Tuple

from errors import FormatError
from finite_field import FieldParams, byte_width_for
from linear_combination import LinearCombination
from r1cs import R1CS, Constraint
from utils import write_bytes_atomic
from wires import LabelID, Visibility, Wire, WireID

logger = logging.getLogger(__name__)

MAGIC = b"r1cs"
VERSION = 1

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_COUNTS = struct.Struct(">IIIII")
_WIRE = struct.Struct(">BQ")

U32_MAX = 0xFFFFFFFF


def _encode_lc(lc: LinearCombination, field: FieldParams, out: List[bytes]) -> None:
    out.append(_U32.pack(len(lc)))
    for wire, coeff in lc:
        out.append(_U32.pack(wire.index))
        out.append(field.to_bytes(coeff))


def encoded_size(r1cs: R1CS) -> int:
    """
    Exact length of encode(r1cs), computed without encoding.
    """
    width = r1cs.field_byte_width
    size = 4 + 4 + 4 + width + _COUNTS.size + 8
    size += r1cs.wire_count * _WIRE.size
    for c in r1cs.constraints:
        for lc in c.parts():
            size += 4 + len(lc) * (4 + width)
    return size


def encode(r1cs: R1CS) -> bytes:
    """
    Serialize r1cs to bytes.
    """
    field = r1cs.field
    if r1cs.wire_count > U32_MAX or r1cs.constraint_count > U32_MAX:
        raise ValueError("R1CS is too large for the binary format")
    out: List[bytes] = [
        MAGIC,
        _U32.pack(VERSION),
        _U32.pack(field.byte_width),
        field.modulus.to_bytes(field.byte_width, "big"),
        _COUNTS.pack(r1cs.wire_count, r1cs.num_public_inputs, r1cs.num_public_outputs,
                     r1cs.num_private, r1cs.constraint_count),
        _U64.pack(r1cs.label_count),
    ]
    for w in r1cs.wires:
        out.append(_WIRE.pack(int(w.visibility), w.label_id.index))
    for c in r1cs.constraints:
        for lc in c.parts():
            _encode_lc(lc, field, out)
    data = b"".join(out)
    logger.debug("encoded R1CS: %d wires, %d constraints, %d bytes", r1cs.wire_count, r1cs.constraint_count, len(data))
    return data


class _Reader:
    """
    Bounds-checked cursor over the input bytes.
    """

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, n: int, what: str) -> bytes:
        if n > self.remaining():
            raise FormatError(
                f"truncated input reading {what}: need {n} bytes at offset {self.pos}, have {self.remaining()}")
        chunk = bytes(self.data[self.pos:self.pos + n])
        self.pos += n
        return chunk

    def unpack(self, st: struct.Struct, what: str) -> Tuple:
        return st.unpack(self.take(st.size, what))


def _decode_lc(reader: _Reader, field: FieldParams, wire_count: int, where: str) -> LinearCombination:
    (nterms,) = reader.unpack(_U32, f"{where} term count")
    # each term needs at least 4 + width bytes; reject impossible counts before looping
    if nterms * (4 + field.byte_width) > reader.remaining():
        raise FormatError(f"{where} declares {nterms} terms but only {reader.remaining()} bytes remain")
    lc = LinearCombination(field)
    prev = -1
    for _ in range(nterms):
        (wire_idx,) = reader.unpack(_U32, f"{where} wire id")
        raw = reader.take(field.byte_width, f"{where} coefficient")
        if wire_idx <= prev:
            raise FormatError(f"{where} terms are not in strictly ascending wire order ({wire_idx} after {prev})")
        if wire_idx >= wire_count:
            raise FormatError(f"{where} references wire {wire_idx} but only {wire_count} wires exist")
        try:
            coeff = field.from_bytes(raw)
        except ValueError as e:
            raise FormatError(f"{where} coefficient for wire {wire_idx}: {e}") from None
        lc.insert(WireID(wire_idx), coeff)
        prev = wire_idx
    return lc


def decode(data: bytes) -> R1CS:
    """
    Parse bytes produced by encode().

    :raises FormatError: on any malformed input; no partial result is returned
    """
    reader = _Reader(data)
    magic = reader.take(4, "magic")
    if magic != MAGIC:
        raise FormatError(f"bad magic {magic!r}, expected {MAGIC!r}")
    (version,) = reader.unpack(_U32, "version")
    if version != VERSION:
        raise FormatError(f"unsupported format version {version}")
    (width,) = reader.unpack(_U32, "field width")
    if width == 0:
        raise FormatError("field width must be positive")
    modulus = int.from_bytes(reader.take(width, "modulus"), "big")
    if modulus < 2:
        raise FormatError(f"invalid modulus {modulus}")
    if byte_width_for(modulus) != width:
        raise FormatError(
            f"declared field width {width} does not match modulus width {byte_width_for(modulus)}")
    try:
        field = FieldParams(modulus)
    except ValueError as e:
        raise FormatError(str(e)) from None

    wire_count, n_pub_in, n_pub_out, n_priv, n_constraints = reader.unpack(_COUNTS, "header counts")
    (label_count,) = reader.unpack(_U64, "label count")
    if wire_count < 1:
        raise FormatError("wire count must include the constant wire")
    if n_pub_in + n_pub_out + n_priv + 1 != wire_count:
        raise FormatError(
            f"visibility counts {n_pub_in}+{n_pub_out}+{n_priv}+1 do not add up to wire count {wire_count}")
    if label_count != wire_count:
        raise FormatError(f"label count {label_count} differs from wire count {wire_count}")
    if wire_count * _WIRE.size > reader.remaining():
        raise FormatError(f"header declares {wire_count} wires but only {reader.remaining()} bytes remain")

    wires: List[Wire] = []
    seen = {v: 0 for v in Visibility}
    for i in range(wire_count):
        tag, label = reader.unpack(_WIRE, f"wire {i}")
        try:
            visibility = Visibility(tag)
        except ValueError:
            raise FormatError(f"wire {i} has unknown visibility tag {tag}") from None
        if (visibility is Visibility.CONSTANT) != (i == 0):
            raise FormatError(f"wire {i} has visibility {visibility.name} (only wire 0 is constant)")
        if label != i:
            raise FormatError(f"wire {i} has label {label}; labels must follow allocation order")
        seen[visibility] += 1
        wires.append(Wire(WireID(i), LabelID(label), visibility))
    if (seen[Visibility.PUBLIC_INPUT], seen[Visibility.PUBLIC_OUTPUT], seen[Visibility.PRIVATE]) != \
            (n_pub_in, n_pub_out, n_priv):
        raise FormatError("per-visibility wire counts disagree with the header")

    # smallest possible constraint is three empty combinations
    if n_constraints * 12 > reader.remaining():
        raise FormatError(
            f"header declares {n_constraints} constraints but only {reader.remaining()} bytes remain")
    constraints: List[Constraint] = []
    for i in range(n_constraints):
        a = _decode_lc(reader, field, wire_count, f"constraint {i} A")
        b = _decode_lc(reader, field, wire_count, f"constraint {i} B")
        c = _decode_lc(reader, field, wire_count, f"constraint {i} C")
        constraints.append(Constraint(a, b, c))
    if reader.remaining():
        raise FormatError(f"{reader.remaining()} trailing bytes after the last constraint")

    r1cs = R1CS(field, wires, constraints)
    logger.debug("decoded R1CS: %d wires, %d constraints from %d bytes", wire_count, n_constraints, len(data))
    return r1cs


def write_r1cs(r1cs: R1CS, path: str) -> None:
    """
    Encode and atomically write r1cs to path.
    """
    data = encode(r1cs)
    write_bytes_atomic(path, data)
    logger.info("wrote %s (%d bytes)", path, len(data))


def read_r1cs(path: str) -> R1CS:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"R1CS file not found: {path}")
    return decode(p.read_bytes())
