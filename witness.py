"""
witness.py

Witness ingestion: turn JSON-style data into a WireID -> field element mapping.

Accepted shapes:
  - mapping:  {"0": "1", "1": "218882...", 2: 5}   (key = wire index)
  - list:     ["1", "3", "9"]                        (position = wire index, snarkjs style)
  - wrapped:  {"witness": [...]} or {"values": [...]}

Values may be ints or decimal / 0x-hex strings, so numbers beyond 64 bits
survive JSON. Values are never reduced: anything negative or >= p is a
RangeError.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from errors import RangeError
from finite_field import FieldParams
from r1cs import R1CS
from wires import WireID


def parse_field_value(raw: Any, field: FieldParams, what: str = "value") -> int:
    """
    Parse one witness value and check it lies in [0, p).

    :param raw: int or decimal/hex string
    :param what: description used in error messages
    """
    if isinstance(raw, bool):
        raise RangeError(f"{what}: booleans are not field values")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        s = raw.strip()
        try:
            if s.lower().startswith(("0x", "-0x")):
                value = int(s, 16)
            else:
                value = int(s, 10)
        except ValueError:
            raise RangeError(f"{what}: {raw!r} is not an integer literal") from None
    else:
        raise RangeError(f"{what}: unsupported type {type(raw).__name__}")
    if not field.is_element(value):
        raise RangeError(f"{what}: {value} is outside [0, {field.modulus})")
    return value


def _parse_wire_key(key: Any) -> WireID:
    if isinstance(key, WireID):
        return key
    if isinstance(key, bool):
        raise RangeError(f"invalid wire key {key!r}")
    try:
        index = int(key)
    except (TypeError, ValueError):
        raise RangeError(f"invalid wire key {key!r}") from None
    if index < 0:
        raise RangeError(f"wire key {key!r} is negative")
    return WireID(index)


def parse_witness(raw: Any, field: FieldParams) -> Dict[WireID, int]:
    """
    Convert decoded JSON into a witness mapping.

    :param raw: list or mapping (see module docstring)
    :param field: field whose modulus bounds every value
    :return: dict WireID -> value in [0, p)
    """
    if isinstance(raw, Mapping):
        for wrapper in ("witness", "values"):
            if wrapper in raw and isinstance(raw[wrapper], (list, Mapping)):
                return parse_witness(raw[wrapper], field)
        out: Dict[WireID, int] = {}
        for key, val in raw.items():
            wire = _parse_wire_key(key)
            if wire in out:
                raise RangeError(f"duplicate value for wire {wire.index}")
            out[wire] = parse_field_value(val, field, f"wire {wire.index}")
        return out
    if isinstance(raw, list):
        return {WireID(i): parse_field_value(v, field, f"wire {i}") for i, v in enumerate(raw)}
    raise RangeError(f"witness must be a list or an object, got {type(raw).__name__}")


def parse_witness_json(text: str, field: FieldParams) -> Dict[WireID, int]:
    return parse_witness(json.loads(text), field)


def load_witness_json(path: str, field: FieldParams) -> Dict[WireID, int]:
    """
    Read and parse a witness JSON file.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Witness file not found: {path}")
    with p.open("r", encoding="utf-8") as fh:
        return parse_witness(json.load(fh), field)


def check_witness_structure(r1cs: R1CS, witness: Mapping[WireID, int]) -> Tuple[List[WireID], List[WireID]]:
    """
    Compare witness keys with the wires of r1cs.

    The constant wire is never reported as missing since the validator supplies it.

    :return: (missing, unknown) sorted lists of wires
    """
    missing = [w.wire_id for w in r1cs.wires[1:] if w.wire_id not in witness]
    unknown = sorted(w for w in witness if not r1cs.has_wire(w))
    return missing, unknown
