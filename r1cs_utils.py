"""
r1cs_utils.py

Inspection helpers for an R1CS snapshot: structural queries, dense matrix
export and human-readable rendering.

Dense matrices use numpy object arrays so 254-bit coefficients stay exact
Python ints.
"""

from typing import Any, Dict, List, Mapping, Set, Tuple
import numpy as np

from errors import MissingWitnessError
from linear_combination import LinearCombination
from r1cs import R1CS, Constraint
from wires import CONSTANT_WIRE, WireID


def constraint_support(constraint: Constraint) -> Set[WireID]:
    """
    Return the set of wires that appear in the constraint (A or B or C).
    """
    return set(constraint.wires())


def constraint_nz_count(constraint: Constraint) -> int:
    """
    Number of non-zero coefficient entries across A,B,C. Explicit zero terms are not counted.
    """
    return sum(1 for lc in constraint.parts() for _, coeff in lc if coeff != 0)


def constraints_referencing_wire(r1cs: R1CS, wire: WireID) -> List[int]:
    """
    Return a list of constraint indices that mention wire.
    """
    return [i for i, c in enumerate(r1cs.constraints) if wire in constraint_support(c)]


def constraint_summary(constraint: Constraint) -> Dict[str, Any]:
    """
    Produce a small summary dict for a constraint describing its support and sparsity.
    """
    supp = constraint_support(constraint)
    return {
        "support_size": len(supp),
        "nz_count": constraint_nz_count(constraint),
        "support": sorted(w.index for w in supp),
        "text": constraint_to_str(constraint),
    }


def constraints_to_dense_matrices(r1cs: R1CS) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert the sparse constraints into dense matrices A, B, C.

    Returns:
        A, B, C: numpy object arrays of shape (m_constraints, n_wires)
    """
    m, n = r1cs.constraint_count, r1cs.wire_count
    mats = [np.zeros((m, n), dtype=object) for _ in range(3)]
    for i, c in enumerate(r1cs.constraints):
        for mat, lc in zip(mats, c.parts()):
            for wire, coeff in lc:
                mat[i, wire.index] = coeff
    return mats[0], mats[1], mats[2]


def witness_vector(r1cs: R1CS, witness: Mapping[WireID, int]) -> np.ndarray:
    """
    Order a witness mapping as a dense vector w[0..n). Wire 0 defaults to 1.

    :raises MissingWitnessError: if a non-constant wire has no value
    """
    vec = np.zeros(r1cs.wire_count, dtype=object)
    for w in r1cs.wires:
        if w.wire_id in witness:
            vec[w.wire_id.index] = witness[w.wire_id]
        elif w.wire_id == CONSTANT_WIRE:
            vec[0] = 1
        else:
            raise MissingWitnessError(w.wire_id)
    return vec


def residuals(r1cs: R1CS, witness: Mapping[WireID, int]) -> np.ndarray:
    """
    Per-constraint (A.w * B.w - C.w) mod p computed with the dense matrices.
    A zero entry means the constraint holds.
    """
    p = r1cs.modulus
    A, B, C = constraints_to_dense_matrices(r1cs)
    w = witness_vector(r1cs, witness)
    if r1cs.constraint_count == 0:
        return np.zeros(0, dtype=object)
    az = A.dot(w) % p
    bz = B.dot(w) % p
    cz = C.dot(w) % p
    return (az * bz - cz) % p


def linear_combination_to_str(lc: LinearCombination) -> str:
    """
    Render {w1: 2, w3: 1} as "2*w1 + w3"; the constant wire prints as its coefficient.
    """
    if not lc:
        return "0"
    parts = []
    for wire, coeff in lc:
        if wire == CONSTANT_WIRE:
            parts.append(str(coeff))
        elif coeff == 1:
            parts.append(f"w{wire.index}")
        else:
            parts.append(f"{coeff}*w{wire.index}")
    return " + ".join(parts)


def constraint_to_str(constraint: Constraint) -> str:
    a, b, c = (linear_combination_to_str(lc) for lc in constraint.parts())
    return f"({a}) * ({b}) = ({c})"


def _has_variable_term(lc: LinearCombination) -> bool:
    return any(wire != CONSTANT_WIRE and coeff != 0 for wire, coeff in lc)


def r1cs_summary(r1cs: R1CS) -> Dict[str, Any]:
    """
    Headline numbers for an R1CS.

    A row counts as multiplicative only when both A and B carry a nonzero term
    on a non-constant wire; anything else is a linear row.
    """
    mult_rows = sum(1 for c in r1cs.constraints if _has_variable_term(c.a) and _has_variable_term(c.b))
    return {
        "modulus": str(r1cs.modulus),
        "prime_bits": r1cs.modulus.bit_length(),
        "field_byte_width": r1cs.field_byte_width,
        "wires": r1cs.wire_count,
        "labels": r1cs.label_count,
        "public_inputs": r1cs.num_public_inputs,
        "public_outputs": r1cs.num_public_outputs,
        "private": r1cs.num_private,
        "constraints": r1cs.constraint_count,
        "multiplicative_rows": mult_rows,
        "linear_rows": r1cs.constraint_count - mult_rows,
    }
