"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from builder import R1CSBuilder  # noqa: E402
from finite_field import BN254_SCALAR_FIELD, FieldParams  # noqa: E402
from wires import Visibility  # noqa: E402

SMALL_PRIME = 97


@pytest.fixture
def small_field() -> FieldParams:
    return FieldParams(SMALL_PRIME)


@pytest.fixture
def bn254_field() -> FieldParams:
    return FieldParams(BN254_SCALAR_FIELD)


@pytest.fixture
def square_is_one():
    """x * x = 1 over BN254 with x a public input (wire 1, label 1)."""
    b = R1CSBuilder(BN254_SCALAR_FIELD)
    x, _ = b.add_wire(Visibility.PUBLIC_INPUT)
    b.add_constraint(b.linear_combination((x, 1)),
                     b.linear_combination((x, 1)),
                     b.linear_combination((b.constant_wire, 1)))
    return b.finalize()


def build_right_triangle(modulus: int):
    """
    a^2 + b^2 = c^2 as three constraints:
      [0] a * a = a_sq
      [1] b * b = b_sq
      [2] c * c = a_sq + b_sq
    Returns (r1cs, (a, b, c, a_sq, b_sq)).
    """
    bld = R1CSBuilder(modulus)
    a, _ = bld.add_wire(Visibility.PRIVATE)
    b, _ = bld.add_wire(Visibility.PRIVATE)
    c, _ = bld.add_wire(Visibility.PUBLIC_INPUT)
    a_sq, _ = bld.add_wire(Visibility.PRIVATE)
    b_sq, _ = bld.add_wire(Visibility.PRIVATE)
    lc = bld.linear_combination
    bld.add_constraint(lc((a, 1)), lc((a, 1)), lc((a_sq, 1)))
    bld.add_constraint(lc((b, 1)), lc((b, 1)), lc((b_sq, 1)))
    bld.add_constraint(lc((c, 1)), lc((c, 1)), lc((a_sq, 1), (b_sq, 1)))
    return bld.finalize(), (a, b, c, a_sq, b_sq)


@pytest.fixture
def right_triangle():
    return build_right_triangle(BN254_SCALAR_FIELD)
