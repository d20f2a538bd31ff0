"""Tests for witness validation."""

import threading

import pytest

from builder import R1CSBuilder
from conftest import build_right_triangle
from errors import MissingWitnessError, RangeError, StructuralError
from finite_field import BN254_SCALAR_FIELD
from r1cs import R1CS
from validator import ConstraintViolation, ValidationReport, WitnessValidator, validate
from wires import CONSTANT_WIRE, Visibility, WireID

P = BN254_SCALAR_FIELD
X = WireID(1)


class TestSquareIsOne:
    """x * x = 1."""

    def test_minus_one_satisfies(self, square_is_one: R1CS) -> None:
        report = validate(square_is_one, {X: P - 1})
        assert report.is_satisfied
        assert report.violations == []

    def test_one_satisfies(self, square_is_one: R1CS) -> None:
        assert validate(square_is_one, {CONSTANT_WIRE: 1, X: 1})

    def test_two_fails_with_values(self, square_is_one: R1CS) -> None:
        report = validate(square_is_one, {X: 2})
        assert not report.is_satisfied
        assert report.violations == [ConstraintViolation(index=0, a=2, b=2, c=1)]


class TestEmptySystem:
    """No constraints means any well-formed witness passes."""

    def test_constant_only(self) -> None:
        r = R1CSBuilder(97).finalize()
        report = validate(r, {CONSTANT_WIRE: 1})
        assert report.is_satisfied
        assert report.constraint_count == 0

    def test_constant_supplied(self) -> None:
        assert validate(R1CSBuilder(97).finalize(), {}).is_satisfied


class TestPartialFailure:
    """Every violated constraint is reported."""

    def test_reports_all_violations(self) -> None:
        b = R1CSBuilder(97)
        x, _ = b.add_wire(Visibility.PRIVATE)
        lc = b.linear_combination
        b.add_constraint(lc((x, 1)), lc((CONSTANT_WIRE, 1)), lc((x, 1)))      # x * 1 = x
        b.add_constraint(lc((x, 1)), lc((x, 1)), lc((CONSTANT_WIRE, 10)))     # x * x = 10
        b.add_constraint(lc((x, 1)), lc((CONSTANT_WIRE, 2)), lc((x, 1)))      # x * 2 = x
        report = validate(b.finalize(), {x: 3})
        assert report.violated_indices == [1, 2]
        assert report.violations[0] == ConstraintViolation(1, 3, 3, 10)
        assert report.violations[1] == ConstraintViolation(2, 3, 2, 3)
        assert report.satisfied_count == 1

    def test_report_to_dict(self) -> None:
        report = ValidationReport(constraint_count=2, violations=[ConstraintViolation(1, P - 1, 2, 0)])
        d = report.to_dict()
        assert d["satisfied"] is False
        assert d["violation_count"] == 1
        assert d["violations"][0] == {"index": 1, "a": str(P - 1), "b": "2", "c": "0"}


class TestArithmetic:
    """Evaluation is done mod p."""

    def test_constraint_with_constant(self) -> None:
        b = R1CSBuilder(97)
        x, _ = b.add_wire(Visibility.PUBLIC_INPUT)
        y, _ = b.add_wire(Visibility.PUBLIC_OUTPUT)
        lc = b.linear_combination
        # (x + 5) * 1 = y
        b.add_constraint(lc((x, 1), (CONSTANT_WIRE, 5)), lc((CONSTANT_WIRE, 1)), lc((y, 1)))
        r = b.finalize()
        assert validate(r, {x: 10, y: 15})
        assert not validate(r, {x: 10, y: 16})

    def test_wraparound(self) -> None:
        b = R1CSBuilder(97)
        x, _ = b.add_wire(Visibility.PRIVATE)
        y, _ = b.add_wire(Visibility.PRIVATE)
        lc = b.linear_combination
        b.add_constraint(lc((x, 1)), lc((x, 1)), lc((y, 1)))
        r = b.finalize()
        # 50 * 50 = 2500 = 25 * 97 + 75
        assert validate(r, {x: 50, y: 75})
        assert not validate(r, {x: 50, y: 74})

    def test_linear_combination_constraint(self) -> None:
        b = R1CSBuilder(97)
        x, _ = b.add_wire(Visibility.PRIVATE)
        y, _ = b.add_wire(Visibility.PRIVATE)
        z, _ = b.add_wire(Visibility.PRIVATE)
        lc = b.linear_combination
        # (2x + 3y) * 1 = z
        b.add_constraint(lc((x, 2), (y, 3)), lc((CONSTANT_WIRE, 1)), lc((z, 1)))
        r = b.finalize()
        assert validate(r, {x: 4, y: 5, z: 23})
        assert validate(r, {x: 40, y: 50, z: (80 + 150) % 97})

    def test_empty_linear_combinations(self) -> None:
        b = R1CSBuilder(97)
        x, _ = b.add_wire(Visibility.PRIVATE)
        lc = b.linear_combination
        b.add_constraint(lc(), lc((x, 1)), lc())          # 0 * x = 0
        b.add_constraint(lc(), lc(), lc((x, 1)))          # 0 * 0 = x
        report = validate(b.finalize(), {x: 7})
        assert report.violations == [ConstraintViolation(1, 0, 0, 7)]

    def test_bn254_large_values(self) -> None:
        b = R1CSBuilder(P)
        x, _ = b.add_wire(Visibility.PRIVATE)
        y, _ = b.add_wire(Visibility.PRIVATE)
        lc = b.linear_combination
        b.add_constraint(lc((x, 1)), lc((x, 1)), lc((y, 1)))
        r = b.finalize()
        big = 2**200 + 12345
        assert validate(r, {x: big, y: big * big % P})
        assert not validate(r, {x: big, y: (big * big + 1) % P})


class TestRightTriangle:
    """a^2 + b^2 = c^2."""

    def test_pythagorean_triple(self, right_triangle) -> None:
        r, (a, b, c, a_sq, b_sq) = right_triangle
        assert validate(r, {a: 3, b: 4, c: 5, a_sq: 9, b_sq: 16}).is_satisfied

    def test_larger_triple(self) -> None:
        r, (a, b, c, a_sq, b_sq) = build_right_triangle(97)
        # 20^2 + 21^2 = 29^2, squares reduced mod 97
        report = validate(r, {a: 20, b: 21, c: 29, a_sq: 400 % 97, b_sq: 441 % 97})
        assert report.is_satisfied

    def test_not_a_triangle(self, right_triangle) -> None:
        r, (a, b, c, a_sq, b_sq) = right_triangle
        report = validate(r, {a: 3, b: 4, c: 6, a_sq: 9, b_sq: 16})
        assert report.violated_indices == [2]
        assert report.violations[0] == ConstraintViolation(2, 6, 6, 25)

    def test_wrong_intermediates(self, right_triangle) -> None:
        r, (a, b, c, a_sq, b_sq) = right_triangle
        report = validate(r, {a: 3, b: 4, c: 5, a_sq: 10, b_sq: 15})
        assert report.violated_indices == [0, 1]


class TestMalformedWitness:
    """Structural and range problems raise instead of being reported."""

    def test_missing_wire(self, right_triangle) -> None:
        r, (a, b, c, a_sq, b_sq) = right_triangle
        with pytest.raises(MissingWitnessError) as exc:
            validate(r, {a: 3, b: 4, c: 5, a_sq: 9})
        assert exc.value.wire == b_sq
        assert isinstance(exc.value, StructuralError)

    def test_constant_wire_must_be_one(self, square_is_one: R1CS) -> None:
        with pytest.raises(StructuralError):
            validate(square_is_one, {CONSTANT_WIRE: 2, X: 1})

    def test_value_not_below_modulus(self, square_is_one: R1CS) -> None:
        with pytest.raises(RangeError):
            validate(square_is_one, {X: P})

    def test_negative_value(self, square_is_one: R1CS) -> None:
        with pytest.raises(RangeError):
            validate(square_is_one, {X: -1})

    def test_non_wire_key(self, square_is_one: R1CS) -> None:
        with pytest.raises(TypeError):
            validate(square_is_one, {1: 1})

    def test_extra_wires_ignored(self, square_is_one: R1CS) -> None:
        assert validate(square_is_one, {X: 1, WireID(40): 5}).is_satisfied

    def test_caller_witness_not_modified(self, square_is_one: R1CS) -> None:
        witness = {X: 1}
        validate(square_is_one, witness)
        assert witness == {X: 1}


class TestSharedSnapshot:
    """One R1CS can be validated from several threads."""

    def test_concurrent_validation(self, right_triangle) -> None:
        r, (a, b, c, a_sq, b_sq) = right_triangle
        validator = WitnessValidator(r)
        results = []

        def work(cv: int) -> None:
            results.append(validator.validate({a: 3, b: 4, c: cv, a_sq: 9, b_sq: 16}).is_satisfied)

        threads = [threading.Thread(target=work, args=(5 if i % 2 == 0 else 7,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(results) == [False] * 4 + [True] * 4
