"""
Tests for PyLinalg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinalgError)
    - Diagnostic attributes on SingularMatrixError, NotPositiveDefiniteError,
      LinearlyDependentColumnsError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    LinearlyDependentColumnsError,
    NotPositiveDefiniteError,
    NumericalError,
    PyLinalgError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinalgError."""

    def test_validation_error_is_pylinalg_error(self):
        with pytest.raises(PyLinalgError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_numerical_error_is_pylinalg_error(self):
        with pytest.raises(PyLinalgError):
            raise NumericalError("computation failed")

    @pytest.mark.parametrize("cls", [
        SingularMatrixError,
        NotPositiveDefiniteError,
        LinearlyDependentColumnsError,
    ])
    def test_factorization_errors_are_numerical(self, cls):
        err = cls("failed")
        assert isinstance(err, NumericalError)
        assert not isinstance(err, ValidationError)

    def test_dimension_error_is_not_numerical(self):
        assert not isinstance(DimensionError("x"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "U is singular",
            matrix_name="U",
            pivot_index=2,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "U is singular"
        assert err.matrix_name == "U"
        assert err.pivot_index == 2
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.rank is None
        assert err.expected_rank is None


# ═══════════════════════════════════════════════════════════════════════
# NotPositiveDefiniteError
# ═══════════════════════════════════════════════════════════════════════


class TestNotPositiveDefiniteError:
    """NotPositiveDefiniteError carries the failing pivot."""

    def test_all_attributes(self):
        err = NotPositiveDefiniteError(
            "Cholesky failed",
            matrix_name="A",
            pivot_index=1,
            pivot_value=-0.5,
        )
        assert str(err) == "Cholesky failed"
        assert err.matrix_name == "A"
        assert err.pivot_index == 1
        assert err.pivot_value == -0.5

    def test_defaults_are_none(self):
        err = NotPositiveDefiniteError("not PD")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.pivot_value is None

    def test_catchable_with_attributes(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            raise NotPositiveDefiniteError("not PD", pivot_value=-1e-8)
        assert exc_info.value.pivot_value == pytest.approx(-1e-8)


# ═══════════════════════════════════════════════════════════════════════
# LinearlyDependentColumnsError
# ═══════════════════════════════════════════════════════════════════════


class TestLinearlyDependentColumnsError:

    def test_all_attributes(self):
        err = LinearlyDependentColumnsError("dependent", matrix_name="A", column=1)
        assert err.matrix_name == "A"
        assert err.column == 1

    def test_defaults_are_none(self):
        err = LinearlyDependentColumnsError("dependent")
        assert err.matrix_name is None
        assert err.column is None
