"""Tests for input validation module."""

import pytest

from layout_spatial.validation import (
    InvalidBoundsError,
    InvalidDepthError,
    InvalidPositionError,
    InvalidThetaError,
    OutOfBoundsError,
    ValidationError,
    validate_bounds,
    validate_max_depth,
    validate_position,
    validate_theta,
)


class TestBoundsValidation:
    """Tests for bounds validation."""

    def test_valid_bounds(self):
        """Valid bounds return floats."""
        assert validate_bounds(0, 0, 800, 600) == (0.0, 0.0, 800.0, 600.0)

    def test_negative_origin_allowed(self):
        """The corner may be anywhere."""
        assert validate_bounds(-10, -20, 1, 1) == (-10.0, -20.0, 1.0, 1.0)

    def test_zero_width_raises(self):
        """Zero width raises InvalidBoundsError."""
        with pytest.raises(InvalidBoundsError, match="width must be positive"):
            validate_bounds(0, 0, 0, 600)

    def test_zero_height_raises(self):
        """Zero height raises InvalidBoundsError."""
        with pytest.raises(InvalidBoundsError, match="height must be positive"):
            validate_bounds(0, 0, 800, 0)

    def test_nan_raises(self):
        """NaN raises InvalidBoundsError."""
        with pytest.raises(InvalidBoundsError, match="finite"):
            validate_bounds(float("nan"), 0, 10, 10)


class TestThetaValidation:
    """Tests for theta validation."""

    def test_zero_allowed(self):
        """Theta 0 means exact evaluation."""
        assert validate_theta(0) == 0.0

    def test_large_allowed(self):
        """Large theta is allowed."""
        assert validate_theta(2.5) == 2.5

    def test_negative_raises(self):
        """Negative theta raises InvalidThetaError."""
        with pytest.raises(InvalidThetaError, match=">= 0"):
            validate_theta(-1)

    def test_infinite_raises(self):
        """Infinite theta raises InvalidThetaError."""
        with pytest.raises(InvalidThetaError):
            validate_theta(float("inf"))


class TestDepthValidation:
    """Tests for max depth validation."""

    def test_valid(self):
        """Positive ints pass."""
        assert validate_max_depth(1) == 1
        assert validate_max_depth(32) == 32

    def test_zero_raises(self):
        """Zero raises InvalidDepthError."""
        with pytest.raises(InvalidDepthError, match=">= 1"):
            validate_max_depth(0)

    def test_float_raises(self):
        """Non-integers raise InvalidDepthError."""
        with pytest.raises(InvalidDepthError, match="must be an int"):
            validate_max_depth(2.5)

    def test_bool_raises(self):
        """Booleans are not depths."""
        with pytest.raises(InvalidDepthError):
            validate_max_depth(True)


class TestPositionValidation:
    """Tests for position validation."""

    def test_sequence(self):
        """Two-element sequences pass."""
        assert validate_position((1, 2)) == (1.0, 2.0)

    def test_none_raises(self):
        """None is not a position."""
        with pytest.raises(InvalidPositionError):
            validate_position(None)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidBoundsError,
            OutOfBoundsError,
            InvalidPositionError,
            InvalidThetaError,
            InvalidDepthError,
        ],
    )
    def test_inherits_validation_error(self, error):
        """All errors are ValidationErrors and ValueErrors."""
        assert issubclass(error, ValidationError)
        assert issubclass(error, ValueError)
