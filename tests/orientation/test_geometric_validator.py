"""
Unit tests for geometric_validator module.
"""

import pytest
from pydantic import ValidationError

from src.common.types import Point
from src.markers.types import MarkerSet
from src.orientation.geometric_validator import (
    check_collinear,
    check_equal_intervals,
    check_order,
    distance,
    point_line_distance,
    validate_markers,
)
from src.orientation.types import (
    InvalidReason,
    ToleranceConfig,
    ValidationStatus,
)


def marker_set(red, pink, green):
    return MarkerSet(
        red=Point.from_tuple(red) if red else None,
        pink=Point.from_tuple(pink) if pink else None,
        green=Point.from_tuple(green) if green else None,
    )


class TestPointLineDistance:
    """Tests for point_line_distance function."""

    def test_point_on_line(self):
        """Test that a point on the line has zero distance."""
        assert point_line_distance(
            Point(x=50, y=0), Point(x=0, y=0), Point(x=100, y=0)
        ) == pytest.approx(0.0)

    def test_perpendicular_offset(self):
        """Test distance to a horizontal line."""
        assert point_line_distance(
            Point(x=50, y=60), Point(x=0, y=0), Point(x=100, y=0)
        ) == pytest.approx(60.0)

    def test_diagonal_line(self):
        """Test distance to a 45 degree line."""
        d = point_line_distance(Point(x=0, y=10), Point(x=0, y=0), Point(x=10, y=10))

        assert d == pytest.approx(10 / 2**0.5)

    def test_coincident_endpoints(self):
        """Test that an undefined line reports zero distance."""
        assert point_line_distance(
            Point(x=5, y=5), Point(x=1, y=1), Point(x=1, y=1)
        ) == 0.0


class TestChecks:
    """Tests for the individual geometric checks."""

    def test_distance(self):
        """Test Euclidean distance helper."""
        assert distance(Point(x=1, y=1), Point(x=4, y=5)) == pytest.approx(5.0)

    def test_check_collinear(self):
        """Test collinearity against a threshold."""
        ok, offset = check_collinear(
            Point(x=0, y=0), Point(x=50, y=10), Point(x=100, y=0), threshold=50
        )

        assert ok is True
        assert offset == pytest.approx(10.0)

    def test_check_order_pink_between(self):
        """Test that pink between red and green has no slack."""
        ok, slack = check_order(
            Point(x=0, y=0), Point(x=50, y=0), Point(x=100, y=0), threshold=50
        )

        assert ok is True
        assert slack == pytest.approx(0.0)

    def test_check_order_pink_outside(self):
        """Test that pink beyond green is rejected."""
        ok, slack = check_order(
            Point(x=0, y=0), Point(x=150, y=0), Point(x=100, y=0), threshold=50
        )

        assert ok is False
        assert slack == pytest.approx(100.0)

    def test_equal_intervals_within_tolerance(self):
        """Test dPG 8% longer than dRP."""
        assert check_equal_intervals(
            Point(x=0, y=0), Point(x=50, y=0), Point(x=104, y=0), tolerance=0.1
        )

    def test_equal_intervals_outside_tolerance(self):
        """Test dPG 40% longer than dRP."""
        assert not check_equal_intervals(
            Point(x=0, y=0), Point(x=50, y=0), Point(x=120, y=0), tolerance=0.1
        )

    def test_equal_intervals_just_outside_band(self):
        """Test dPG 12% longer than dRP with tol=0.1."""
        # dPG = 56 lies outside (45, 55)
        assert not check_equal_intervals(
            Point(x=0, y=0), Point(x=50, y=0), Point(x=106, y=0), tolerance=0.1
        )

    def test_equal_intervals_bounds_are_open(self):
        """Test that dPG exactly at the tolerance bound fails."""
        assert not check_equal_intervals(
            Point(x=0, y=0), Point(x=50, y=0), Point(x=100, y=0), tolerance=0.0
        )


class TestValidateMarkers:
    """Tests for validate_markers function."""

    def test_valid_straight_line(self):
        """Test evenly spaced collinear markers with default tolerances."""
        result = validate_markers(marker_set((0, 0), (50, 0), (100, 0)))

        assert result.status == ValidationStatus.VALID
        assert result.reason == InvalidReason.NONE
        assert result.is_valid() is True
        assert result.dist_red_pink == pytest.approx(50.0)
        assert result.dist_red_green == pytest.approx(100.0)

    def test_missing_marker_short_circuits(self):
        """Test that a missing pink is reported before any geometry."""
        result = validate_markers(marker_set((0, 0), None, (100, 0)))

        assert result.reason == InvalidReason.INSUFFICIENT_MARKERS
        assert result.line_distance is None
        assert result.dist_red_pink is None

    def test_not_collinear(self):
        """Test pink lifted off the line."""
        config = ToleranceConfig(collinearity_threshold=50)

        result = validate_markers(marker_set((0, 0), (50, 60), (100, 0)), config)

        assert result.status == ValidationStatus.INVALID
        assert result.reason == InvalidReason.NOT_COLLINEAR
        assert result.line_distance == pytest.approx(60.0)

    def test_wrong_order(self):
        """Test pink on the line but past green."""
        result = validate_markers(marker_set((0, 0), (200, 0), (100, 0)))

        assert result.reason == InvalidReason.WRONG_ORDER

    def test_order_threshold_independent_of_collinearity(self):
        """Test that the two thresholds are applied separately."""
        markers = marker_set((0, 0), (50, 30), (100, 0))
        config = ToleranceConfig(collinearity_threshold=50, order_threshold=5)

        result = validate_markers(markers, config)

        assert result.reason == InvalidReason.WRONG_ORDER

    def test_unequal_intervals(self):
        """Test interval tolerance boundary with tol=0.1."""
        config = ToleranceConfig(interval_tolerance=0.1)

        passing = validate_markers(marker_set((0, 0), (50, 0), (104, 0)), config)
        failing = validate_markers(marker_set((0, 0), (50, 0), (120, 0)), config)

        assert passing.is_valid()
        assert failing.reason == InvalidReason.UNEQUAL_INTERVALS

    def test_coincident_red_and_green(self):
        """Test the degenerate case where red and green overlap."""
        result = validate_markers(marker_set((10, 10), (10, 10), (10, 10)))

        assert result.line_distance == 0.0
        # All distances are zero, so the open interval bounds cannot hold
        assert result.reason == InvalidReason.UNEQUAL_INTERVALS

    def test_error_messages(self):
        """Test human-readable messages for each outcome."""
        assert (
            validate_markers(marker_set((0, 0), None, None)).get_error_message()
            == "Not all dots detected."
        )
        assert "collinear" in validate_markers(
            marker_set((0, 0), (50, 60), (100, 0))
        ).get_error_message()
        assert validate_markers(
            marker_set((0, 0), (50, 0), (100, 0))
        ).get_error_message() == "Markers aligned"


class TestToleranceConfig:
    """Tests for ToleranceConfig model."""

    def test_defaults(self):
        """Test default tolerances."""
        config = ToleranceConfig()

        assert config.collinearity_threshold == 50.0
        assert config.order_threshold == 50.0
        assert config.interval_tolerance == 0.8

    def test_runtime_assignment_is_validated(self):
        """Test that out-of-range runtime updates are rejected."""
        config = ToleranceConfig()
        config.interval_tolerance = 0.3

        assert config.interval_tolerance == 0.3
        with pytest.raises(ValidationError):
            config.interval_tolerance = 1.5
