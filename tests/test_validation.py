"""Tests for the area validation entry points and configuration."""

import logging

import pytest
from shapely.geometry import LinearRing, LineString, MultiPolygon, Point, Polygon

from polyvalid import (
    ConfigurationError,
    UnsupportedGeometryError,
    ValidityConfig,
    ViolationKind,
    analyze_area,
    explain_area,
    is_valid_area,
    validate_area,
)
from polyvalid.validation import AreaCheckResult, Violation, format_coordinate


SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
BIG_SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
BOWTIE = [(0, 0), (2, 2), (2, 0), (0, 2)]

# Shell with a triangular pocket pinched off at (5, 0)
POCKET_SHELL = [
    (0, 0), (5, 0), (3, 4), (7, 4), (5, 0), (10, 0), (10, 10), (0, 10),
]

# Hole touching the middle of every shell side
DIAMOND_HOLE = Polygon(
    [(0, 0), (4, 0), (4, 4), (0, 4)],
    holes=[[(2, 0), (4, 2), (2, 4), (0, 2)]],
)


def _nested_at_vertex():
    return MultiPolygon([
        Polygon(BIG_SQUARE),
        Polygon([(0, 0), (5, 1), (1, 5)]),
    ])


class TestValidateArea:
    """Tests for validate_area."""

    def test_valid_square(self):
        result = validate_area(Polygon(SQUARE))

        assert result.is_valid
        assert result.message == "Valid Geometry"
        assert result.invalid_point is None

    def test_valid_polygon_with_hole(self):
        poly = Polygon(BIG_SQUARE, holes=[[(2, 2), (4, 2), (4, 4), (2, 4)]])
        assert validate_area(poly).is_valid

    def test_hole_touching_shell_is_valid(self):
        poly = Polygon(BIG_SQUARE, holes=[[(5, 0), (7, 2), (3, 2)]])
        assert validate_area(poly).is_valid

    def test_self_intersection(self):
        result = validate_area(Polygon(BOWTIE))

        assert not result.is_valid
        assert result.kind == ViolationKind.SELF_INTERSECTION
        assert result.message == "Self-intersection at (1, 1)"

    def test_inconsistent_node(self):
        result = validate_area(_nested_at_vertex())

        assert result.kind == ViolationKind.NODE_LABELS
        assert result.message == "Self-intersection at (0, 0)"

    def test_duplicate_rings(self):
        result = validate_area(MultiPolygon([Polygon(SQUARE), Polygon(SQUARE)]))

        assert result.kind == ViolationKind.DUPLICATE_RINGS
        assert result.invalid_point == (0.0, 0.0)

    def test_too_few_points(self):
        result = validate_area(Polygon([(0, 0), (1, 0), (1, 0), (0, 0)]))

        assert result.kind == ViolationKind.TOO_FEW_POINTS
        assert result.message == "Too few points in geometry component at (0, 0)"

    def test_ring_self_intersection(self):
        result = validate_area(Polygon(POCKET_SHELL))

        assert result.kind == ViolationKind.RING_SELF_INTERSECTION
        assert result.invalid_point == (5.0, 0.0)

    def test_hole_outside_shell(self):
        poly = Polygon(BIG_SQUARE, holes=[[(20, 20), (21, 20), (21, 21), (20, 21)]])
        result = validate_area(poly)

        assert result.kind == ViolationKind.HOLE_OUTSIDE_SHELL
        assert result.invalid_point == (20.0, 20.0)
        assert result.message == "Hole lies outside shell at (20, 20)"

    def test_hole_touching_shell_at_every_vertex(self):
        """A hole whose vertices all lie on the shell is reported, not raised."""
        result = validate_area(DIAMOND_HOLE)

        assert not result.is_valid
        assert result.kind == ViolationKind.DISCONNECTED_INTERIOR
        assert result.invalid_point == (2.0, 0.0)
        assert result.message == "Interior is disconnected at (2, 0)"

    def test_nested_shells_are_not_checked(self):
        """Shell nesting is outside the checks run here."""
        nested = MultiPolygon([Polygon(BIG_SQUARE), Polygon([(2, 2), (3, 2), (3, 3), (2, 3)])])

        assert is_valid_area(nested)
        assert not nested.is_valid

    def test_touching_polygons_are_valid(self):
        a = Polygon(SQUARE)
        b = Polygon([(1, 1), (2, 1), (2, 2), (1, 2)])
        assert validate_area(MultiPolygon([a, b])).is_valid

    @pytest.mark.parametrize("geometry", [
        Polygon(),
        MultiPolygon(),
    ])
    def test_empty_is_valid(self, geometry):
        assert validate_area(geometry).is_valid

    def test_linear_ring(self):
        assert validate_area(LinearRing(SQUARE)).is_valid
        assert not validate_area(LinearRing(BOWTIE)).is_valid

    @pytest.mark.parametrize("geometry", [
        Point(0, 0),
        LineString([(0, 0), (1, 1)]),
    ])
    def test_unsupported_geometry(self, geometry):
        with pytest.raises(UnsupportedGeometryError):
            validate_area(geometry)


class TestAgreesWithShapely:
    """Results match GEOS validity for the cases both cover."""

    @pytest.mark.parametrize("geometry", [
        Polygon(SQUARE),
        Polygon(BOWTIE),
        Polygon(POCKET_SHELL),
        Polygon(BIG_SQUARE, holes=[[(2, 2), (4, 2), (4, 4), (2, 4)]]),
        Polygon(BIG_SQUARE, holes=[[(5, 0), (7, 2), (3, 2)]]),
        Polygon(BIG_SQUARE, holes=[[(20, 20), (21, 20), (21, 21), (20, 21)]]),
        MultiPolygon([Polygon(SQUARE), Polygon([(1, 1), (2, 1), (2, 2), (1, 2)])]),
        MultiPolygon([Polygon(SQUARE), Polygon(SQUARE)]),
        DIAMOND_HOLE,
        _nested_at_vertex(),
    ])
    def test_matches_is_valid(self, geometry):
        assert is_valid_area(geometry) == geometry.is_valid


class TestValidityConfig:
    """Tests for ValidityConfig and its effect on validation."""

    def test_default_values(self):
        config = ValidityConfig()

        assert config.check_duplicate_rings is True
        assert config.check_ring_self_intersection is True
        assert config.check_holes_in_shell is True
        assert config.stop_at_first_proper is True

    def test_skip_duplicate_rings(self):
        duplicates = MultiPolygon([Polygon(SQUARE), Polygon(SQUARE)])
        config = ValidityConfig(check_duplicate_rings=False)

        assert is_valid_area(duplicates, config)

    def test_allow_self_touching_rings(self):
        config = ValidityConfig(check_ring_self_intersection=False)
        assert is_valid_area(Polygon(POCKET_SHELL), config)

    def test_skip_holes_in_shell(self):
        poly = Polygon(BIG_SQUARE, holes=[[(20, 20), (21, 20), (21, 21), (20, 21)]])
        config = ValidityConfig(check_holes_in_shell=False)

        assert is_valid_area(poly, config)

    def test_skip_holes_in_shell_accepts_touching_hole(self):
        config = ValidityConfig(check_holes_in_shell=False)
        assert is_valid_area(DIAMOND_HOLE, config)

    def test_consistency_check_cannot_be_disabled(self):
        config = ValidityConfig(
            check_duplicate_rings=False,
            check_ring_self_intersection=False,
            check_holes_in_shell=False,
        )
        assert not is_valid_area(Polygon(BOWTIE), config)

    def test_non_bool_setting_rejected(self):
        with pytest.raises(ConfigurationError, match="check_holes_in_shell"):
            validate_area(Polygon(SQUARE), ValidityConfig(check_holes_in_shell="yes"))

    def test_from_mapping(self):
        config = ValidityConfig.from_mapping({'check_holes_in_shell': False})

        assert config.check_holes_in_shell is False
        assert config.check_duplicate_rings is True

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigurationError, match="allow_everything"):
            ValidityConfig.from_mapping({'allow_everything': True})

    def test_from_mapping_bad_value(self):
        with pytest.raises(ConfigurationError):
            ValidityConfig.from_mapping({'stop_at_first_proper': 1})


class TestDiagnostics:
    """Tests for explain_area, analyze_area and verbose output."""

    def test_explain_valid(self):
        assert explain_area(Polygon(SQUARE)) == "Valid Geometry"

    def test_explain_invalid(self):
        assert explain_area(Polygon(BOWTIE)) == "Self-intersection at (1, 1)"

    def test_analyze_invalid(self):
        report = analyze_area(Polygon(BOWTIE))

        assert report['is_valid'] is False
        assert report['kind'] == 'self_intersection'
        assert report['location'] == (1.0, 1.0)
        assert report['geometry_type'] == 'Polygon'
        assert report['ring_count'] == 1

    def test_analyze_valid_multipolygon(self):
        poly = Polygon(BIG_SQUARE, holes=[[(2, 2), (4, 2), (4, 4), (2, 4)]])
        report = analyze_area(MultiPolygon([poly, Polygon([(20, 0), (21, 0), (21, 1)])]))

        assert report['is_valid'] is True
        assert report['kind'] is None
        assert report['location'] is None
        assert report['geometry_type'] == 'MultiPolygon'
        assert report['ring_count'] == 3

    def test_verbose_prints_each_step(self, capsys):
        validate_area(Polygon(SQUARE), verbose=True)
        output = capsys.readouterr().out

        assert "too_few_points: ok" in output
        assert "consistent_area: ok" in output
        assert "holes_in_shell: ok" in output

    def test_verbose_reports_failure(self, capsys):
        validate_area(Polygon(BOWTIE), verbose=True)
        output = capsys.readouterr().out

        assert "consistent_area: Self-intersection at (1, 1)" in output
        assert "duplicate_rings" not in output

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="polyvalid"):
            validate_area(Polygon(BOWTIE))

        assert "Self-intersection" in caplog.text


class TestResultValues:
    """Tests for result value objects."""

    def test_format_coordinate(self):
        assert format_coordinate((1.0, 2.5)) == "(1, 2.5)"
        assert format_coordinate((0.1, -3.0)) == "(0.1, -3)"

    def test_violation_message(self):
        violation = Violation(ViolationKind.DUPLICATE_RINGS, (3.0, 4.0))
        assert str(violation) == "Duplicate Rings at (3, 4)"

    def test_violation_without_point(self):
        assert Violation(ViolationKind.TOO_FEW_POINTS, None).message == \
            "Too few points in geometry component"

    def test_invalid_result(self):
        result = AreaCheckResult.invalid(ViolationKind.SELF_INTERSECTION, (1.0, 1.0))

        assert not result.is_valid
        assert result.kind == ViolationKind.SELF_INTERSECTION
        assert result.invalid_point == (1.0, 1.0)

    def test_valid_result(self):
        result = AreaCheckResult.valid()

        assert result.is_valid
        assert result.kind is None
