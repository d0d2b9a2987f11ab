"""Tests for layout specification and layout config parsing."""

import pytest

from svglayout.engine.config import LayoutParseOptions
from svglayout.engine.layout_parser import LayoutLanguageParser, ParseContext
from svglayout.engine.regions import RegionManager
from svglayout.models.document import Anchor, RelativeSize


@pytest.fixture
def parser() -> LayoutLanguageParser:
    return LayoutLanguageParser(RegionManager())


@pytest.fixture
def lenient(parser) -> LayoutLanguageParser:
    return parser.with_options(strict=False)


def test_valid_layout(parser):
    result = parser.parse_layout_specification(
        {"region": "top_left", "anchor": "bottom_right", "offset": [0.1, -0.2], "size": {"relative": 0.3}}
    )
    assert result.success
    assert result.errors == []
    layout = result.data
    assert layout.region == "top_left"
    assert layout.anchor is Anchor.BOTTOM_RIGHT
    assert layout.offset == (0.1, -0.2)
    assert isinstance(layout.size, RelativeSize)


def test_empty_layout_defaults_to_center(parser):
    result = parser.parse_layout_specification({})
    assert result.success
    assert result.data.region == "center"
    assert result.data.anchor is Anchor.CENTER
    assert result.data.is_default_placement


@pytest.mark.parametrize("bad", [None, 42, "center", [1, 2], {"offset": [1]}, {"zIndex": "high"}])
def test_schema_failures_short_circuit(parser, bad):
    result = parser.parse_layout_specification(bad)
    assert not result.success
    assert result.data is None
    assert all(e.startswith("Schema validation:") for e in result.errors)


def test_unknown_region_strict_suggests(parser):
    result = parser.parse_layout_specification({"region": "centre"})
    assert not result.success
    assert "Unknown region 'centre'" in result.errors
    assert any(e.startswith("Did you mean: center") for e in result.errors)


def test_unknown_region_lenient_defaults(lenient):
    result = lenient.parse_layout_specification({"region": "centre"})
    assert result.success
    assert result.data.region == "center"
    assert "Unknown region 'centre', will default to 'center'" in result.warnings
    assert any(w.startswith("Did you mean: center") for w in result.warnings)


def test_suggestions_can_be_disabled(parser):
    result = parser.with_options(suggest_alternatives=False).parse_layout_specification({"region": "centre"})
    assert result.errors == ["Unknown region 'centre'"]


def test_custom_region_resolution():
    regions = RegionManager()
    regions.add_custom_region("sidebar", {"x": 0, "y": 0, "width": 0.2, "height": 1})
    parser = LayoutLanguageParser(regions)
    assert parser.parse_layout_specification({"region": "sidebar"}).success
    disabled = parser.with_options(allow_custom_regions=False)
    assert not disabled.parse_layout_specification({"region": "sidebar"}).success


def test_invalid_anchor(parser, lenient):
    strict = parser.parse_layout_specification({"anchor": "middle"})
    assert strict.errors[0] == "Invalid anchor point 'middle'"
    assert strict.errors[1].startswith("Did you mean: middle_")
    loose = lenient.parse_layout_specification({"anchor": "middle"})
    assert loose.success
    assert loose.data.anchor is Anchor.CENTER


def test_unknown_anchor_strict_suggests(parser):
    result = parser.parse_layout_specification({"anchor": "top_lef"})
    assert not result.success
    assert "Invalid anchor point 'top_lef'" in result.errors
    assert any(e.startswith("Did you mean: top_left") for e in result.errors)


def test_unknown_anchor_lenient_suggests(lenient):
    result = lenient.parse_layout_specification({"anchor": "centre"})
    assert result.success
    assert result.data.anchor is Anchor.CENTER
    assert "Invalid anchor point 'centre', will default to 'center'" in result.warnings
    assert any(w.startswith("Did you mean: center") for w in result.warnings)


def test_anchor_suggestions_can_be_disabled(parser):
    result = parser.with_options(suggest_alternatives=False).parse_layout_specification({"anchor": "centre"})
    assert result.errors == ["Invalid anchor point 'centre'"]


def test_offset_out_of_range(parser, lenient):
    strict = parser.parse_layout_specification({"offset": [1.5, 0]})
    assert "Offset X value 1.5 is outside valid range [-1, 1]" in strict.errors

    loose = lenient.parse_layout_specification({"offset": [1.5, -3]})
    assert loose.success
    assert loose.data.offset == (1.0, -1.0)
    assert "Offset Y value -3.0 will be clamped to [-1, 1] range" in loose.warnings


def test_large_offset_warns(parser):
    result = parser.parse_layout_specification({"offset": [0.9, 0]})
    assert result.success
    assert any("Large offset values" in w for w in result.warnings)


class TestSize:
    def test_non_positive_absolute(self, parser):
        result = parser.parse_layout_specification({"size": {"absolute": {"width": 0, "height": 10}}})
        assert not result.success
        assert "Absolute size dimensions must be positive" in result.errors[0]

    def test_absolute_larger_than_canvas_warns(self, parser):
        ctx = ParseContext(canvas_width=512, canvas_height=512)
        result = parser.parse_layout_specification({"size": {"absolute": {"width": 600, "height": 10}}}, ctx)
        assert result.success
        assert any("may exceed canvas dimensions" in w for w in result.warnings)

    def test_relative_range(self, parser):
        assert not parser.parse_layout_specification({"size": {"relative": 1.5}}).success
        assert not parser.parse_layout_specification({"size": {"relative": 0}}).success
        big = parser.parse_layout_specification({"size": {"relative": 0.9}})
        assert big.success
        assert any("Large relative size" in w for w in big.warnings)

    def test_aspect_constrained(self, parser):
        bad = parser.parse_layout_specification({"size": {"aspect_constrained": {"width": 10, "aspect": -1}}})
        assert "Aspect ratio must be positive, got -1.0" in bad.errors
        extreme = parser.parse_layout_specification({"size": {"aspect_constrained": {"width": 10, "aspect": 20}}})
        assert extreme.success
        assert any("Extreme aspect ratio" in w for w in extreme.warnings)

    def test_two_size_methods_is_schema_error(self, parser):
        result = parser.parse_layout_specification(
            {"size": {"relative": 0.5, "absolute": {"width": 1, "height": 1}}}
        )
        assert not result.success
        assert "Exactly one size specification" in result.errors[0]


class TestRepetition:
    def test_non_positive_count(self, parser):
        result = parser.parse_layout_specification({"repeat": {"type": "grid", "count": [0, 3]}})
        assert result.errors == ["Repetition count must be positive, got [0, 3]"]

    def test_large_grid_warns(self, parser):
        result = parser.parse_layout_specification({"repeat": {"type": "grid", "count": [25, 2]}})
        assert result.success
        assert "Large repetition count [25, 2] may impact performance" in result.warnings

    def test_large_radial_warns(self, parser):
        result = parser.parse_layout_specification({"repeat": {"type": "radial", "count": 60}})
        assert "Large repetition count (60) may impact performance" in result.warnings

    def test_grid_spacing(self, parser):
        assert not parser.parse_layout_specification({"repeat": {"type": "grid", "count": 2, "spacing": 1.5}}).success
        tight = parser.parse_layout_specification({"repeat": {"type": "grid", "count": 2, "spacing": 0.01}})
        assert tight.success
        assert any("Very small grid spacing" in w for w in tight.warnings)

    def test_radial_radius(self, parser):
        assert not parser.parse_layout_specification({"repeat": {"type": "radial", "count": 4, "radius": 0}}).success
        far = parser.parse_layout_specification({"repeat": {"type": "radial", "count": 4, "radius": 250}})
        assert far.success
        assert any("Large radial radius" in w for w in far.warnings)

    def test_radius_checked_against_context(self, parser):
        ctx = ParseContext(canvas_width=200, canvas_height=200)
        result = parser.parse_layout_specification({"repeat": {"type": "radial", "count": 4, "radius": 150}}, ctx)
        assert any("Large radial radius" in w for w in result.warnings)


def test_cross_validation_warnings(parser):
    sized = parser.parse_layout_specification(
        {"size": {"relative": 0.1}, "repeat": {"type": "grid", "count": [4, 4]}}
    )
    assert "Large repetition count (16) with explicit size may cause overlapping" in sized.warnings

    radial = parser.parse_layout_specification(
        {"offset": [0.6, 0], "repeat": {"type": "radial", "count": 6}}
    )
    assert any("radial repetition" in w for w in radial.warnings)


class TestLayoutConfig:
    def test_valid_config(self, parser):
        result = parser.parse_layout_config(
            {"regions": [{"name": "header", "bounds": {"x": 0, "y": 0, "width": 1, "height": 0.2}}], "globalAnchor": "top_left"}
        )
        assert result.success
        assert result.data.regions[0].name == "header"

    def test_region_problems(self, parser):
        result = parser.parse_layout_config(
            {
                "regions": [
                    {"name": "", "bounds": {"x": 0, "y": 0, "width": 0.5, "height": 0.5}},
                    {"name": "center", "bounds": {"x": 0, "y": 0, "width": 0.5, "height": 0.5}},
                    {"name": "wide", "bounds": {"x": 0.5, "y": 0, "width": 0.8, "height": 0.5}},
                    {"name": "wide", "bounds": {"x": 0, "y": 0, "width": 0.5, "height": 0.5}},
                ]
            }
        )
        assert not result.success
        assert "Custom region 0 must have a non-empty name" in result.errors
        assert "Custom region 'center' conflicts with standard region" in result.errors
        assert "Custom region 'wide' extends beyond canvas bounds" in result.errors
        assert "Custom region 'wide' is defined more than once" in result.errors

    def test_tiny_region_warns(self, parser):
        result = parser.parse_layout_config(
            {"regions": [{"name": "dot", "bounds": {"x": 0.5, "y": 0.5, "width": 0.01, "height": 0.01}}]}
        )
        assert result.success
        assert any("is very small" in w for w in result.warnings)

    def test_global_anchor_and_offset_checked(self, parser):
        result = parser.parse_layout_config({"globalAnchor": "nowhere", "globalOffset": [2, 0]})
        assert "Invalid anchor point 'nowhere'" in result.errors
        assert "Offset X value 2.0 is outside valid range [-1, 1]" in result.errors


def test_with_options_returns_new_parser(parser):
    other = parser.with_options(strict=False)
    assert other is not parser
    assert parser.options.strict
    assert not other.options.strict
    assert other.region_manager is parser.region_manager
    assert LayoutParseOptions().strict
