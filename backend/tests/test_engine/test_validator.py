"""Tests for document validation and sanitization."""

import copy

import pytest

from svglayout.engine.config import ValidationOptions
from svglayout.engine.validator import JSONSchemaValidator
from svglayout.models.document import UnifiedLayeredSVGDocument
from tests.conftest import LAYOUT_DOC, SIMPLE_DOC, make_doc, make_path, single_path_doc


@pytest.fixture
def validator() -> JSONSchemaValidator:
    return JSONSchemaValidator()


@pytest.fixture
def lenient(validator) -> JSONSchemaValidator:
    return validator.with_options(strict=False)


def _out_of_bounds_doc() -> dict:
    return single_path_doc(
        make_path(
            "p",
            [
                {"cmd": "M", "coords": [-10.123456, 600.987654]},
                {"cmd": "L", "coords": [100, 100]},
            ],
        )
    )


def test_simple_document_valid(validator):
    result = validator.validate_document(SIMPLE_DOC)
    assert result.success
    assert result.errors == []
    assert result.warnings == []
    assert not result.sanitized
    assert isinstance(result.data, UnifiedLayeredSVGDocument)


def test_layout_document_valid(validator):
    result = validator.validate_document(LAYOUT_DOC)
    assert result.success, result.errors


@pytest.mark.parametrize("bad", [None, 0, "doc", [], {}, {"canvas": {"width": 1}}])
def test_malformed_input_never_raises(validator, bad):
    result = validator.validate_document(bad)
    assert not result.success
    assert result.data is None
    assert result.errors


def test_self_referential_input_never_raises(validator):
    doc = {"canvas": {"width": 512, "height": 512, "aspectRatio": "1:1"}, "layers": []}
    doc["layers"].append(doc)
    result = validator.validate_document(doc)
    assert not result.success


def test_empty_document_rejected(validator):
    result = validator.validate_document(make_doc(layers=[]))
    assert not result.success
    assert any("layers" in e for e in result.errors)


def test_layer_without_paths_rejected(validator):
    result = validator.validate_document(make_doc(layers=[{"id": "a", "label": "A", "paths": []}]))
    assert not result.success


def test_wrong_version_rejected(validator):
    result = validator.validate_document(make_doc(version="2.0"))
    assert not result.success


class TestCoordinates:
    def test_sanitize_coordinates(self, validator):
        result = validator.sanitize_coordinates([-10.123456, 600.987654])
        assert result.sanitized == (0.0, 512.0)
        assert result.clamped
        assert result.rounded
        assert result.original == (-10.123456, 600.987654)

    def test_clean_coordinates_untouched(self, validator):
        result = validator.sanitize_coordinates([10.5, 20])
        assert result.sanitized == (10.5, 20.0)
        assert not result.clamped
        assert not result.rounded

    def test_rounding_ties_go_up(self, validator):
        result = validator.sanitize_coordinates([0.125, 10.375])
        assert result.sanitized == (0.13, 10.38)
        assert result.rounded
        assert not result.clamped

    def test_strict_clamp_is_error(self, validator):
        result = validator.validate_document(_out_of_bounds_doc())
        assert not result.success
        assert any(e.startswith("Layer 0: Path 0: Command 0: Coordinates out of bounds [0, 512]") for e in result.errors)

    def test_lenient_clamp_is_warning_and_sanitizes(self, lenient):
        result = lenient.validate_document(_out_of_bounds_doc())
        assert result.success
        assert result.sanitized
        assert result.data.layers[0].paths[0].commands[0].coords == (0.0, 512.0)
        assert any("Coordinates clamped to bounds" in w for w in result.warnings)
        assert any("Coordinates rounded to 2 decimal places" in w for w in result.warnings)

    def test_sanitized_output_is_in_bounds_and_rounded(self, lenient):
        result = lenient.validate_document(_out_of_bounds_doc())
        for layer in result.data.layers:
            for path in layer.paths:
                for cmd in path.commands:
                    for v in cmd.coords:
                        assert 0 <= v <= 512
                        assert abs(round(v, 2) - v) < 1e-9

    def test_clamping_is_idempotent(self, lenient):
        first = lenient.validate_document(_out_of_bounds_doc())
        second = lenient.validate_document(first.data.to_wire())
        assert second.success
        assert second.errors == []
        assert not second.sanitized
        assert second.data == first.data

    def test_sanitize_disabled_keeps_document(self, lenient):
        result = lenient.with_options(sanitize=False).validate_document(_out_of_bounds_doc())
        assert not result.sanitized
        assert result.data.layers[0].paths[0].commands[0].coords == (-10.123456, 600.987654)

    def test_close_path_coordinates_ignored(self, validator):
        doc = single_path_doc(make_path("p", [{"cmd": "M", "coords": [1, 1]}, {"cmd": "Z"}]))
        assert validator.validate_document(doc).success

    def test_custom_bounds(self):
        from svglayout.models.document import CoordinateBounds

        validator = JSONSchemaValidator(ValidationOptions(bounds=CoordinateBounds(0, 100, 2), strict=False))
        result = validator.sanitize_coordinates([150, 50])
        assert result.sanitized == (100.0, 50.0)


class TestPathStructure:
    def test_must_start_with_move(self, validator):
        doc = single_path_doc(make_path("p", [{"cmd": "L", "coords": [1, 1]}, {"cmd": "L", "coords": [2, 2]}]))
        result = validator.validate_document(doc)
        assert not result.success
        assert "Layer 0: Path 0: Path must start with a Move (M) command" in result.errors
        assert any("appears before any Move command" in e for e in result.errors)

    def test_empty_commands(self, validator):
        result = validator.validate_document(single_path_doc(make_path("p", [])))
        assert "Layer 0: Path 0: Path must have at least one command" in result.errors

    def test_long_path_warns(self, validator):
        commands = [{"cmd": "M", "coords": [0, 0]}] + [{"cmd": "L", "coords": [1, 1]}] * 1000
        result = validator.validate_document(single_path_doc(make_path("p", commands)))
        assert result.success
        assert any("1001 commands" in w for w in result.warnings)
        assert any("2002 coordinates" in w for w in result.warnings)


class TestDocumentChecks:
    def test_duplicate_layer_ids(self, validator):
        layer = SIMPLE_DOC["layers"][0]
        result = validator.validate_document(make_doc(layers=[layer, copy.deepcopy(layer)]))
        assert not result.success
        assert "Duplicate layer IDs found: shapes" in result.errors

    def test_duplicate_path_ids(self, validator):
        path = make_path("dup", [{"cmd": "M", "coords": [1, 1]}])
        result = validator.validate_document(
            make_doc(layers=[{"id": "l", "label": "L", "paths": [path, copy.deepcopy(path)]}])
        )
        assert not result.success
        assert "Layer 0 has duplicate path IDs: dup" in result.errors

    def test_non_positive_canvas(self, validator):
        result = validator.validate_document(make_doc(canvas={"width": 0, "height": 512, "aspectRatio": "1:1"}))
        assert "Canvas dimensions must be positive" in result.errors

    def test_canvas_ratio_mismatch_warns(self, validator):
        result = validator.validate_document(make_doc(canvas={"width": 512, "height": 512, "aspectRatio": "16:9"}))
        assert result.success
        assert any("does not match aspect ratio 16:9" in w for w in result.warnings)

    def test_large_canvas_warns(self, validator):
        result = validator.validate_document(make_doc(canvas={"width": 5000, "height": 5000, "aspectRatio": "1:1"}))
        assert "Large canvas dimensions may impact performance" in result.warnings

    def test_many_paths_warns(self, validator):
        paths = [make_path(f"p{i}", [{"cmd": "M", "coords": [1, 1]}]) for i in range(101)]
        result = validator.validate_document(make_doc(layers=[{"id": "l", "label": "L", "paths": paths}]))
        assert any("Document has 101 paths" in w for w in result.warnings)


class TestLayoutDelegation:
    def test_layer_layout_errors_are_prefixed(self, validator):
        doc = copy.deepcopy(SIMPLE_DOC)
        doc["layers"][0]["layout"] = {"region": "centre"}
        result = validator.validate_document(doc)
        assert not result.success
        assert "Layer 0: Layout: Unknown region 'centre'" in result.errors
        assert "Layer 0: Layout: Did you mean: center?" in result.errors

    def test_path_layout_errors_are_prefixed(self, validator):
        doc = copy.deepcopy(SIMPLE_DOC)
        doc["layers"][0]["paths"][0]["layout"] = {"anchor": "middle"}
        result = validator.validate_document(doc)
        assert "Layer 0: Path 0: Layout: Invalid anchor point 'middle'" in result.errors

    def test_custom_regions_visible_to_layer_layouts(self, validator):
        result = validator.validate_document(LAYOUT_DOC)
        assert not any("header" in e for e in result.errors)

    def test_custom_regions_do_not_leak_between_documents(self, validator):
        assert validator.validate_document(LAYOUT_DOC).success
        doc = copy.deepcopy(SIMPLE_DOC)
        doc["layers"][0]["layout"] = {"region": "header"}
        result = validator.validate_document(doc)
        assert "Layer 0: Layout: Unknown region 'header'" in result.errors

    def test_layout_config_errors_prefixed(self, validator):
        result = validator.validate_document(make_doc(layout={"globalAnchor": "nowhere"}))
        assert "Layout config: Invalid anchor point 'nowhere'" in result.errors

    def test_layout_validation_can_be_disabled(self, validator):
        doc = copy.deepcopy(SIMPLE_DOC)
        doc["layers"][0]["layout"] = {"region": "centre"}
        assert validator.with_options(validate_layout=False).validate_document(doc).success

    def test_lenient_layout_warnings(self, lenient):
        doc = copy.deepcopy(SIMPLE_DOC)
        doc["layers"][0]["layout"] = {"region": "centre"}
        result = lenient.validate_document(doc)
        assert result.success
        assert "Layer 0: Layout: Unknown region 'centre', will default to 'center'" in result.warnings


class TestReport:
    def test_report_counts(self, validator):
        report = validator.create_validation_report(SIMPLE_DOC)
        assert report.is_valid
        assert report.summary.layers == 1
        assert report.summary.paths == 1
        assert report.summary.commands == 5
        assert report.summary.coordinates == 8
        assert report.complexity == "low"
        assert report.recommendations == []

    def test_report_complexity(self, validator):
        commands = [{"cmd": "M", "coords": [0, 0]}] + [{"cmd": "L", "coords": [1, 1]}] * 600
        report = validator.create_validation_report(single_path_doc(make_path("p", commands)))
        assert report.complexity == "high"
        assert report.recommendations

    def test_report_for_malformed_input(self, validator):
        report = validator.create_validation_report({"nope": True})
        assert not report.is_valid
        assert report.summary.layers == 0


def test_sanitize_document(validator):
    doc = validator.sanitize_document(_out_of_bounds_doc())
    assert doc.layers[0].paths[0].commands[0].coords == (0.0, 512.0)
    assert validator.sanitize_document(None) is None


def test_options_are_immutable(validator):
    other = validator.with_options(strict=False)
    assert validator.options.strict
    assert not other.options.strict
    with pytest.raises(AttributeError):
        validator.options.strict = False  # type: ignore[misc]
