"""JSONSchemaValidator — schema, semantic and coordinate validation of documents.

Each call builds its own RegionManager and LayoutLanguageParser, so custom
regions declared by one document never leak into another and a validator
instance can be shared freely.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

import numpy as np
from pydantic import ValidationError

from svglayout.engine.config import LayoutParseOptions, ValidationOptions
from svglayout.engine.aspect import dimensions_match
from svglayout.engine.errors import LayoutError
from svglayout.engine.layout_parser import Issues, LayoutLanguageParser, ParseContext
from svglayout.engine.regions import RegionManager
from svglayout.engine.thresholds import (
    CONSOLIDATE_PATHS_ABOVE,
    HIGH_COMPLEXITY_COMMANDS,
    MAX_CANVAS_DIMENSION,
    MAX_DOCUMENT_COMMANDS,
    MAX_DOCUMENT_PATHS,
    MAX_PATH_COMMANDS,
    MAX_PATH_COORDINATES,
    MEDIUM_COMPLEXITY_COMMANDS,
    SIMPLIFY_COORDINATES_ABOVE,
)
from svglayout.models.document import (
    PathCommand,
    UnifiedLayer,
    UnifiedLayeredSVGDocument,
    UnifiedPath,
)
from svglayout.models.results import (
    Complexity,
    CoordinateSanitizationResult,
    DocumentSummary,
    ValidationReport,
    ValidationResult,
    schema_errors,
)
from svglayout.utils.geometry import round_half_up

logger = logging.getLogger(__name__)


def _duplicates(ids: list[str]) -> list[str]:
    return [value for i, value in enumerate(ids) if ids.index(value) != i]


def _format_coords(values: tuple[float, ...]) -> str:
    return ", ".join(str(v) for v in values)


class JSONSchemaValidator:
    def __init__(self, options: ValidationOptions | None = None) -> None:
        self.options = options or ValidationOptions()

    def with_options(self, **changes: Any) -> JSONSchemaValidator:
        return JSONSchemaValidator(replace(self.options, **changes))

    @property
    def layout_options(self) -> LayoutParseOptions:
        return LayoutParseOptions(strict=self.options.strict)

    # -- documents ----------------------------------------------------------

    def validate_document(self, data: Any) -> ValidationResult:
        """Validate and optionally sanitize a document. Never raises on bad input."""
        try:
            document = UnifiedLayeredSVGDocument.model_validate(data)
        except ValidationError as exc:
            errors = schema_errors(exc)
            logger.info("Document failed schema validation (%d errors)", len(errors))
            return ValidationResult(success=False, errors=errors)

        canvas = document.canvas
        regions = RegionManager(canvas.aspect_ratio, canvas.width, canvas.height)
        parser = LayoutLanguageParser(regions, self.layout_options)
        context = ParseContext(canvas_width=canvas.width, canvas_height=canvas.height)
        issues = Issues(strict=self.options.strict)

        if document.layout is not None:
            if self.options.validate_layout:
                config = parser.parse_layout_config(document.layout, context)
                issues.absorb(config.errors, config.warnings, prefix="Layout config: ")
            self._register_regions(regions, document)

        changed = False
        layers = []
        for li, layer in enumerate(document.layers):
            new_layer, layer_changed = self._validate_layer(layer, parser, context, issues, f"Layer {li}: ")
            layers.append(new_layer)
            changed = changed or layer_changed

        self._check_document(document, issues)

        sanitized = changed and self.options.sanitize
        if sanitized:
            document = document.model_copy(update={"layers": tuple(layers)})

        logger.info(
            "Validated document: %d layers, %d errors, %d warnings%s",
            len(document.layers),
            len(issues.errors),
            len(issues.warnings),
            " (sanitized)" if sanitized else "",
        )
        return ValidationResult(
            success=not issues.errors,
            data=document,
            errors=issues.errors,
            warnings=issues.warnings,
            sanitized=sanitized,
        )

    def sanitize_document(self, document: Any) -> UnifiedLayeredSVGDocument | None:
        """Sanitized copy of ``document``; None when it does not pass the schema."""
        result = self.with_options(sanitize=True).validate_document(document)
        return result.data

    def create_validation_report(self, document: Any) -> ValidationReport:
        result = self.validate_document(document)
        doc = result.data
        if doc is None:
            return ValidationReport(is_valid=False, errors=result.errors, warnings=result.warnings)

        summary = DocumentSummary(
            layers=len(doc.layers),
            paths=doc.path_count,
            commands=doc.command_count,
            coordinates=doc.coordinate_count,
        )
        complexity: Complexity = "low"
        if summary.commands > HIGH_COMPLEXITY_COMMANDS:
            complexity = "high"
        elif summary.commands > MEDIUM_COMPLEXITY_COMMANDS:
            complexity = "medium"

        recommendations = []
        if complexity == "high":
            recommendations.append("Consider simplifying paths or splitting into multiple documents")
        if summary.paths > CONSOLIDATE_PATHS_ABOVE:
            recommendations.append("Consider consolidating similar paths into fewer layers")
        if summary.coordinates > SIMPLIFY_COORDINATES_ABOVE:
            recommendations.append("Consider reducing coordinate precision or simplifying curves")

        return ValidationReport(
            is_valid=result.success,
            summary=summary,
            errors=result.errors,
            warnings=result.warnings,
            complexity=complexity,
            recommendations=recommendations,
        )

    # -- coordinates --------------------------------------------------------

    def sanitize_coordinates(self, coords: tuple[float, ...] | list[float]) -> CoordinateSanitizationResult:
        """Round to ``round_precision``, then clamp into bounds."""
        original = tuple(float(v) for v in coords)
        values = np.asarray(original, dtype=np.float64)
        rounded = clamped = False

        if self.options.round_precision >= 0:
            r = round_half_up(values, self.options.round_precision)
            rounded = bool(np.any(np.abs(r - values) > np.finfo(np.float64).eps))
            values = r
        if self.options.clamp_coordinates:
            bounds = self.options.bounds
            c = np.clip(values, bounds.min, bounds.max)
            clamped = bool(np.any(c != values))
            values = c

        return CoordinateSanitizationResult(
            original=original,
            sanitized=tuple(values.tolist()),
            clamped=clamped,
            rounded=rounded,
        )

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _register_regions(regions: RegionManager, document: UnifiedLayeredSVGDocument) -> None:
        for region in document.layout.regions or ():  # type: ignore[union-attr]
            try:
                regions.add_custom_region(region.name, region.bounds)
            except LayoutError as exc:
                logger.debug("Custom region %r not registered: %s", region.name, exc)

    def _check_layout(
        self,
        layout: Any,
        parser: LayoutLanguageParser,
        context: ParseContext,
        issues: Issues,
        prefix: str,
    ) -> None:
        if layout is None or not self.options.validate_layout:
            return
        result = parser.parse_layout_specification(layout, context)
        issues.absorb(result.errors, result.warnings, prefix=f"{prefix}Layout: ")

    def _validate_layer(
        self,
        layer: UnifiedLayer,
        parser: LayoutLanguageParser,
        context: ParseContext,
        issues: Issues,
        prefix: str,
    ) -> tuple[UnifiedLayer, bool]:
        self._check_layout(layer.layout, parser, context, issues, prefix)

        changed = False
        paths = []
        for pi, path in enumerate(layer.paths):
            new_path, path_changed = self._validate_path(path, parser, context, issues, f"{prefix}Path {pi}: ")
            paths.append(new_path)
            changed = changed or path_changed

        dupes = _duplicates([p.id for p in layer.paths])
        if dupes:
            issues.errors.append(f"{prefix.rstrip(': ')} has duplicate path IDs: {', '.join(dupes)}")

        if changed:
            layer = layer.model_copy(update={"paths": tuple(paths)})
        return layer, changed

    def _validate_path(
        self,
        path: UnifiedPath,
        parser: LayoutLanguageParser,
        context: ParseContext,
        issues: Issues,
        prefix: str,
    ) -> tuple[UnifiedPath, bool]:
        self._check_layout(path.layout, parser, context, issues, prefix)
        self._check_structure(path, issues, prefix)

        changed = False
        commands = []
        for ci, command in enumerate(path.commands):
            new_command = self._validate_command(command, issues, f"{prefix}Command {ci}: ")
            commands.append(new_command)
            changed = changed or new_command is not command

        if changed:
            path = path.model_copy(update={"commands": tuple(commands)})
        return path, changed

    def _validate_command(self, command: PathCommand, issues: Issues, prefix: str) -> PathCommand:
        if not self.options.validate_coordinates or command.cmd == "Z":
            return command

        result = self.sanitize_coordinates(command.coords)
        if result.clamped:
            bounds = self.options.bounds
            if issues.strict:
                issues.errors.append(
                    f"{prefix}Coordinates out of bounds [{bounds.min:g}, {bounds.max:g}]: "
                    f"{_format_coords(result.original)}"
                )
            else:
                issues.warnings.append(
                    f"{prefix}Coordinates clamped to bounds: "
                    f"{_format_coords(result.original)} -> {_format_coords(result.sanitized)}"
                )
        if result.rounded:
            issues.warnings.append(
                f"{prefix}Coordinates rounded to {self.options.round_precision} decimal places"
            )
        if result.clamped or result.rounded:
            return command.model_copy(update={"coords": result.sanitized})
        return command

    @staticmethod
    def _check_structure(path: UnifiedPath, issues: Issues, prefix: str) -> None:
        commands = path.commands
        if not commands:
            issues.errors.append(f"{prefix}Path must have at least one command")
            return
        if commands[0].cmd != "M":
            issues.errors.append(f"{prefix}Path must start with a Move (M) command")
        seen_move = False
        for ci, command in enumerate(commands):
            if command.cmd == "M":
                seen_move = True
            elif not seen_move and command.cmd != "Z" and ci > 0:
                issues.errors.append(
                    f"{prefix}Command at index {ci} ({command.cmd}) appears before any Move command"
                )
        if len(commands) > MAX_PATH_COMMANDS:
            issues.warnings.append(f"{prefix}Path has {len(commands)} commands, which may impact performance")
        if path.coordinate_count > MAX_PATH_COORDINATES:
            issues.warnings.append(
                f"{prefix}Path has {path.coordinate_count} coordinates, which may impact performance"
            )

    @staticmethod
    def _check_document(document: UnifiedLayeredSVGDocument, issues: Issues) -> None:
        dupes = _duplicates([layer.id for layer in document.layers])
        if dupes:
            issues.errors.append(f"Duplicate layer IDs found: {', '.join(dupes)}")

        if document.path_count > MAX_DOCUMENT_PATHS:
            issues.warnings.append(f"Document has {document.path_count} paths, which may impact performance")
        if document.command_count > MAX_DOCUMENT_COMMANDS:
            issues.warnings.append(
                f"Document has {document.command_count} path commands, which may impact performance"
            )

        canvas = document.canvas
        if canvas.width <= 0 or canvas.height <= 0:
            issues.errors.append("Canvas dimensions must be positive")
            return
        if canvas.width > MAX_CANVAS_DIMENSION or canvas.height > MAX_CANVAS_DIMENSION:
            issues.warnings.append("Large canvas dimensions may impact performance")
        if not dimensions_match(canvas.aspect_ratio, canvas.width, canvas.height):
            issues.warnings.append(
                f"Canvas {canvas.width}x{canvas.height} does not match aspect ratio "
                f"{canvas.aspect_ratio.value}"
            )
