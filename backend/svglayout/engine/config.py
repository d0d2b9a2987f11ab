"""Engine options — immutable knobs for the parser, validator and debug overlay."""

from __future__ import annotations

from dataclasses import dataclass, field

from svglayout.models.document import COORDINATE_BOUNDS, CoordinateBounds


@dataclass(frozen=True)
class LayoutParseOptions:
    """Controls how layout specifications are checked and defaulted."""

    # Out-of-range values become errors (strict) or warnings with defaults (lenient)
    strict: bool = True
    allow_custom_regions: bool = True
    # Canvas-aware size and radius checks
    validate_coordinates: bool = True
    # "Did you mean" hints for unknown region names
    suggest_alternatives: bool = True


@dataclass(frozen=True)
class ValidationOptions:
    """Controls document validation and coordinate sanitization."""

    strict: bool = True
    # Emit a rebuilt document when coordinates were clamped or rounded
    sanitize: bool = True
    validate_coordinates: bool = True
    validate_layout: bool = True
    clamp_coordinates: bool = True
    round_precision: int = COORDINATE_BOUNDS.precision
    bounds: CoordinateBounds = field(default=COORDINATE_BOUNDS)


@dataclass(frozen=True)
class DebugOptions:
    """Which overlays the debug visualizer draws."""

    show_regions: bool = True
    show_anchors: bool = True
    show_grid: bool = False
    show_offset_vectors: bool = True
    show_layer_bounds: bool = True
    show_layout_errors: bool = True
    show_performance_metrics: bool = False
    # Colour layer markers by complexity instead of a single layer colour
    highlight_complexity: bool = True
    color_scheme: str = "light"  # light | dark | high-contrast
    opacity: float = 0.7
    grid_size: int = 32
