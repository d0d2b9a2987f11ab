"""Debug visualization — SVG overlays that explain how a layout was resolved.

Overlays show the region grid, anchor points of used regions, offset
vectors, per-layer bounds coloured by complexity and markers for detected
layout errors. Validation runs lenient and non-sanitizing so every problem
is counted instead of stopping at the first blocking one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import Any

from svglayout.engine.config import DebugOptions
from svglayout.engine.errors import LayoutError
from svglayout.engine.layers import analyze_layer, layer_statistics
from svglayout.engine.mapper import CoordinateMapper
from svglayout.engine.regions import RegionManager
from svglayout.engine.validator import JSONSchemaValidator
from svglayout.models.document import (
    Anchor,
    LayoutSpecification,
    UnifiedLayeredSVGDocument,
    coerce_document,
)
from svglayout.models.results import (
    DebugElement,
    DebugStatistics,
    DebugSummary,
    DebugVisualizationResult,
)
from svglayout.svg.serializer import SVG_NAMESPACE, attr_string, escape_attr, format_number

logger = logging.getLogger(__name__)

COLOR_SCHEMES: dict[str, dict[str, str]] = {
    "light": {
        "region": "#3b82f6",
        "custom_region": "#06b6d4",
        "anchor": "#ef4444",
        "vector": "#10b981",
        "layer": "#8b5cf6",
        "error": "#dc2626",
        "grid": "#e5e7eb",
        "text": "#1f2937",
        "panel": "#ffffff",
    },
    "dark": {
        "region": "#60a5fa",
        "custom_region": "#22d3ee",
        "anchor": "#f87171",
        "vector": "#34d399",
        "layer": "#a78bfa",
        "error": "#ef4444",
        "grid": "#374151",
        "text": "#f9fafb",
        "panel": "#111827",
    },
    "high-contrast": {
        "region": "#0000ff",
        "custom_region": "#008b8b",
        "anchor": "#ff0000",
        "vector": "#008000",
        "layer": "#800080",
        "error": "#ff0000",
        "grid": "#808080",
        "text": "#000000",
        "panel": "#ffffff",
    },
}

COMPLEXITY_COLORS = {"low": "#10b981", "medium": "#f59e0b", "high": "#ef4444"}

ARROW_MARKER_ID = "debug-arrow"
_ANCHOR_RADIUS = 3
_ERROR_RADIUS = 6
_GRID_LABEL_EVERY = 4


def _tag(name: str, attrs: dict[str, str], text: str | None = None) -> str:
    if text is None:
        return f"<{name} {attr_string(attrs)} />"
    return f"<{name} {attr_string(attrs)}>{escape_attr(text)}</{name}>"


def _n(value: float) -> str:
    return format_number(round(value, 2))


class DebugVisualizationSystem:
    def __init__(self, validator: JSONSchemaValidator | None = None) -> None:
        base = validator or JSONSchemaValidator()
        self.validator = base.with_options(strict=False, sanitize=False)

    def generate_debug_visualization(
        self,
        document: UnifiedLayeredSVGDocument | dict[str, Any],
        options: DebugOptions | None = None,
    ) -> DebugVisualizationResult:
        start = time.perf_counter()
        opts = options or DebugOptions()
        doc = coerce_document(document)
        warnings: list[str] = []

        colors = COLOR_SCHEMES.get(opts.color_scheme)
        if colors is None:
            warnings.append(f"Unknown color scheme '{opts.color_scheme}', using 'light'")
            colors = COLOR_SCHEMES["light"]

        canvas = doc.canvas
        regions = RegionManager(canvas.aspect_ratio, canvas.width, canvas.height)
        if doc.layout is not None:
            for region in doc.layout.regions or ():
                try:
                    regions.add_custom_region(region.name, region.bounds)
                except LayoutError as exc:
                    warnings.append(f"Custom region '{region.name}' not shown: {exc}")
        mapper = CoordinateMapper(regions)

        validation = self.validator.validate_document(doc)
        stats = DebugStatistics()
        elements: list[DebugElement] = []

        if opts.show_grid:
            elements.append(self._grid(canvas.width, canvas.height, opts.grid_size, colors))

        used = self._used_regions(doc)
        if opts.show_regions:
            for info in regions.all_regions():
                elements.append(self._region(info.name, info.pixel_bounds, info.custom, info.name in used, colors))
                stats.regions_shown += 1

        if opts.show_anchors:
            for name in used:
                if not regions.has_region(name):
                    warnings.append(f"Region '{name}' is not defined; anchors not shown")
                    continue
                for anchor in Anchor:
                    x, y = mapper.anchor_point(name, anchor)
                    elements.append(self._anchor(name, anchor, x, y, colors))
                    stats.anchors_shown += 1

        if opts.show_offset_vectors:
            elements.extend(self._offset_vectors(doc, regions, mapper, colors))

        if opts.show_layer_bounds:
            for layer in doc.layers:
                elements.append(self._layer_marker(layer, opts, colors))
                stats.layers_analyzed += 1

        layout_errors = self._detect_layout_errors(doc, regions)
        stats.errors_found = len(validation.errors) + len(layout_errors)
        if opts.show_layout_errors:
            for index, (message, x, y) in enumerate(layout_errors):
                elements.append(self._error_marker(index, message, x, y, colors))

        if opts.show_performance_metrics:
            elements.append(self._metrics_panel(doc, canvas.width, colors))

        render_time = (time.perf_counter() - start) * 1000
        logger.info(
            "Debug visualization: %d elements, %d errors in %.2fms",
            len(elements),
            stats.errors_found,
            render_time,
        )
        return DebugVisualizationResult(
            overlay_elements=elements,
            total_elements=len(elements),
            render_time=render_time,
            warnings=warnings,
            validation_errors=validation.errors,
            statistics=stats,
        )

    def create_debug_overlay_svg(
        self,
        document: UnifiedLayeredSVGDocument | dict[str, Any],
        result: DebugVisualizationResult,
        options: DebugOptions | None = None,
    ) -> str:
        opts = options or DebugOptions()
        doc = coerce_document(document)
        colors = COLOR_SCHEMES.get(opts.color_scheme, COLOR_SCHEMES["light"])
        w, h = format_number(doc.canvas.width), format_number(doc.canvas.height)
        lines = [
            f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {w} {h}" width="{w}" height="{h}">',
            "  <defs>",
            f'    <marker id="{ARROW_MARKER_ID}" markerWidth="10" markerHeight="7" refX="9" refY="3.5" orient="auto">',
            f'      <path d="M 0 0 L 10 3.5 L 0 7 Z" fill="{colors["vector"]}" />',
            "    </marker>",
            "  </defs>",
            f'  <g id="debug-overlay" opacity="{opts.opacity:g}">',
        ]
        lines.extend(f"    {element.svg}" for element in result.overlay_elements)
        lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines)

    @staticmethod
    def get_debug_summary(result: DebugVisualizationResult) -> DebugSummary:
        stats = result.statistics
        details = [
            f"Regions shown: {stats.regions_shown}",
            f"Anchors shown: {stats.anchors_shown}",
            f"Layers analyzed: {stats.layers_analyzed}",
            f"Errors found: {stats.errors_found}",
        ]
        details.extend(f"Warning: {w}" for w in result.warnings)

        recommendations = []
        if stats.errors_found:
            recommendations.append(f"Fix {stats.errors_found} layout errors before rendering")
        if result.render_time > 100:
            recommendations.append("Debug overlay is slow to build; disable overlays you do not need")
        if result.total_elements > 500:
            recommendations.append("Overlay is dense; hide the grid or anchors to reduce clutter")

        return DebugSummary(
            summary=(
                f"Debug visualization generated {result.total_elements} elements "
                f"in {result.render_time:.2f}ms"
            ),
            details=details,
            recommendations=recommendations,
        )

    # -- detection ----------------------------------------------------------

    @staticmethod
    def _layouts(doc: UnifiedLayeredSVGDocument) -> list[tuple[str, LayoutSpecification]]:
        found = []
        for layer in doc.layers:
            if layer.layout is not None:
                found.append((f"Layer {layer.id}", layer.layout))
            for path in layer.paths:
                if path.layout is not None:
                    found.append((f"Path {path.id}", path.layout))
        return found

    def _used_regions(self, doc: UnifiedLayeredSVGDocument) -> list[str]:
        used: list[str] = []
        for _, layout in self._layouts(doc):
            if layout.region and layout.region not in used:
                used.append(layout.region)
        return used

    def _detect_layout_errors(
        self, doc: UnifiedLayeredSVGDocument, regions: RegionManager
    ) -> list[tuple[str, float, float]]:
        """(message, x, y) for each problem, positioned where it shows on canvas."""
        width, height = float(doc.canvas.width), float(doc.canvas.height)
        errors = []
        for owner, layout in self._layouts(doc):
            if layout.region and not regions.has_region(layout.region):
                errors.append((f"{owner} references unknown region '{layout.region}'", width / 2, height / 2))
        for _, path in doc.iter_paths():
            for cmd in path.commands:
                for x, y in cmd.points:
                    if not (0 <= x <= width and 0 <= y <= height):
                        errors.append(
                            (
                                f"Path {path.id} point ({_n(x)}, {_n(y)}) is outside the canvas",
                                min(max(x, 0.0), width),
                                min(max(y, 0.0), height),
                            )
                        )
        return errors

    # -- elements -----------------------------------------------------------

    @staticmethod
    def _grid(width: float, height: float, size: int, colors: dict[str, str]) -> DebugElement:
        step = max(size, 1)
        parts = []
        for i, x in enumerate(range(0, int(width) + 1, step)):
            parts.append(_tag("line", {"x1": str(x), "y1": "0", "x2": str(x), "y2": _n(height), "stroke": colors["grid"], "stroke-width": "0.5"}))
            if i % _GRID_LABEL_EVERY == 0:
                parts.append(_tag("text", {"x": str(x + 2), "y": "10", "font-size": "8", "fill": colors["text"]}, str(x)))
        for i, y in enumerate(range(0, int(height) + 1, step)):
            parts.append(_tag("line", {"x1": "0", "y1": str(y), "x2": _n(width), "y2": str(y), "stroke": colors["grid"], "stroke-width": "0.5"}))
            if i % _GRID_LABEL_EVERY == 0 and y:
                parts.append(_tag("text", {"x": "2", "y": str(y - 2), "font-size": "8", "fill": colors["text"]}, str(y)))
        return DebugElement(
            type="grid",
            id="debug-grid",
            svg=f'<g id="debug-grid">{"".join(parts)}</g>',
            metadata={"grid_size": step},
        )

    @staticmethod
    def _region(name, rect, custom: bool, used: bool, colors: dict[str, str]) -> DebugElement:
        color = colors["custom_region" if custom else "region"]
        box = _tag(
            "rect",
            {
                "x": _n(rect.x),
                "y": _n(rect.y),
                "width": _n(rect.width),
                "height": _n(rect.height),
                "fill": color if used else "none",
                "fill-opacity": "0.1",
                "stroke": color,
                "stroke-width": "2" if used else "1",
                "stroke-dasharray": "none" if used else "4 2",
            },
        )
        label = _tag(
            "text",
            {"x": _n(rect.x + 4), "y": _n(rect.y + 12), "font-size": "10", "fill": color},
            name,
        )
        return DebugElement(
            type="region",
            id=f"debug-region-{name}",
            svg=f'<g id="debug-region-{escape_attr(name)}">{box}{label}</g>',
            metadata={"name": name, "custom": custom, "used": used, "bounds": asdict(rect)},
        )

    @staticmethod
    def _anchor(region: str, anchor: Anchor, x: float, y: float, colors: dict[str, str]) -> DebugElement:
        dot = _tag("circle", {"cx": _n(x), "cy": _n(y), "r": str(_ANCHOR_RADIUS), "fill": colors["anchor"]})
        return DebugElement(
            type="anchor",
            id=f"debug-anchor-{region}-{anchor.value}",
            svg=dot,
            metadata={"region": region, "anchor": anchor.value, "x": x, "y": y},
        )

    def _offset_vectors(
        self,
        doc: UnifiedLayeredSVGDocument,
        regions: RegionManager,
        mapper: CoordinateMapper,
        colors: dict[str, str],
    ) -> list[DebugElement]:
        elements = []
        for owner, layout in self._layouts(doc):
            if layout.offset is None or layout.offset == (0.0, 0.0):
                continue
            region = layout.region or "center"
            if not regions.has_region(region):
                continue
            try:
                anchor = Anchor(layout.anchor or Anchor.CENTER)
            except ValueError:
                anchor = Anchor.CENTER
            x1, y1 = mapper.anchor_point(region, anchor)
            placement = mapper.resolve(region, anchor, layout.offset)
            line = _tag(
                "line",
                {
                    "x1": _n(x1),
                    "y1": _n(y1),
                    "x2": _n(placement.x),
                    "y2": _n(placement.y),
                    "stroke": colors["vector"],
                    "stroke-width": "2",
                    "marker-end": f"url(#{ARROW_MARKER_ID})",
                },
            )
            elements.append(
                DebugElement(
                    type="offset_vector",
                    id=f"debug-offset-{owner.replace(' ', '-').lower()}",
                    svg=line,
                    metadata={"owner": owner, "offset": list(layout.offset), "from": [x1, y1], "to": [placement.x, placement.y]},
                )
            )
        return elements

    @staticmethod
    def _layer_marker(layer, opts: DebugOptions, colors: dict[str, str]) -> DebugElement:
        analysis = analyze_layer(layer)
        color = COMPLEXITY_COLORS[analysis.complexity] if opts.highlight_complexity else colors["layer"]
        parts = []
        if analysis.bounds is not None:
            b = analysis.bounds
            parts.append(
                _tag(
                    "rect",
                    {
                        "x": _n(b.x),
                        "y": _n(b.y),
                        "width": _n(b.width),
                        "height": _n(b.height),
                        "fill": "none",
                        "stroke": color,
                        "stroke-width": "1.5",
                        "stroke-dasharray": "6 3",
                    },
                )
            )
            parts.append(
                _tag(
                    "text",
                    {"x": _n(b.x), "y": _n(max(b.y - 4, 8)), "font-size": "9", "fill": color},
                    f"{analysis.label} ({analysis.complexity})",
                )
            )
        metadata = asdict(analysis)
        return DebugElement(
            type="layer_bounds",
            id=f"debug-layer-{layer.id}",
            svg=f'<g id="debug-layer-{escape_attr(layer.id)}">{"".join(parts)}</g>',
            metadata=metadata,
        )

    @staticmethod
    def _error_marker(index: int, message: str, x: float, y: float, colors: dict[str, str]) -> DebugElement:
        marker = _tag(
            "circle",
            {"cx": _n(x), "cy": _n(y), "r": str(_ERROR_RADIUS), "fill": "none", "stroke": colors["error"], "stroke-width": "2"},
        )
        title = f"<title>{escape_attr(message)}</title>"
        return DebugElement(
            type="error",
            id=f"debug-error-{index}",
            svg=f'<g id="debug-error-{index}">{marker}{title}</g>',
            metadata={"message": message, "x": x, "y": y},
        )

    @staticmethod
    def _metrics_panel(doc: UnifiedLayeredSVGDocument, width: float, colors: dict[str, str]) -> DebugElement:
        stats = layer_statistics(doc.layers)
        rows = [
            f"Layers: {stats.total_layers}",
            f"Paths: {stats.total_paths}",
            f"Commands: {stats.total_commands}",
            f"Est. render: {stats.estimated_render_time:.2f}ms",
            f"Est. memory: {stats.memory_usage} B",
        ]
        panel_w, row_h = 150, 14
        x0 = max(width - panel_w - 8, 0)
        parts = [
            _tag(
                "rect",
                {
                    "x": _n(x0),
                    "y": "8",
                    "width": str(panel_w),
                    "height": str(row_h * len(rows) + 8),
                    "fill": colors["panel"],
                    "fill-opacity": "0.9",
                    "stroke": colors["text"],
                },
            )
        ]
        for i, row in enumerate(rows):
            parts.append(
                _tag("text", {"x": _n(x0 + 6), "y": str(8 + row_h * (i + 1)), "font-size": "10", "fill": colors["text"]}, row)
            )
        return DebugElement(
            type="metrics",
            id="debug-metrics",
            svg=f'<g id="debug-metrics">{"".join(parts)}</g>',
            metadata=asdict(stats),
        )
