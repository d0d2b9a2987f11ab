"""Unified Interpreter — renders a validated document to SVG markup.

Layouts are resolved leniently at render time: an unknown region or anchor
falls back to ``center`` with a logged warning rather than failing the render.
Validation is the place to reject such documents.
"""

from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any

import numpy as np

from svglayout.engine.aspect import get_canvas_dimensions, scale_factor
from svglayout.engine.config import LayoutParseOptions
from svglayout.engine.errors import LayoutError
from svglayout.engine.layout_parser import LayoutLanguageParser, ParseContext
from svglayout.engine.mapper import CoordinateMapper
from svglayout.engine.regions import RegionManager
from svglayout.models.document import (
    COORDINATE_BOUNDS,
    AspectRatio,
    CoordinateBounds,
    LayoutSpecification,
    PathCommand,
    UnifiedLayer,
    UnifiedLayeredSVGDocument,
    UnifiedPath,
    coerce_document,
)
from svglayout.models.results import SvgBounds, SvgCheck
from svglayout.svg.parser import check_path_data, extract_paths, extract_view_box
from svglayout.svg.serializer import SVG_NAMESPACE, LayerGroup, PathElement, path_data, serialize_svg
from svglayout.utils.geometry import as_points, bbox, round_half_up

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")
_TAG_GAP_RE = re.compile(r">\s+<")
_SELF_CLOSE_RE = re.compile(r"\s+(/?>)")
_PATH_D_RE = re.compile(r'\sd="([^"]*)"')
_CMD_GAP_RE = re.compile(r"([MLCQZ])\s+")

_RENDER_PARSE_OPTIONS = LayoutParseOptions(strict=False, suggest_alternatives=False)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def effective_layout(
    path: UnifiedPath, layer: UnifiedLayer, document: UnifiedLayeredSVGDocument
) -> LayoutSpecification | None:
    """Path layout over layer layout over the document's global anchor/offset."""
    if path.layout is None and layer.layout is None:
        return None
    p = path.layout or LayoutSpecification()
    lay = layer.layout or LayoutSpecification()
    config = document.layout
    return LayoutSpecification(
        region=_first(p.region, lay.region),
        anchor=_first(p.anchor, lay.anchor, config.global_anchor if config else None),
        offset=_first(p.offset, lay.offset, config.global_offset if config else None),
        size=_first(p.size, lay.size),
        repeat=_first(p.repeat, lay.repeat),
        z_index=_first(p.z_index, lay.z_index),
    )


def _scaled(cmd: PathCommand, factors: np.ndarray, precision: int) -> PathCommand:
    if not cmd.coords:
        return cmd
    pts = round_half_up(as_points(cmd.coords) * factors, precision)
    return cmd.model_copy(update={"coords": tuple(pts.ravel().tolist())})


def _compact_path_data(match: re.Match[str]) -> str:
    return ' d="' + _CMD_GAP_RE.sub(r"\1", match.group(1)) + '"'


def _layout_attrs(layout: LayoutSpecification | None) -> dict[str, str]:
    if layout is None:
        return {}
    attrs = {}
    if layout.region is not None:
        attrs["data-region"] = layout.region
    if layout.anchor is not None:
        attrs["data-anchor"] = layout.anchor
    if layout.offset is not None:
        attrs["data-offset"] = json.dumps(list(layout.offset))
    if layout.size is not None:
        attrs["data-size"] = json.dumps(layout.size.model_dump(mode="json"))
    if layout.repeat is not None:
        attrs["data-repeat"] = json.dumps(layout.repeat.to_wire())
    return attrs


class UnifiedInterpreter:
    def __init__(self, bounds: CoordinateBounds = COORDINATE_BOUNDS) -> None:
        self.bounds = bounds

    def convert_to_svg(self, document: UnifiedLayeredSVGDocument | dict[str, Any]) -> str:
        doc = coerce_document(document)
        canvas = doc.canvas
        regions = RegionManager(canvas.aspect_ratio, canvas.width, canvas.height)
        if doc.layout is not None:
            for region in doc.layout.regions or ():
                try:
                    regions.add_custom_region(region.name, region.bounds)
                except LayoutError as exc:
                    logger.warning("Skipping custom region %r: %s", region.name, exc)

        mapper = CoordinateMapper(regions, self.bounds)
        resolver = LayoutLanguageParser(regions, _RENDER_PARSE_OPTIONS)
        context = ParseContext(canvas_width=canvas.width, canvas_height=canvas.height)

        groups = []
        for layer in doc.layers:
            group = LayerGroup(label=layer.label, attrs=self._layer_attrs(layer))
            for path in layer.paths:
                commands = self._place(path, layer, doc, mapper, resolver, context)
                group.paths.append(PathElement(attrs=self._path_attrs(path, commands)))
            groups.append(group)

        svg = serialize_svg(canvas.width, canvas.height, groups)
        logger.info("Rendered %d layers, %d paths (%d chars)", len(doc.layers), doc.path_count, len(svg))
        return svg

    def _place(
        self,
        path: UnifiedPath,
        layer: UnifiedLayer,
        document: UnifiedLayeredSVGDocument,
        mapper: CoordinateMapper,
        resolver: LayoutLanguageParser,
        context: ParseContext,
    ) -> list[PathCommand]:
        layout = effective_layout(path, layer, document)
        commands = list(path.commands)
        if layout is not None:
            result = resolver.parse_layout_specification(layout, context)
            for warning in result.warnings:
                logger.warning("Path %s: %s", path.id, warning)
            if not result.success or result.data is None:
                logger.warning(
                    "Layout for path %s did not resolve (%s); rendering raw commands",
                    path.id,
                    "; ".join(result.errors),
                )
            elif not result.data.is_default_placement:
                logger.debug("Placing path %s in region %s", path.id, result.data.region)
                return mapper.transform_commands(commands, result.data)
        return mapper.clamp_commands(commands)

    @staticmethod
    def _layer_attrs(layer: UnifiedLayer) -> dict[str, str]:
        attrs = {"id": layer.id, "data-label": layer.label}
        if layer.layout is not None:
            if layer.layout.region is not None:
                attrs["data-region"] = layer.layout.region
            if layer.layout.anchor is not None:
                attrs["data-anchor"] = layer.layout.anchor
            if layer.layout.z_index is not None:
                attrs["data-z-index"] = str(layer.layout.z_index)
        return attrs

    @staticmethod
    def _path_attrs(path: UnifiedPath, commands: list[PathCommand]) -> dict[str, str]:
        style = path.style
        attrs = {
            "id": path.id,
            "d": path_data(commands),
            "fill": style.fill or "none",
            "stroke": style.stroke or "none",
        }
        if style.stroke_width is not None:
            attrs["stroke-width"] = f"{style.stroke_width:g}"
        if style.stroke_linecap is not None:
            attrs["stroke-linecap"] = style.stroke_linecap
        if style.stroke_linejoin is not None:
            attrs["stroke-linejoin"] = style.stroke_linejoin
        if style.opacity is not None:
            attrs["opacity"] = f"{style.opacity:g}"
        attrs.update(_layout_attrs(path.layout))
        return attrs

    # -- post-processing ----------------------------------------------------

    @staticmethod
    def optimize_svg(svg: str) -> str:
        """Strip comments, collapse whitespace and compact path data."""
        out = _COMMENT_RE.sub("", svg)
        out = _WHITESPACE_RE.sub(" ", out)
        out = _TAG_GAP_RE.sub("><", out)
        out = _SELF_CLOSE_RE.sub(r"\1", out)
        out = _PATH_D_RE.sub(_compact_path_data, out)
        out = out.strip()
        return out if len(out) <= len(svg) else svg

    def get_svg_bounds(self, document: UnifiedLayeredSVGDocument | dict[str, Any]) -> SvgBounds:
        """Extent of every coordinate pair; the canvas rectangle when there are none."""
        doc = coerce_document(document)
        coords = [v for _, path in doc.iter_paths() for cmd in path.commands for v in cmd.coords]
        if not coords:
            w, h = float(doc.canvas.width), float(doc.canvas.height)
            return SvgBounds(min_x=0.0, min_y=0.0, max_x=w, max_y=h, width=w, height=h)
        xmin, ymin, xmax, ymax = bbox(as_points(coords))
        return SvgBounds(
            min_x=xmin, min_y=ymin, max_x=xmax, max_y=ymax, width=xmax - xmin, height=ymax - ymin
        )

    def convert_to_aspect_ratio(
        self,
        document: UnifiedLayeredSVGDocument | dict[str, Any],
        ratio: AspectRatio | str,
        *,
        rescale_coordinates: bool = False,
    ) -> UnifiedLayeredSVGDocument:
        """Same document on the canvas of ``ratio``.

        Geometry is kept as-is unless ``rescale_coordinates`` is set, in which
        case every point is scaled by the ratio-to-ratio factors.
        """
        doc = coerce_document(document)
        dims = get_canvas_dimensions(ratio)
        canvas = doc.canvas.model_copy(
            update={"width": dims.width, "height": dims.height, "aspect_ratio": dims.aspect_ratio}
        )
        if not rescale_coordinates:
            return doc.model_copy(update={"canvas": canvas})

        sx, sy = scale_factor(doc.canvas.aspect_ratio, dims.aspect_ratio)
        factors = np.array([sx, sy])
        precision = self.bounds.precision
        layers = []
        for layer in doc.layers:
            paths = []
            for path in layer.paths:
                commands = tuple(_scaled(cmd, factors, precision) for cmd in path.commands)
                paths.append(path.model_copy(update={"commands": commands}))
            layers.append(layer.model_copy(update={"paths": tuple(paths)}))
        return doc.model_copy(update={"canvas": canvas, "layers": tuple(layers)})

    @staticmethod
    def validate_svg(svg: str) -> SvgCheck:
        errors = []
        stripped = svg.strip()
        if not stripped.startswith("<svg"):
            errors.append("SVG must start with <svg> element")
        if not stripped.endswith("</svg>"):
            errors.append("SVG must end with </svg> closing tag")
        if f'xmlns="{SVG_NAMESPACE}"' not in svg:
            errors.append("Missing SVG namespace declaration")
        if extract_view_box(svg) is None:
            errors.append("Missing or invalid viewBox attribute")
        try:
            ET.fromstring(svg)
        except ET.ParseError as exc:
            errors.append(f"Malformed XML: {exc}")

        for index, path in enumerate(extract_paths(svg)):
            label = path.id or str(index)
            errors.extend(f"Path {label}: {problem}" for problem in check_path_data(path.d))
        return SvgCheck(is_valid=not errors, errors=errors)
