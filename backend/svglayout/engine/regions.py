"""Region registry — the standard thirds grid plus per-document custom regions.

Bounds are normalized to the unit square; pixel bounds scale them by the
canvas of the manager's aspect ratio (or an explicit canvas size).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from svglayout.engine.aspect import get_canvas_dimensions
from svglayout.engine.errors import InvalidRegionBounds, RegionConflict, RegionNotFound
from svglayout.models.document import (
    REGION_BOUNDS,
    STANDARD_REGION_NAMES,
    AspectRatio,
    RegionBounds,
    StandardRegion,
)
from svglayout.utils.geometry import EPS, Rect, iou

logger = logging.getLogger(__name__)

_STANDARD_RECTS: dict[str, Rect] = {
    region.value: Rect(b.x, b.y, b.width, b.height) for region, b in REGION_BOUNDS.items()
}


@dataclass(frozen=True)
class RegionInfo:
    name: str
    bounds: Rect
    pixel_bounds: Rect
    custom: bool


def bounds_problem(bounds: Rect) -> str | None:
    """Describe why ``bounds`` is not a usable normalized rectangle, or None."""
    if not (0 <= bounds.x <= 1 and 0 <= bounds.y <= 1):
        return f"position ({bounds.x}, {bounds.y}) must be within [0, 1] range"
    if not (0 < bounds.width <= 1 and 0 < bounds.height <= 1):
        return (
            f"dimensions ({bounds.width}x{bounds.height}) "
            "must be positive and within [0, 1] range"
        )
    if bounds.right > 1 + EPS or bounds.bottom > 1 + EPS:
        return "extends beyond canvas bounds"
    return None


def to_rect(bounds: Rect | RegionBounds | Mapping[str, Any]) -> Rect:
    if isinstance(bounds, Rect):
        return bounds
    if isinstance(bounds, RegionBounds):
        return Rect(bounds.x, bounds.y, bounds.width, bounds.height)
    return Rect(
        float(bounds["x"]), float(bounds["y"]), float(bounds["width"]), float(bounds["height"])
    )


class RegionManager:
    """Named rectangles a layout can target.

    Standard regions are fixed; custom regions are validated on insert and
    never replace a standard name.
    """

    def __init__(
        self,
        aspect_ratio: AspectRatio | str = AspectRatio.SQUARE,
        canvas_width: float | None = None,
        canvas_height: float | None = None,
    ) -> None:
        dims = get_canvas_dimensions(aspect_ratio)
        self.aspect_ratio = dims.aspect_ratio
        self._canvas_width = float(canvas_width if canvas_width is not None else dims.width)
        self._canvas_height = float(canvas_height if canvas_height is not None else dims.height)
        self._custom: dict[str, Rect] = {}

    @property
    def canvas_width(self) -> float:
        return self._canvas_width

    @property
    def canvas_height(self) -> float:
        return self._canvas_height

    @staticmethod
    def is_standard(name: str) -> bool:
        return name in _STANDARD_RECTS

    @staticmethod
    def standard_regions() -> list[str]:
        return list(STANDARD_REGION_NAMES)

    def has_region(self, name: str) -> bool:
        return name in _STANDARD_RECTS or name in self._custom

    def get_bounds(self, name: str) -> Rect:
        if name in _STANDARD_RECTS:
            return _STANDARD_RECTS[name]
        if name in self._custom:
            return self._custom[name]
        raise RegionNotFound(f"Unknown region '{name}'")

    def get_pixel_bounds(self, name: str) -> Rect:
        return self.get_bounds(name).scaled(self._canvas_width, self._canvas_height)

    def add_custom_region(self, name: str, bounds: Rect | RegionBounds | Mapping[str, Any]) -> None:
        if not name or not name.strip():
            raise InvalidRegionBounds("Custom region must have a non-empty name")
        if self.is_standard(name):
            raise RegionConflict(f"Custom region '{name}' conflicts with standard region")
        rect = to_rect(bounds)
        problem = bounds_problem(rect)
        if problem:
            raise InvalidRegionBounds(f"Custom region '{name}' {problem}")
        if name in self._custom:
            logger.debug("Replacing custom region %s", name)
        self._custom[name] = rect

    def remove_custom_region(self, name: str) -> bool:
        return self._custom.pop(name, None) is not None

    def get_custom_regions(self) -> list[str]:
        return list(self._custom)

    def all_regions(self) -> list[RegionInfo]:
        infos = [
            RegionInfo(name, rect, rect.scaled(self._canvas_width, self._canvas_height), False)
            for name, rect in _STANDARD_RECTS.items()
        ]
        infos.extend(
            RegionInfo(name, rect, rect.scaled(self._canvas_width, self._canvas_height), True)
            for name, rect in self._custom.items()
        )
        return infos

    def region_at_point(self, x: float, y: float) -> str | None:
        """Name of the region covering normalized point (x, y).

        Custom regions win over standard ones; among standard regions the
        thirds grid wins over ``full_canvas``.
        """
        for name, rect in self._custom.items():
            if rect.covers(x, y):
                return name
        for name, rect in _STANDARD_RECTS.items():
            if name != StandardRegion.FULL_CANVAS.value and rect.covers(x, y):
                return name
        if _STANDARD_RECTS[StandardRegion.FULL_CANVAS.value].covers(x, y):
            return StandardRegion.FULL_CANVAS.value
        return None

    def region_overlap(self, a: str, b: str) -> float:
        """Intersection over union of two named regions."""
        return iou(self.get_bounds(a), self.get_bounds(b))
