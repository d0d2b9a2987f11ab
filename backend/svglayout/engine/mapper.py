"""CoordinateMapper — region + anchor + offset + size → pixel placement.

Also applies a resolved layout to concrete path commands: scale to the
requested size, translate to the placement, fan out repetitions and clamp
into the coordinate bounds.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from svglayout.engine.regions import RegionManager
from svglayout.engine.thresholds import DEFAULT_GRID_SPACING, DEFAULT_RADIAL_RADIUS
from svglayout.models.document import (
    COORDINATE_BOUNDS,
    AbsoluteSize,
    Anchor,
    AspectConstrainedSize,
    CoordinateBounds,
    GridRepetition,
    PathCommand,
    RadialRepetition,
    RelativeSize,
    ResolvedLayout,
    StandardRegion,
)
from svglayout.utils.geometry import Rect, as_points, bbox


@dataclass(frozen=True)
class Placement:
    x: float
    y: float
    width: float | None = None
    height: float | None = None

    @property
    def sized(self) -> bool:
        return self.width is not None and self.height is not None


def _translated(commands: Sequence[PathCommand], dx: float, dy: float) -> list[PathCommand]:
    out = []
    for cmd in commands:
        if not cmd.coords:
            out.append(cmd)
            continue
        pts = as_points(cmd.coords) + np.array([dx, dy])
        out.append(PathCommand(cmd=cmd.cmd, coords=tuple(pts.ravel().tolist())))
    return out


class CoordinateMapper:
    def __init__(
        self,
        region_manager: RegionManager | None = None,
        bounds: CoordinateBounds = COORDINATE_BOUNDS,
    ) -> None:
        self.region_manager = region_manager or RegionManager()
        self.bounds = bounds

    @property
    def canvas_width(self) -> float:
        return self.region_manager.canvas_width

    @property
    def canvas_height(self) -> float:
        return self.region_manager.canvas_height

    def anchor_point(self, region: str, anchor: Anchor | str) -> tuple[float, float]:
        rect = self.region_manager.get_pixel_bounds(region)
        fx, fy = Anchor(anchor).fraction
        return (rect.x + rect.width * fx, rect.y + rect.height * fy)

    def resolve_size(
        self, size: AbsoluteSize | RelativeSize | AspectConstrainedSize | None
    ) -> tuple[float | None, float | None]:
        if size is None:
            return (None, None)
        if isinstance(size, AbsoluteSize):
            return (size.width, size.height)
        if isinstance(size, RelativeSize):
            side = min(self.canvas_width, self.canvas_height) * size.fraction
            return (side, side)
        return (size.width, size.width / size.aspect)

    def resolve(
        self,
        region: str = StandardRegion.CENTER.value,
        anchor: Anchor | str = Anchor.CENTER,
        offset: tuple[float, float] = (0.0, 0.0),
        size: AbsoluteSize | RelativeSize | AspectConstrainedSize | None = None,
    ) -> Placement:
        """Pixel placement for a layout; raises RegionNotFound for unknown regions."""
        rect = self.region_manager.get_pixel_bounds(region)
        bx, by = self.anchor_point(region, anchor)
        x = bx + offset[0] * rect.width
        y = by + offset[1] * rect.height
        width, height = self.resolve_size(size)
        return Placement(x, y, width, height)

    def repeat_positions(
        self,
        placement: Placement,
        repeat: GridRepetition | RadialRepetition,
        region: str = StandardRegion.CENTER.value,
    ) -> list[Placement]:
        """Placements for each repeated element, centred on ``placement``."""
        if isinstance(repeat, GridRepetition):
            rect = self.region_manager.get_pixel_bounds(region)
            cx, cy = repeat.axis_counts
            spacing = repeat.spacing if repeat.spacing is not None else DEFAULT_GRID_SPACING
            step_x = spacing * rect.width
            step_y = spacing * rect.height
            span_x = (cx - 1) * step_x + (placement.width or 0.0)
            span_y = (cy - 1) * step_y + (placement.height or 0.0)
            start_x = placement.x - span_x / 2
            start_y = placement.y - span_y / 2
            return [
                Placement(start_x + col * step_x, start_y + row * step_y, placement.width, placement.height)
                for row in range(cy)
                for col in range(cx)
            ]

        count = repeat.total
        if count <= 0:
            return []
        radius = repeat.radius if repeat.radius is not None else DEFAULT_RADIAL_RADIUS
        return [
            Placement(
                placement.x + math.cos(2 * math.pi * i / count) * radius,
                placement.y + math.sin(2 * math.pi * i / count) * radius,
                placement.width,
                placement.height,
            )
            for i in range(count)
        ]

    @staticmethod
    def bounding_box(commands: Sequence[PathCommand]) -> Rect:
        coords = [v for cmd in commands for v in cmd.coords]
        return Rect.from_extent(*bbox(as_points(coords)))

    def scale_to_fit(
        self,
        commands: Sequence[PathCommand],
        width: float,
        height: float,
        keep_aspect: bool = True,
    ) -> list[PathCommand]:
        """Move commands to the origin and scale them into ``width`` x ``height``."""
        box = self.bounding_box(commands)
        sx = width / box.width if box.width > 0 else None
        sy = height / box.height if box.height > 0 else None
        if sx is None and sy is None:
            scale = np.array([1.0, 1.0])
        elif keep_aspect:
            s = min(v for v in (sx, sy) if v is not None)
            scale = np.array([s, s])
        else:
            scale = np.array([sx or 1.0, sy or 1.0])

        origin = np.array([box.x, box.y])
        out = []
        for cmd in commands:
            if not cmd.coords:
                out.append(cmd)
                continue
            pts = (as_points(cmd.coords) - origin) * scale
            out.append(PathCommand(cmd=cmd.cmd, coords=tuple(pts.ravel().tolist())))
        return out

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        lo, hi = self.bounds.min, self.bounds.max
        return (min(max(x, lo), hi), min(max(y, lo), hi))

    def clamp_commands(self, commands: Sequence[PathCommand]) -> list[PathCommand]:
        out = []
        for cmd in commands:
            coords = tuple(v for x, y in cmd.points for v in self.clamp(x, y))
            out.append(cmd if coords == cmd.coords else PathCommand(cmd=cmd.cmd, coords=coords))
        return out

    def transform_commands(
        self, commands: Sequence[PathCommand], layout: ResolvedLayout
    ) -> list[PathCommand]:
        """Apply a resolved layout to path commands."""
        placement = self.resolve(layout.region, layout.anchor, layout.offset, layout.size)
        local = list(commands)
        if placement.sized:
            local = self.scale_to_fit(local, placement.width, placement.height)  # type: ignore[arg-type]

        positions = (
            self.repeat_positions(placement, layout.repeat, layout.region)
            if layout.repeat is not None
            else [placement]
        )
        out: list[PathCommand] = []
        for pos in positions:
            shifted = _translated(local, pos.x, pos.y)
            if out and shifted and shifted[0].cmd != "M":
                out.append(PathCommand(cmd="M", coords=(pos.x, pos.y)))
            out.extend(shifted)
        return self.clamp_commands(out)
