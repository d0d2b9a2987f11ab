"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Point, box
from shapely.geometry.polygon import Polygon

# Tolerance for float comparisons on normalized bounds (0.67 + 0.33 etc).
EPS = 1e-9


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def scaled(self, sx: float, sy: float) -> Rect:
        return Rect(self.x * sx, self.y * sy, self.width * sx, self.height * sy)

    def to_polygon(self) -> Polygon:
        return box(self.x, self.y, self.right, self.bottom)

    def covers(self, x: float, y: float) -> bool:
        """Boundary-inclusive containment."""
        return self.to_polygon().covers(Point(x, y))

    @classmethod
    def from_extent(cls, xmin: float, ymin: float, xmax: float, ymax: float) -> Rect:
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def as_points(coords: Iterable[float]) -> NDArray[np.float64]:
    """Flat [x0, y0, x1, y1, ...] → Nx2 array."""
    return np.asarray(list(coords), dtype=np.float64).reshape(-1, 2)


def round_half_up(values: NDArray[np.float64], precision: int) -> NDArray[np.float64]:
    """Round to ``precision`` decimals with ties going up (0.125 -> 0.13), unlike ``np.round``."""
    factor = 10.0**precision
    return np.floor(values * factor + 0.5) / factor


def iou(a: Rect, b: Rect) -> float:
    """Intersection over union of two rectangles; 0.0 when both are empty."""
    pa, pb = a.to_polygon(), b.to_polygon()
    union = pa.union(pb).area
    if union <= 0:
        return 0.0
    return float(pa.intersection(pb).area / union)
