"""Aspect-ratio table — fixed pixel canvases for the six supported ratios."""

from __future__ import annotations

from dataclasses import dataclass

from svglayout.engine.errors import UnknownAspectRatio
from svglayout.engine.thresholds import RATIO_TOLERANCE
from svglayout.models.document import AspectRatio


@dataclass(frozen=True)
class AspectRatioConfig:
    ratio: float
    name: str
    width: int
    height: int


@dataclass(frozen=True)
class CanvasDimensions:
    width: int
    height: int
    aspect_ratio: AspectRatio

    @property
    def view_box(self) -> str:
        return f"0 0 {self.width} {self.height}"


ASPECT_RATIO_CONFIGS: dict[AspectRatio, AspectRatioConfig] = {
    AspectRatio.SQUARE: AspectRatioConfig(1.0, "Square", 512, 512),
    AspectRatio.TRADITIONAL: AspectRatioConfig(4 / 3, "Traditional", 512, 384),
    AspectRatio.WIDESCREEN: AspectRatioConfig(16 / 9, "Widescreen", 512, 288),
    AspectRatio.PHOTO: AspectRatioConfig(3 / 2, "Photo", 512, 341),
    AspectRatio.PORTRAIT: AspectRatioConfig(2 / 3, "Portrait", 341, 512),
    AspectRatio.MOBILE_PORTRAIT: AspectRatioConfig(9 / 16, "Mobile Portrait", 288, 512),
}


def to_aspect_ratio(value: AspectRatio | str) -> AspectRatio:
    try:
        return AspectRatio(value)
    except (ValueError, TypeError):
        raise UnknownAspectRatio(f"Unsupported aspect ratio: {value!r}") from None


def get_config(ratio: AspectRatio | str) -> AspectRatioConfig:
    return ASPECT_RATIO_CONFIGS[to_aspect_ratio(ratio)]


def get_canvas_dimensions(ratio: AspectRatio | str) -> CanvasDimensions:
    ar = to_aspect_ratio(ratio)
    cfg = ASPECT_RATIO_CONFIGS[ar]
    return CanvasDimensions(width=cfg.width, height=cfg.height, aspect_ratio=ar)


def view_box(ratio: AspectRatio | str) -> str:
    return get_canvas_dimensions(ratio).view_box


def scale_factor(from_ratio: AspectRatio | str, to_ratio: AspectRatio | str) -> tuple[float, float]:
    """Per-axis factors mapping one ratio's canvas onto another's."""
    src = get_config(from_ratio)
    dst = get_config(to_ratio)
    return (dst.width / src.width, dst.height / src.height)


def supported_ratios() -> list[AspectRatio]:
    return list(ASPECT_RATIO_CONFIGS)


def is_valid_ratio(value: object) -> bool:
    """True only for one of the six ratio strings."""
    try:
        to_aspect_ratio(value)  # type: ignore[arg-type]
    except UnknownAspectRatio:
        return False
    return True


def closest_ratio(width: float, height: float) -> AspectRatio:
    """Supported ratio whose numeric value is nearest ``width / height``."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
    target = width / height
    return min(ASPECT_RATIO_CONFIGS, key=lambda ar: abs(ASPECT_RATIO_CONFIGS[ar].ratio - target))


def dimensions_match(
    ratio: AspectRatio | str,
    width: float,
    height: float,
    tolerance: float = RATIO_TOLERANCE,
) -> bool:
    """True when ``width / height`` is within a relative tolerance of the nominal ratio."""
    if width <= 0 or height <= 0:
        return False
    nominal = get_config(ratio).ratio
    return abs(width / height - nominal) <= tolerance * nominal
