"""Unified layered document model — the wire format of the layout language.

Documents are frozen: every transformation (sanitization, aspect-ratio
conversion, layout resolution) builds a new value with ``model_copy``.
Region and anchor names are carried as plain strings so that unknown names
reach the layout parser, which reports them (strict) or defaults them
(lenient) and produces a ``ResolvedLayout`` with typed values.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

UNIFIED_SCHEMA_VERSION = "unified-layered-1.0"


class WireModel(BaseModel):
    """Base for every document model: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        allow_inf_nan=False,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class CoordinateBounds:
    min: float = 0.0
    max: float = 512.0
    precision: int = 2


COORDINATE_BOUNDS = CoordinateBounds()


class AspectRatio(str, enum.Enum):
    SQUARE = "1:1"
    TRADITIONAL = "4:3"
    WIDESCREEN = "16:9"
    PHOTO = "3:2"
    PORTRAIT = "2:3"
    MOBILE_PORTRAIT = "9:16"


class Anchor(str, enum.Enum):
    """The nine points of a region an element's origin can sit on."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    CENTER = "center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def fraction(self) -> tuple[float, float]:
        """(fx, fy) position of the anchor inside its region."""
        return ANCHOR_OFFSETS[self]


ANCHOR_OFFSETS: dict[Anchor, tuple[float, float]] = {
    Anchor.TOP_LEFT: (0.0, 0.0),
    Anchor.TOP_CENTER: (0.5, 0.0),
    Anchor.TOP_RIGHT: (1.0, 0.0),
    Anchor.MIDDLE_LEFT: (0.0, 0.5),
    Anchor.CENTER: (0.5, 0.5),
    Anchor.MIDDLE_RIGHT: (1.0, 0.5),
    Anchor.BOTTOM_LEFT: (0.0, 1.0),
    Anchor.BOTTOM_CENTER: (0.5, 1.0),
    Anchor.BOTTOM_RIGHT: (1.0, 1.0),
}


class StandardRegion(str, enum.Enum):
    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    CENTER = "center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"
    FULL_CANVAS = "full_canvas"


class RegionBounds(WireModel):
    """Normalized rectangle in unit canvas space."""

    x: float
    y: float
    width: float
    height: float


REGION_BOUNDS: dict[StandardRegion, RegionBounds] = {
    StandardRegion.TOP_LEFT: RegionBounds(x=0.0, y=0.0, width=0.33, height=0.33),
    StandardRegion.TOP_CENTER: RegionBounds(x=0.33, y=0.0, width=0.34, height=0.33),
    StandardRegion.TOP_RIGHT: RegionBounds(x=0.67, y=0.0, width=0.33, height=0.33),
    StandardRegion.MIDDLE_LEFT: RegionBounds(x=0.0, y=0.33, width=0.33, height=0.34),
    StandardRegion.CENTER: RegionBounds(x=0.33, y=0.33, width=0.34, height=0.34),
    StandardRegion.MIDDLE_RIGHT: RegionBounds(x=0.67, y=0.33, width=0.33, height=0.34),
    StandardRegion.BOTTOM_LEFT: RegionBounds(x=0.0, y=0.67, width=0.33, height=0.33),
    StandardRegion.BOTTOM_CENTER: RegionBounds(x=0.33, y=0.67, width=0.34, height=0.33),
    StandardRegion.BOTTOM_RIGHT: RegionBounds(x=0.67, y=0.67, width=0.33, height=0.33),
    StandardRegion.FULL_CANVAS: RegionBounds(x=0.0, y=0.0, width=1.0, height=1.0),
}

STANDARD_REGION_NAMES: tuple[str, ...] = tuple(r.value for r in StandardRegion)
ANCHOR_NAMES: tuple[str, ...] = tuple(a.value for a in Anchor)


# ---------------------------------------------------------------------------
# Size: exactly one of absolute, relative or aspect_constrained
# ---------------------------------------------------------------------------

SIZE_KEYS = ("absolute", "relative", "aspect_constrained")


class AbsoluteSize(WireModel):
    kind: ClassVar[str] = "absolute"

    width: float
    height: float

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and "absolute" in data:
            return data["absolute"]
        return data

    @model_serializer
    def _to_wire(self) -> dict[str, Any]:
        return {"absolute": {"width": self.width, "height": self.height}}


class RelativeSize(WireModel):
    kind: ClassVar[str] = "relative"

    fraction: float

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and "relative" in data:
            return {"fraction": data["relative"]}
        return data

    @model_serializer
    def _to_wire(self) -> dict[str, Any]:
        return {"relative": self.fraction}


class AspectConstrainedSize(WireModel):
    kind: ClassVar[str] = "aspect_constrained"

    width: float
    aspect: float

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and "aspect_constrained" in data:
            return data["aspect_constrained"]
        return data

    @model_serializer
    def _to_wire(self) -> dict[str, Any]:
        return {"aspect_constrained": {"width": self.width, "aspect": self.aspect}}


def _size_kind(value: Any) -> str | None:
    if isinstance(value, dict):
        present = [key for key in SIZE_KEYS if value.get(key) is not None]
        return present[0] if len(present) == 1 else None
    return getattr(value, "kind", None)


SizeSpec = Annotated[
    Union[
        Annotated[AbsoluteSize, Tag("absolute")],
        Annotated[RelativeSize, Tag("relative")],
        Annotated[AspectConstrainedSize, Tag("aspect_constrained")],
    ],
    Discriminator(
        _size_kind,
        custom_error_type="size_spec",
        custom_error_message=(
            "Exactly one size specification method "
            "(absolute, relative, aspect_constrained) must be provided"
        ),
    ),
]


# ---------------------------------------------------------------------------
# Repetition
# ---------------------------------------------------------------------------

RepeatCount = Union[int, tuple[int, int]]


class GridRepetition(WireModel):
    type: Literal["grid"] = "grid"
    count: RepeatCount
    spacing: float | None = None

    @property
    def axis_counts(self) -> tuple[int, int]:
        if isinstance(self.count, tuple):
            return self.count
        return (self.count, self.count)

    @property
    def total(self) -> int:
        cx, cy = self.axis_counts
        return cx * cy


class RadialRepetition(WireModel):
    type: Literal["radial"] = "radial"
    count: RepeatCount
    radius: float | None = None

    @property
    def total(self) -> int:
        return self.count[0] if isinstance(self.count, tuple) else self.count


RepetitionSpec = Annotated[Union[GridRepetition, RadialRepetition], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class LayoutSpecification(WireModel):
    region: str | None = None
    anchor: str | None = None
    offset: tuple[float, float] | None = None
    size: SizeSpec | None = None
    repeat: RepetitionSpec | None = None
    z_index: int | None = None


class ResolvedLayout(WireModel):
    """A layout specification after semantic validation and defaulting."""

    region: str = StandardRegion.CENTER.value
    anchor: Anchor = Anchor.CENTER
    offset: tuple[float, float] = (0.0, 0.0)
    size: SizeSpec | None = None
    repeat: RepetitionSpec | None = None
    z_index: int | None = None

    @property
    def is_default_placement(self) -> bool:
        return (
            self.region == StandardRegion.CENTER.value
            and self.anchor is Anchor.CENTER
            and self.offset == (0.0, 0.0)
            and self.size is None
            and self.repeat is None
        )


class CustomRegion(WireModel):
    name: str
    bounds: RegionBounds


class UnifiedLayoutConfig(WireModel):
    regions: tuple[CustomRegion, ...] | None = None
    global_anchor: str | None = None
    global_offset: tuple[float, float] | None = None


# ---------------------------------------------------------------------------
# Paths, layers, document
# ---------------------------------------------------------------------------

CommandName = Literal["M", "L", "C", "Q", "Z"]

# Number of coordinate scalars each command takes.
COMMAND_ARITY: dict[str, int] = {"M": 2, "L": 2, "Q": 4, "C": 6, "Z": 0}


class PathCommand(WireModel):
    cmd: CommandName
    coords: tuple[float, ...] = ()

    @model_validator(mode="after")
    def _check_arity(self) -> PathCommand:
        expected = COMMAND_ARITY[self.cmd]
        if len(self.coords) != expected:
            raise ValueError(
                f"Invalid coordinate count for path command {self.cmd}: "
                f"expected {expected}, got {len(self.coords)}"
            )
        return self

    @property
    def points(self) -> list[tuple[float, float]]:
        return [(self.coords[i], self.coords[i + 1]) for i in range(0, len(self.coords), 2)]


class PathStyle(WireModel):
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = Field(default=None, gt=0)
    stroke_linecap: Literal["butt", "round", "square"] | None = None
    stroke_linejoin: Literal["miter", "round", "bevel"] | None = None
    opacity: float | None = Field(default=None, ge=0, le=1)


class UnifiedPath(WireModel):
    id: str = Field(min_length=1)
    style: PathStyle = Field(default_factory=PathStyle)
    commands: tuple[PathCommand, ...]
    layout: LayoutSpecification | None = None

    @property
    def coordinate_count(self) -> int:
        return sum(len(c.coords) for c in self.commands)


class UnifiedLayer(WireModel):
    id: str = Field(min_length=1)
    label: str = Field(min_length=1)
    layout: LayoutSpecification | None = None
    paths: tuple[UnifiedPath, ...] = Field(min_length=1)


class UnifiedCanvas(WireModel):
    width: int
    height: int
    aspect_ratio: AspectRatio


class UnifiedLayeredSVGDocument(WireModel):
    version: Literal["unified-layered-1.0"] = UNIFIED_SCHEMA_VERSION
    canvas: UnifiedCanvas
    layout: UnifiedLayoutConfig | None = None
    layers: tuple[UnifiedLayer, ...] = Field(min_length=1)

    def iter_paths(self) -> Iterator[tuple[UnifiedLayer, UnifiedPath]]:
        for layer in self.layers:
            for path in layer.paths:
                yield layer, path

    @property
    def path_count(self) -> int:
        return sum(len(layer.paths) for layer in self.layers)

    @property
    def command_count(self) -> int:
        return sum(len(path.commands) for _, path in self.iter_paths())

    @property
    def coordinate_count(self) -> int:
        return sum(path.coordinate_count for _, path in self.iter_paths())


def coerce_document(data: Any) -> UnifiedLayeredSVGDocument:
    """Parse wire data into a document; documents pass through unchanged."""
    return UnifiedLayeredSVGDocument.model_validate(data)
