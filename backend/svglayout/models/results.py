"""Result models returned by the parser, validator and interpreter."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, ValidationError

from svglayout.models.document import UnifiedLayeredSVGDocument

T = TypeVar("T")

Complexity = Literal["low", "medium", "high"]


class ParseResult(BaseModel, Generic[T]):
    model_config = {"frozen": True}

    success: bool
    data: T | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of document validation.

    ``data`` is present whenever the document passed the schema stage, even
    when semantic errors were found, so callers can still inspect it.
    """

    model_config = {"frozen": True}

    success: bool
    data: UnifiedLayeredSVGDocument | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    sanitized: bool = False


class CoordinateSanitizationResult(BaseModel):
    model_config = {"frozen": True}

    original: tuple[float, ...]
    sanitized: tuple[float, ...]
    clamped: bool = False
    rounded: bool = False


class DocumentSummary(BaseModel):
    layers: int = 0
    paths: int = 0
    commands: int = 0
    coordinates: int = 0


class ValidationReport(BaseModel):
    is_valid: bool
    summary: DocumentSummary = Field(default_factory=DocumentSummary)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    complexity: Complexity = "low"
    recommendations: list[str] = Field(default_factory=list)


class SvgBounds(BaseModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float


class SvgCheck(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)


def schema_errors(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into ``Schema validation: <path>: <message>`` lines."""
    messages = []
    for err in exc.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in err["loc"])
        if location:
            messages.append(f"Schema validation: {location}: {err['msg']}")
        else:
            messages.append(f"Schema validation: {err['msg']}")
    return messages


# ---------------------------------------------------------------------------
# Debug visualization
# ---------------------------------------------------------------------------

DebugElementType = Literal[
    "grid", "region", "anchor", "offset_vector", "layer_bounds", "error", "metrics"
]


class DebugElement(BaseModel):
    type: DebugElementType
    id: str
    svg: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class DebugStatistics(BaseModel):
    regions_shown: int = 0
    anchors_shown: int = 0
    layers_analyzed: int = 0
    errors_found: int = 0


class DebugVisualizationResult(BaseModel):
    overlay_elements: list[DebugElement] = Field(default_factory=list)
    total_elements: int = 0
    render_time: float = 0.0
    warnings: list[str] = Field(default_factory=list)
    validation_errors: list[str] = Field(default_factory=list)
    statistics: DebugStatistics = Field(default_factory=DebugStatistics)


class DebugSummary(BaseModel):
    summary: str
    details: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
