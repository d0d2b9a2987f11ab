"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from svglayout.models.results import (
    DebugStatistics,
    DebugSummary,
    SvgBounds,
    ValidationResult,
)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    aspect_ratios: list[str] = Field(default_factory=list)


class ValidateResponse(BaseModel):
    success: bool
    data: dict[str, Any] | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    sanitized: bool = False

    @classmethod
    def from_result(cls, result: ValidationResult) -> ValidateResponse:
        return cls(
            success=result.success,
            data=result.data.to_wire() if result.data is not None else None,
            errors=result.errors,
            warnings=result.warnings,
            sanitized=result.sanitized,
        )


class RenderResponse(BaseModel):
    svg: str
    bounds: SvgBounds
    warnings: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class ConvertResponse(BaseModel):
    document: dict[str, Any]
    warnings: list[str] = Field(default_factory=list)


class DebugResponse(BaseModel):
    summary: DebugSummary
    statistics: DebugStatistics
    total_elements: int = 0
    render_time: float = 0.0
    warnings: list[str] = Field(default_factory=list)
    validation_errors: list[str] = Field(default_factory=list)
    overlay_svg: str | None = None
