"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from svglayout.models.document import AspectRatio


class ValidateRequest(BaseModel):
    document: Any = Field(..., description="Unified layered document (wire JSON)")
    strict: bool | None = Field(default=None, description="Override strict mode")
    sanitize: bool | None = Field(default=None, description="Override coordinate sanitization")


class RenderRequest(BaseModel):
    document: Any = Field(..., description="Unified layered document (wire JSON)")
    optimize: bool | None = Field(default=None, description="Collapse whitespace and strip comments")


class BoundsRequest(BaseModel):
    document: Any = Field(..., description="Unified layered document (wire JSON)")


class ConvertRequest(BaseModel):
    document: Any = Field(..., description="Unified layered document (wire JSON)")
    aspect_ratio: AspectRatio = Field(..., description="Target aspect ratio")
    rescale_coordinates: bool = Field(default=False, description="Scale geometry to the new canvas")


class DebugRequest(BaseModel):
    document: Any = Field(..., description="Unified layered document (wire JSON)")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Debug overlay flags (e.g., show_grid=True, color_scheme='dark')",
    )
    include_overlay_svg: bool = Field(default=True, description="Return the assembled overlay SVG")
