"""Layout engine — parse, validate, place and render layered SVG documents."""

from svglayout.engine.config import DebugOptions, LayoutParseOptions, ValidationOptions
from svglayout.engine.debug import DebugVisualizationSystem
from svglayout.engine.errors import (
    InvalidRegionBounds,
    LayoutError,
    RegionConflict,
    RegionNotFound,
    UnknownAspectRatio,
)
from svglayout.engine.interpreter import UnifiedInterpreter
from svglayout.engine.layout_parser import LayoutLanguageParser, ParseContext
from svglayout.engine.mapper import CoordinateMapper, Placement
from svglayout.engine.regions import RegionManager
from svglayout.engine.validator import JSONSchemaValidator

__all__ = [
    "CoordinateMapper",
    "DebugOptions",
    "DebugVisualizationSystem",
    "InvalidRegionBounds",
    "JSONSchemaValidator",
    "LayoutError",
    "LayoutLanguageParser",
    "LayoutParseOptions",
    "ParseContext",
    "Placement",
    "RegionConflict",
    "RegionManager",
    "RegionNotFound",
    "UnifiedInterpreter",
    "UnknownAspectRatio",
    "ValidationOptions",
]
