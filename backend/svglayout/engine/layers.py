"""Per-layer complexity and cost estimates."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from svglayout.engine.thresholds import (
    LOW_LAYER_COMPLEXITY,
    MEDIUM_LAYER_COMPLEXITY,
    MEMORY_BASE_BYTES,
    MEMORY_BYTES_PER_COMMAND,
    MEMORY_BYTES_PER_PATH,
    RENDER_MS_PER_COMMAND,
    RENDER_MS_PER_PATH,
)
from svglayout.models.document import UnifiedLayer
from svglayout.utils.geometry import Rect, as_points, bbox


@dataclass
class LayerAnalysis:
    id: str
    label: str
    path_count: int
    total_commands: int
    complexity: str
    regions: list[str] = field(default_factory=list)
    anchors: list[str] = field(default_factory=list)
    bounds: Rect | None = None
    estimated_render_time: float = 0.0
    memory_usage: int = 0


@dataclass
class LayerStatistics:
    total_layers: int = 0
    total_paths: int = 0
    total_commands: int = 0
    average_paths_per_layer: float = 0.0
    average_commands_per_path: float = 0.0
    region_distribution: dict[str, int] = field(default_factory=dict)
    complexity_distribution: dict[str, int] = field(default_factory=dict)
    estimated_render_time: float = 0.0
    memory_usage: int = 0


def classify_complexity(path_count: int, command_count: int) -> str:
    if path_count <= LOW_LAYER_COMPLEXITY[0] and command_count <= LOW_LAYER_COMPLEXITY[1]:
        return "low"
    if path_count <= MEDIUM_LAYER_COMPLEXITY[0] and command_count <= MEDIUM_LAYER_COMPLEXITY[1]:
        return "medium"
    return "high"


def render_cost(path_count: int, command_count: int) -> tuple[float, int]:
    """(estimated milliseconds, estimated bytes)."""
    ms = path_count * RENDER_MS_PER_PATH + command_count * RENDER_MS_PER_COMMAND
    memory = MEMORY_BASE_BYTES + path_count * MEMORY_BYTES_PER_PATH + command_count * MEMORY_BYTES_PER_COMMAND
    return ms, memory


def analyze_layer(layer: UnifiedLayer) -> LayerAnalysis:
    commands = sum(len(p.commands) for p in layer.paths)

    regions: list[str] = []
    anchors: list[str] = []
    for layout in [layer.layout, *(p.layout for p in layer.paths)]:
        if layout is None:
            continue
        if layout.region and layout.region not in regions:
            regions.append(layout.region)
        if layout.anchor and layout.anchor not in anchors:
            anchors.append(layout.anchor)

    coords = [v for p in layer.paths for c in p.commands for v in c.coords]
    bounds = Rect.from_extent(*bbox(as_points(coords))) if coords else None
    ms, memory = render_cost(len(layer.paths), commands)

    return LayerAnalysis(
        id=layer.id,
        label=layer.label,
        path_count=len(layer.paths),
        total_commands=commands,
        complexity=classify_complexity(len(layer.paths), commands),
        regions=regions,
        anchors=anchors,
        bounds=bounds,
        estimated_render_time=ms,
        memory_usage=memory,
    )


def layer_statistics(layers: Sequence[UnifiedLayer]) -> LayerStatistics:
    if not layers:
        return LayerStatistics()

    analyses = [analyze_layer(layer) for layer in layers]
    paths = sum(a.path_count for a in analyses)
    commands = sum(a.total_commands for a in analyses)
    regions: Counter[str] = Counter(r for a in analyses for r in a.regions)
    complexity: Counter[str] = Counter(a.complexity for a in analyses)
    ms, memory = render_cost(paths, commands)

    return LayerStatistics(
        total_layers=len(analyses),
        total_paths=paths,
        total_commands=commands,
        average_paths_per_layer=paths / len(analyses),
        average_commands_per_path=commands / paths if paths else 0.0,
        region_distribution=dict(regions),
        complexity_distribution=dict(complexity),
        estimated_render_time=ms,
        memory_usage=memory,
    )
