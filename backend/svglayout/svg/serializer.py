"""Write SVG markup from layer groups and path elements."""

from __future__ import annotations

import html
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from svglayout.models.document import PathCommand

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@dataclass
class PathElement:
    attrs: dict[str, str]


@dataclass
class LayerGroup:
    label: str
    attrs: dict[str, str]
    paths: list[PathElement] = field(default_factory=list)


def format_number(value: float) -> str:
    """Integers print bare, everything else with two decimals."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def path_data(commands: Sequence[PathCommand]) -> str:
    parts = []
    for cmd in commands:
        if cmd.coords:
            parts.append(f"{cmd.cmd} {' '.join(format_number(v) for v in cmd.coords)}")
        else:
            parts.append(cmd.cmd)
    return " ".join(parts)


def escape_attr(value: str) -> str:
    return html.escape(value, quote=True)


def attr_string(attrs: dict[str, str]) -> str:
    return " ".join(f'{k}="{escape_attr(v)}"' for k, v in attrs.items())


def escape_comment(text: str) -> str:
    # "--" is not allowed inside XML comments
    return text.replace("--", "- -")


def serialize_svg(width: float, height: float, groups: Sequence[LayerGroup]) -> str:
    """Generate the document: one ``<g>`` per layer, preceded by a label comment."""
    w, h = format_number(width), format_number(height)
    lines = [f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {w} {h}" width="{w}" height="{h}">']

    for group in groups:
        lines.append(f"  <!-- Layer: {escape_comment(group.label)} -->")
        lines.append(f"  <g {attr_string(group.attrs)}>")
        for path in group.paths:
            lines.append(f"    <path {attr_string(path.attrs)} />")
        lines.append("  </g>")

    lines.append("</svg>")
    return "\n".join(lines)
