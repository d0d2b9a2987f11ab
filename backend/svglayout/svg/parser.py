"""SVG reader — regex extraction of canvas and paths, path data via svgpathtools.

Used to check interpreter output, not to import arbitrary SVG.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from svgpathtools import parse_path

from svglayout.models.document import COMMAND_ARITY

logger = logging.getLogger(__name__)

_SVG_OPEN_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"([^"]+)"')
_WIDTH_RE = re.compile(r'\swidth\s*=\s*"([^"]*?)"')
_HEIGHT_RE = re.compile(r'\sheight\s*=\s*"([^"]*?)"')
_PATH_TAG_RE = re.compile(r"<path\b[^>]*?/?>", re.IGNORECASE)
_ATTR_RE = re.compile(r'([\w:-]+)\s*=\s*"([^"]*)"')
_PATH_CHARS_RE = re.compile(r"^[MLCQZmlcqz0-9eE\s.,+-]*$")
_PATH_TOKEN_RE = re.compile(r"[MLCQZmlcqz]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class ParsedPath:
    id: str
    d: str
    attributes: dict[str, str]


def extract_view_box(svg_text: str) -> tuple[float, float, float, float] | None:
    root = _SVG_OPEN_RE.search(svg_text)
    if not root:
        return None
    match = _VIEWBOX_RE.search(root.group(0))
    if not match:
        return None
    parts = match.group(1).replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return (x, y, w, h)


def extract_canvas(svg_text: str) -> tuple[float, float] | None:
    """(width, height) from the root element's width/height attributes."""
    root = _SVG_OPEN_RE.search(svg_text)
    if not root:
        return None
    w_match = _WIDTH_RE.search(root.group(0))
    h_match = _HEIGHT_RE.search(root.group(0))
    if not (w_match and h_match):
        return None
    try:
        return (float(w_match.group(1).replace("px", "")), float(h_match.group(1).replace("px", "")))
    except ValueError:
        return None


def extract_paths(svg_text: str) -> list[ParsedPath]:
    paths = []
    for match in _PATH_TAG_RE.finditer(svg_text):
        attrs = dict(_ATTR_RE.findall(match.group(0)))
        paths.append(ParsedPath(id=attrs.get("id", ""), d=attrs.get("d", ""), attributes=attrs))
    return paths


def check_path_data(d: str) -> list[str]:
    """Problems with an M/L/C/Q/Z path string; empty when it is well formed."""
    if not d.strip():
        return ["Empty path data"]
    if not _PATH_CHARS_RE.match(d):
        return [f"Invalid characters in path data: {d[:40]}"]

    errors = []
    tokens = _PATH_TOKEN_RE.findall(d)
    if tokens and tokens[0].upper() != "M":
        errors.append("Path data must start with a Move command")

    command = None
    operands = 0
    for token in tokens + ["Z"]:
        if token.isalpha():
            if command is not None:
                arity = COMMAND_ARITY[command.upper()]
                if arity == 0 and operands:
                    errors.append(f"Command {command} takes no coordinates, got {operands}")
                elif arity and (operands == 0 or operands % arity):
                    errors.append(f"Command {command} expects a multiple of {arity} coordinates, got {operands}")
            command, operands = token, 0
        else:
            operands += 1

    if not errors:
        try:
            parse_path(d)
        except Exception as e:
            logger.warning("Failed to parse path: %s", e)
            errors.append(f"Unparseable path data: {e}")
    return errors


def path_extent(d: str) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax) of a path's geometry, or None when it has no segments."""
    path = parse_path(d)
    if len(path) == 0:
        return None
    xmin, xmax, ymin, ymax = path.bbox()
    return (xmin, ymin, xmax, ymax)
