"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest


# Sample documents (wire JSON)

RECT_PATH = {
    "id": "rect",
    "style": {"fill": "#ff0000", "stroke": "#000000", "strokeWidth": 2},
    "commands": [
        {"cmd": "M", "coords": [100, 100]},
        {"cmd": "L", "coords": [200, 100]},
        {"cmd": "L", "coords": [200, 200]},
        {"cmd": "L", "coords": [100, 200]},
        {"cmd": "Z", "coords": []},
    ],
}

SIMPLE_DOC = {
    "version": "unified-layered-1.0",
    "canvas": {"width": 512, "height": 512, "aspectRatio": "1:1"},
    "layers": [
        {
            "id": "shapes",
            "label": "Shapes",
            "paths": [RECT_PATH],
        }
    ],
}

LAYOUT_DOC = {
    "version": "unified-layered-1.0",
    "canvas": {"width": 512, "height": 512, "aspectRatio": "1:1"},
    "layout": {
        "regions": [
            {"name": "header", "bounds": {"x": 0, "y": 0, "width": 1, "height": 0.2}},
        ],
        "globalAnchor": "center",
    },
    "layers": [
        {
            "id": "background",
            "label": "Background",
            "layout": {"region": "full_canvas", "zIndex": 0},
            "paths": [
                {
                    "id": "frame",
                    "style": {"fill": "#eeeeee"},
                    "commands": [
                        {"cmd": "M", "coords": [0, 0]},
                        {"cmd": "L", "coords": [512, 0]},
                        {"cmd": "L", "coords": [512, 512]},
                        {"cmd": "L", "coords": [0, 512]},
                        {"cmd": "Z", "coords": []},
                    ],
                }
            ],
        },
        {
            "id": "title",
            "label": "Title",
            "layout": {"region": "header", "anchor": "top_left", "offset": [0.1, 0.1]},
            "paths": [
                {
                    "id": "bar",
                    "style": {"stroke": "#333333", "strokeWidth": 3, "strokeLinecap": "round"},
                    "commands": [
                        {"cmd": "M", "coords": [0, 0]},
                        {"cmd": "L", "coords": [40, 0]},
                    ],
                },
                {
                    "id": "dot",
                    "style": {"fill": "#3366ff"},
                    "layout": {"region": "bottom_right", "anchor": "center", "size": {"absolute": {"width": 20, "height": 20}}},
                    "commands": [
                        {"cmd": "M", "coords": [0, 0]},
                        {"cmd": "Q", "coords": [10, 0, 10, 10]},
                        {"cmd": "C", "coords": [10, 20, 0, 20, 0, 10]},
                        {"cmd": "Z", "coords": []},
                    ],
                },
            ],
        },
    ],
}


def make_doc(**overrides) -> dict:
    """Deep copy of SIMPLE_DOC with top-level keys replaced."""
    doc = copy.deepcopy(SIMPLE_DOC)
    doc.update(copy.deepcopy(overrides))
    return doc


def make_path(path_id: str, commands: list[dict], **extra) -> dict:
    return {"id": path_id, "style": {}, "commands": commands, **extra}


def single_path_doc(path: dict, **layer_extra) -> dict:
    return make_doc(layers=[{"id": "l0", "label": "Layer 0", "paths": [path], **layer_extra}])


@pytest.fixture
def simple_doc() -> dict:
    return copy.deepcopy(SIMPLE_DOC)


@pytest.fixture
def layout_doc() -> dict:
    return copy.deepcopy(LAYOUT_DOC)
