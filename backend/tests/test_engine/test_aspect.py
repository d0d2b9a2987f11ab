"""Tests for the aspect-ratio table."""

import pytest

from svglayout.engine.aspect import (
    closest_ratio,
    dimensions_match,
    get_canvas_dimensions,
    is_valid_ratio,
    scale_factor,
    supported_ratios,
    view_box,
)
from svglayout.engine.errors import UnknownAspectRatio
from svglayout.models.document import AspectRatio


@pytest.mark.parametrize(
    "ratio,width,height",
    [
        ("1:1", 512, 512),
        ("4:3", 512, 384),
        ("16:9", 512, 288),
        ("3:2", 512, 341),
        ("2:3", 341, 512),
        ("9:16", 288, 512),
    ],
)
def test_canvas_dimensions(ratio, width, height):
    dims = get_canvas_dimensions(ratio)
    assert (dims.width, dims.height) == (width, height)
    assert dims.view_box == f"0 0 {width} {height}"
    assert dims.aspect_ratio == AspectRatio(ratio)


def test_unknown_ratio_raises():
    with pytest.raises(UnknownAspectRatio):
        get_canvas_dimensions("5:4")
    with pytest.raises(ValueError):
        get_canvas_dimensions("")


def test_scale_factor():
    assert scale_factor("1:1", "16:9") == (1.0, 288 / 512)
    assert scale_factor("16:9", "16:9") == (1.0, 1.0)


def test_supported_and_valid():
    assert len(supported_ratios()) == 6
    assert is_valid_ratio("9:16")
    assert not is_valid_ratio("1:2")
    assert not is_valid_ratio(None)


def test_closest_ratio():
    assert closest_ratio(1920, 1080) is AspectRatio.WIDESCREEN
    assert closest_ratio(1000, 1010) is AspectRatio.SQUARE
    assert closest_ratio(1080, 1920) is AspectRatio.MOBILE_PORTRAIT


def test_view_box():
    assert view_box(AspectRatio.TRADITIONAL) == "0 0 512 384"


def test_dimensions_match():
    assert dimensions_match("3:2", 512, 341)
    assert dimensions_match("1:1", 1024, 1024)
    assert not dimensions_match("16:9", 512, 512)
    assert not dimensions_match("1:1", 0, 512)
