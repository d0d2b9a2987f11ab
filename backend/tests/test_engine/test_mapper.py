"""Tests for the coordinate mapper."""

import pytest

from svglayout.engine.errors import RegionNotFound
from svglayout.engine.mapper import CoordinateMapper, Placement
from svglayout.engine.regions import RegionManager
from svglayout.models.document import (
    AbsoluteSize,
    Anchor,
    AspectConstrainedSize,
    GridRepetition,
    PathCommand,
    RadialRepetition,
    RelativeSize,
    ResolvedLayout,
)


@pytest.fixture
def mapper() -> CoordinateMapper:
    return CoordinateMapper(RegionManager("1:1"))


def test_center_of_center(mapper):
    p = mapper.resolve("center", "center")
    assert p.x == pytest.approx(256.0)
    assert p.y == pytest.approx(256.0)
    assert p.width is None and p.height is None


def test_anchor_corners(mapper):
    p = mapper.resolve("top_left", Anchor.TOP_LEFT)
    assert (p.x, p.y) == (0.0, 0.0)
    p = mapper.resolve("full_canvas", Anchor.BOTTOM_RIGHT)
    assert (p.x, p.y) == (512.0, 512.0)


def test_offset_is_fraction_of_region(mapper):
    p = mapper.resolve("full_canvas", "top_left", (0.25, -0.5))
    assert p.x == pytest.approx(128.0)
    assert p.y == pytest.approx(-256.0)


def test_sizes(mapper):
    absolute = mapper.resolve(size=AbsoluteSize(width=30, height=40))
    assert (absolute.width, absolute.height) == (30, 40)
    assert absolute.sized
    rel = mapper.resolve(size=RelativeSize(fraction=0.5))
    assert (rel.width, rel.height) == (256.0, 256.0)
    aspect = mapper.resolve(size=AspectConstrainedSize(width=100, aspect=2))
    assert (aspect.width, aspect.height) == (100, 50)


def test_relative_size_uses_smaller_canvas_side():
    mapper = CoordinateMapper(RegionManager("16:9"))
    p = mapper.resolve(size=RelativeSize(fraction=0.5))
    assert p.width == p.height == 144.0


def test_resolve_is_deterministic(mapper):
    a = mapper.resolve("top_right", "bottom_center", (0.1, 0.2))
    b = mapper.resolve("top_right", "bottom_center", (0.1, 0.2))
    assert a == b


def test_unknown_region(mapper):
    with pytest.raises(RegionNotFound):
        mapper.resolve("nowhere")


def test_grid_repeat_positions(mapper):
    base = mapper.resolve("full_canvas", "center")
    positions = mapper.repeat_positions(base, GridRepetition(count=(3, 2), spacing=0.1), "full_canvas")
    assert len(positions) == 6
    xs = sorted({round(p.x, 6) for p in positions})
    assert xs == pytest.approx([256 - 51.2, 256.0, 256 + 51.2])


def test_radial_repeat_positions(mapper):
    base = Placement(256.0, 256.0)
    positions = mapper.repeat_positions(base, RadialRepetition(count=4, radius=100))
    assert len(positions) == 4
    assert positions[0].x == pytest.approx(356.0)
    assert positions[0].y == pytest.approx(256.0)
    assert positions[1].y == pytest.approx(356.0)


def test_bounding_box_and_scale_to_fit(mapper):
    commands = [PathCommand(cmd="M", coords=(10, 10)), PathCommand(cmd="L", coords=(30, 50)), PathCommand(cmd="Z")]
    box = mapper.bounding_box(commands)
    assert (box.x, box.y, box.width, box.height) == (10, 10, 20, 40)
    scaled = mapper.scale_to_fit(commands, 10, 10)
    assert scaled[0].coords == (0.0, 0.0)
    assert scaled[1].coords == pytest.approx((5.0, 10.0))


def test_transform_translates_and_clamps(mapper):
    commands = [PathCommand(cmd="M", coords=(0, 0)), PathCommand(cmd="L", coords=(400, 0))]
    layout = ResolvedLayout(region="bottom_right", anchor=Anchor.TOP_LEFT)
    out = mapper.transform_commands(commands, layout)
    start = 0.67 * 512
    assert out[0].coords == pytest.approx((start, start))
    assert out[1].coords == pytest.approx((512.0, start))


def test_transform_with_repeat_starts_each_copy_with_move(mapper):
    commands = [PathCommand(cmd="M", coords=(0, 0)), PathCommand(cmd="L", coords=(5, 5))]
    layout = ResolvedLayout(region="full_canvas", repeat=GridRepetition(count=(2, 1)))
    out = mapper.transform_commands(commands, layout)
    assert [c.cmd for c in out] == ["M", "L", "M", "L"]


def test_clamp(mapper):
    assert mapper.clamp(-5, 600) == (0.0, 512.0)
    assert mapper.clamp(10, 20) == (10, 20)


def test_clamp_commands_clamps_each_point(mapper):
    inside = PathCommand(cmd="M", coords=(10, 20))
    curve = PathCommand(cmd="Q", coords=(-5, 600, 100, 100))
    close = PathCommand(cmd="Z")
    out = mapper.clamp_commands([inside, curve, close])
    assert out[0] is inside
    assert out[1].coords == (0.0, 512.0, 100.0, 100.0)
    assert out[2] is close
