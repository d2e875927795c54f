"""
Grid sweep, arrow geometry, 2D/3D samplers and picker canvas tests.
"""

import math

import numpy as np
import pytest

from phaseflow import InvalidConfigurationError
from phaseflow.fields import (
    ArrowGeometry,
    FieldSample,
    Grid2DSpec,
    Grid3DSpec,
    SelectorCanvas,
    arrows_to_segments,
    grid_axis,
    sample_2d,
    sample_3d,
)
from phaseflow.fields.arrows import make_arrow_2d, make_arrow_3d, perpendicular
from phaseflow.fields.sampler import sample_field
from phaseflow.utils.config import HEAD_ANGLE, HEAD_LENGTH_FRACTION


# ---------- grid_axis ----------

def test_axis_includes_both_bounds():
    assert np.allclose(grid_axis(-5, 5, 1.0), np.arange(-5, 6))
    assert grid_axis(-5, 5, 0.5).size == 21


def test_index_sweep_is_robust_to_binary_spacing():
    axis = grid_axis(0.0, 0.3, 0.1)
    assert axis.size == 4
    assert axis[-1] == pytest.approx(0.3)


def test_accumulate_sweep_drifts():
    # 0.1 + 0.1 + 0.1 overshoots 0.3, so the last point is lost
    assert grid_axis(0.0, 0.3, 0.1, sweep="accumulate").size == 3


def test_degenerate_axes():
    assert grid_axis(2.0, 2.0, 1.0).tolist() == [2.0]
    assert grid_axis(3.0, 1.0, 1.0).size == 0


@pytest.mark.parametrize("kwargs", [
    {"spacing": 0.0},
    {"spacing": -1.0},
    {"spacing": 1.0, "sweep": "random"},
    {"spacing": 1.0, "hi": math.inf},
])
def test_axis_rejects_bad_input(kwargs):
    args = {"lo": 0.0, "hi": 1.0}
    args.update(kwargs)
    with pytest.raises(InvalidConfigurationError):
        grid_axis(**args)


# ---------- grid specs ----------

def test_grid2d_points_are_x_major():
    grid = Grid2DSpec(0, 1, 0, 1, 1.0)
    assert list(grid.points()) == [(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)]
    assert grid.size() == 4


def test_grid3d_points_are_t_minor():
    grid = Grid3DSpec(0, 1, 0, 0, 0, 1, 1.0, 1.0, 1.0)
    assert list(grid.points()) == [(0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, 0.0), (1.0, 0.0, 1.0)]


def test_default_director_lattice():
    assert Grid3DSpec().size() == 11 ** 3


def test_from_dict_accepts_camel_case():
    grid = Grid3DSpec.from_dict({"xMin": -1, "xMax": 1, "tSpacing": 0.5})
    assert grid.x_min == -1.0
    assert grid.t_spacing == 0.5
    assert grid.y_min == -5.0


def test_grid_specs_validate():
    with pytest.raises(InvalidConfigurationError):
        Grid2DSpec(spacing=0.0)
    with pytest.raises(InvalidConfigurationError):
        Grid2DSpec(x_min="left")
    with pytest.raises(InvalidConfigurationError):
        Grid3DSpec(t_max=math.nan)


# ---------- arrows ----------

def test_arrow_2d_geometry():
    arrow = make_arrow_2d(FieldSample(0.0, 0.0, 0.0, 3.0, 0.0), 2.0)
    L = HEAD_LENGTH_FRACTION * 2.0
    c, s = math.cos(HEAD_ANGLE), math.sin(HEAD_ANGLE)
    assert arrow.start == (0.0, 0.0, 0.0)
    assert arrow.end == pytest.approx((2.0, 0.0, 0.0))
    (_, right), (_, left) = arrow.heads
    assert right == pytest.approx((2.0 - L * c, -L * s, 0.0))
    assert left == pytest.approx((2.0 - L * c, L * s, 0.0))


def test_arrow_2d_skips_zero_and_invalid():
    assert make_arrow_2d(FieldSample(0.0, 0.0, 0.0, 1e-12, -1e-12), 1.0) is None
    assert make_arrow_2d(FieldSample(0.0, 0.0, 0.0, valid=False), 1.0) is None
    assert make_arrow_2d(FieldSample(0.0, 0.0, 0.0, math.inf, 0.0), 1.0) is None


def test_arrow_3d_shaft_advances_in_t():
    arrow = make_arrow_3d(FieldSample(1.0, 2.0, 3.0, 0.5, -1.0), 2.0)
    assert arrow.end == pytest.approx((2.0, 0.0, 5.0))
    for _, tip in arrow.heads:
        # head segments point back toward the start
        back = np.subtract(tip, arrow.end)
        shaft = np.subtract(arrow.end, arrow.start)
        assert np.dot(back, shaft) < 0.0
        assert np.linalg.norm(back) == pytest.approx(HEAD_LENGTH_FRACTION * 2.0)


@pytest.mark.parametrize("d", [
    (0.0, 0.0, 1.0),
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (1 / math.sqrt(3), 1 / math.sqrt(3), 1 / math.sqrt(3)),
])
def test_perpendicular_is_unit_and_orthogonal(d):
    p = perpendicular(np.array(d))
    assert np.linalg.norm(p) == pytest.approx(1.0)
    assert np.dot(p, d) == pytest.approx(0.0, abs=1e-12)


def test_segments_stack():
    arrow = make_arrow_2d(FieldSample(0.0, 0.0, 0.0, 1.0, 1.0), 1.0)
    assert isinstance(arrow, ArrowGeometry)
    assert arrow.as_array().shape == (3, 2, 3)
    assert arrows_to_segments([arrow, arrow]).shape == (6, 2, 3)
    assert arrows_to_segments([]).shape == (0, 2, 3)


# ---------- sample_field ----------

def test_sample_field_marks_failures():
    samples = sample_field(("1/x", "0"), [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0)])
    assert not samples[0].valid
    assert "1/x" in samples[0].error
    assert samples[1].valid
    assert samples[1].dx == pytest.approx(0.5)


def test_sample_field_marks_non_finite():
    samples = sample_field(lambda x, y, t: (math.nan, 1.0), [(0.0, 0.0, 0.0)])
    assert not samples[0].valid


# ---------- sample_2d ----------

def test_zero_field_draws_nothing():
    assert sample_2d(("0", "0"), 0.0, Grid2DSpec(), 1.0) == []


def test_rotation_field_skips_only_origin(rotation_field):
    arrows = sample_2d(rotation_field, 0.0, Grid2DSpec(-1, 1, -1, 1, 1.0), 1.0)
    assert len(arrows) == 8
    assert all(a.start[2] == 0.0 and a.end[2] == 0.0 for a in arrows)
    for a in arrows:
        length = math.hypot(a.end[0] - a.start[0], a.end[1] - a.start[1])
        assert length == pytest.approx(1.0)


def test_arrows_lie_on_time_slice(rotation_field):
    arrows = sample_2d(rotation_field, 2.5, Grid2DSpec(-1, 1, -1, 1, 1.0), 0.5)
    points = arrows_to_segments(arrows)
    assert np.all(points[..., 2] == 2.5)


def test_unit_field_arrow_at_origin():
    arrows = sample_2d(("1", "0"), 0.0, Grid2DSpec(0, 0, 0, 0, 1.0), 1.5, color="#123456", width=2.0)
    assert len(arrows) == 1
    arrow = arrows[0]
    L = HEAD_LENGTH_FRACTION * 1.5
    assert arrow.end == pytest.approx((1.5, 0.0, 0.0))
    assert arrow.heads[0][1] == pytest.approx((1.5 - L * math.cos(HEAD_ANGLE), -L * math.sin(HEAD_ANGLE), 0.0))
    assert arrow.heads[1][1] == pytest.approx((1.5 - L * math.cos(HEAD_ANGLE), L * math.sin(HEAD_ANGLE), 0.0))
    assert (arrow.color, arrow.width) == ("#123456", 2.0)


def test_failed_points_are_skipped():
    # the x = 0 column divides by zero
    arrows = sample_2d(("1/x", "1"), 0.0, Grid2DSpec(-1, 1, -1, 1, 1.0), 1.0)
    assert len(arrows) == 6
    assert all(a.start[0] != 0.0 for a in arrows)


def test_grid_mapping_and_time_dependence():
    grid = {"xMin": 0, "xMax": 0, "yMin": 0, "yMax": 0, "spacing": 1}
    assert sample_2d(("t", "0"), 0.0, grid, 1.0) == []
    assert len(sample_2d(("t", "0"), 1.0, grid, 1.0)) == 1


def test_sample_2d_rejects_bad_scale(rotation_field):
    with pytest.raises(InvalidConfigurationError):
        sample_2d(rotation_field, 0.0, Grid2DSpec(), 0.0)
    with pytest.raises(TypeError):
        sample_2d(rotation_field, 0.0, [1, 2, 3], 1.0)


# ---------- sample_3d ----------

def test_zero_field_director_points_up_in_t():
    grid = Grid3DSpec(0, 1, 0, 1, 0, 1, 1.0, 1.0, 1.0)
    arrows = sample_3d(("0", "0"), grid, 0.5)
    assert len(arrows) == 8
    for a in arrows:
        assert np.subtract(a.end, a.start) == pytest.approx((0.0, 0.0, 0.5))
        assert a.color == "#ff0000"
        assert a.width == 0.05


def test_director_shaft_scales_components(rotation_field):
    grid = Grid3DSpec(1, 1, 2, 2, 0, 0, 1.0, 1.0, 1.0)
    (arrow,) = sample_3d(rotation_field, grid, 2.0)
    assert np.subtract(arrow.end, arrow.start) == pytest.approx((4.0, -2.0, 2.0))


def test_director_skips_failures():
    grid = Grid3DSpec(-1, 1, 0, 0, 0, 0, 1.0, 1.0, 1.0)
    arrows = sample_3d(("1/x", "0"), grid, 1.0)
    assert len(arrows) == 2


# ---------- SelectorCanvas ----------

def test_pixel_mapping():
    canvas = SelectorCanvas()
    assert canvas.pixels_per_unit == 40.0
    assert canvas.pixel_to_point(0, 0) == (-5.0, 5.0)
    assert canvas.pixel_to_point(200, 200) == (0.0, 0.0)
    assert canvas.pixel_to_point(400, 400) == (5.0, -5.0)
    assert canvas.point_to_pixel(*canvas.pixel_to_point(123, 321)) == pytest.approx((123, 321))


def test_probe_grid_excludes_borders():
    points = SelectorCanvas().probe_points()
    assert len(points) == 39 * 39
    xs = {p[0] for p in points}
    assert min(xs) == pytest.approx(-4.75)
    assert max(xs) == pytest.approx(4.75)


def test_selector_arrows_drop_exact_zero(rotation_field):
    canvas = SelectorCanvas()
    arrows = canvas.sample_arrows(rotation_field, 0.0)
    assert len(arrows) == 39 * 39 - 1
    for a in arrows:
        assert math.hypot(a.end[0] - a.start[0], a.end[1] - a.start[1]) == pytest.approx(0.125)


def test_selector_rejects_bad_geometry():
    with pytest.raises(InvalidConfigurationError):
        SelectorCanvas(size=0)
