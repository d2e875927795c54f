"""
Rendering smoke checks; nothing is shown on screen.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from phaseflow import Grid2DSpec, Grid3DSpec, build_trajectory, sample_2d, sample_3d
from phaseflow.visualization import (
    animate_trajectories_plotly,
    plot_trajectories_3d,
    plot_vector_field_2d,
)


@pytest.fixture
def scene(rotation_field):
    trajectories = [
        build_trajectory(rotation_field, (1.0, 0.0), steps=20),
        build_trajectory(rotation_field, (2.0, 0.0), steps=20, speed=2.0),
    ]
    arrows = sample_2d(rotation_field, 0.0, Grid2DSpec(-2, 2, -2, 2, 1.0), 0.5)
    director = sample_3d(rotation_field, Grid3DSpec(-1, 1, -1, 1, 0, 1, 1.0, 1.0, 1.0), 0.5)
    return trajectories, arrows, director


def test_plot_trajectories_3d(scene, tmp_path):
    trajectories, arrows, director = scene
    out = tmp_path / "scene.png"
    fig, ax = plot_trajectories_3d(trajectories, arrows, director, show=False, save_path=str(out))
    assert out.exists()
    assert ax.get_zlabel() == "t"


def test_plot_trajectories_3d_partial_counts(scene):
    trajectories, _, _ = scene
    fig, ax = plot_trajectories_3d(trajectories, counts=[0, 5], show=False)
    with pytest.raises(ValueError):
        plot_trajectories_3d(trajectories, counts=[1], show=False)


def test_plot_vector_field_2d(scene):
    trajectories, arrows, _ = scene
    fig, ax = plot_vector_field_2d(arrows, trajectories, bounds=(-3, 3, -3, 3), show=False)
    assert ax.get_xlim() == (-3.0, 3.0)
    assert len(ax.collections) == 1


def test_plotly_animation(scene):
    pytest.importorskip("plotly")
    trajectories, arrows, director = scene
    fig = animate_trajectories_plotly(trajectories, arrows, director, fps=25)
    assert len(fig.frames) > 1
    # vector field, director field, initial markers, then two traces per trajectory
    assert len(fig.data) == 3 + 2 * len(trajectories)

    capped = animate_trajectories_plotly(trajectories, max_frames=3)
    assert len(capped.frames) == 3
