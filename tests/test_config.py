"""
Configuration and timing utility tests.
"""

import math

import pytest

from phaseflow import InvalidConfigurationError, PackageConfig, configure, get_config, reset_config
from phaseflow.utils import Timer, create_progress_callback, memory_info, timeit


def test_defaults():
    cfg = PackageConfig()
    assert cfg.dt == 0.05
    assert cfg.steps == 200
    assert cfg.integrator == "rk4"
    assert cfg.points_per_second == 50.0
    assert cfg.grid_sweep == "index"
    assert not cfg.verbose


@pytest.mark.parametrize("kwargs", [
    {"dt": 0.0},
    {"dt": math.inf},
    {"steps": -1},
    {"steps": 1.5},
    {"speed": -0.5},
    {"points_per_second": 0},
    {"integrator": "leapfrog"},
    {"grid_sweep": "random"},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(InvalidConfigurationError):
        PackageConfig(**kwargs)


def test_configure_updates_global():
    configure(dt=0.1, verbose=True)
    cfg = get_config()
    assert cfg.dt == 0.1
    assert cfg.verbose
    reset_config()
    assert get_config().dt == 0.05


def test_failed_configure_keeps_previous():
    configure(steps=50)
    with pytest.raises(InvalidConfigurationError):
        configure(steps=-3)
    assert get_config().steps == 50


def test_unknown_key_warns():
    with pytest.warns(UserWarning, match="Unknown configuration parameter"):
        configure(colour="red")


def test_as_dict_round_trip():
    cfg = PackageConfig(dt=0.2, integrator="euler")
    assert PackageConfig(**cfg.as_dict()) == cfg


# ---------- timing helpers ----------

def test_timer_measures(capsys):
    with Timer("work") as timer:
        sum(range(1000))
    assert timer.elapsed >= 0.0
    assert "work:" in capsys.readouterr().out


def test_timer_requires_start():
    with pytest.raises(RuntimeError):
        Timer().stop()


def test_timeit_silent_when_disabled(capsys):
    with timeit("quiet", enabled=False) as timer:
        pass
    assert capsys.readouterr().out == ""
    assert timer.end_time is not None


def test_memory_tracking():
    info = memory_info()
    assert set(info) == {"rss_mb", "vms_mb", "available_mb", "percent_used"}
    with Timer("mem", track_memory=True, report=False) as timer:
        pass
    assert "rss_mb" in timer.memory_delta


def test_progress_callback(capsys):
    progress = create_progress_callback("Integration", update_every=2, show_rate=False)
    for step in range(1, 5):
        progress(step, 4)
    out = capsys.readouterr().out
    assert "Integration: 2/4 (50.0%)" in out
    assert "Integration: 4/4 (100.0%)" in out
    assert "1/4" not in out
