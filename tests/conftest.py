"""Shared fixtures for the phaseflow test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path for testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from phaseflow import PackageConfig, VectorField, reset_config  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts from and leaves behind the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def rotation_field():
    """dx/dt = y, dy/dt = -x: clockwise circles around the origin."""
    return VectorField("y", "-x")


@pytest.fixture
def small_config():
    return PackageConfig(dt=0.05, steps=20)
