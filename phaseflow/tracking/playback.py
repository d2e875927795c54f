# phaseflow/tracking/playback.py
"""
Progressive replay of a precomputed trajectory.

The cursor turns elapsed frame time into a number of visible states. Both
directions reveal the same number of points, capped by the shorter one.
"""

from __future__ import annotations
import math

from ..integrators import SampleSequence
from ..utils.config import DEFAULT_POINTS_PER_SECOND, require_non_negative, require_positive
from .trajectory import Trajectory


class PlaybackCursor:
    """
    Per-trajectory playback position owned by the rendering layer.

    Parameters
    ----------
    trajectory : Trajectory
        Record to replay; never modified
    points_per_second : float
        Points revealed per second at speed 1
    """

    def __init__(self, trajectory: Trajectory, points_per_second: float = DEFAULT_POINTS_PER_SECOND):
        self.trajectory = trajectory
        self.points_per_second = require_positive("points_per_second", points_per_second)
        self.progress = 0.0

    def reset(self) -> None:
        """Rewind to the start."""
        self.progress = 0.0

    def advance(self, delta: float) -> int:
        """
        Move the cursor by ``delta`` seconds of frame time.

        Returns
        -------
        int
            Visible point count after the move
        """
        self.progress += require_non_negative("delta", delta) * self.trajectory.speed
        return self.visible_count

    @property
    def max_count(self) -> int:
        return min(len(self.trajectory.forward), len(self.trajectory.backward))

    @property
    def visible_count(self) -> int:
        """Points shown in each direction."""
        return min(int(math.floor(self.progress * self.points_per_second)), self.max_count)

    @property
    def finished(self) -> bool:
        return self.visible_count >= self.max_count

    def visible_forward(self) -> SampleSequence:
        return self.trajectory.forward[:self.visible_count]

    def visible_backward(self) -> SampleSequence:
        return self.trajectory.backward[:self.visible_count]

    def __repr__(self) -> str:
        return f"PlaybackCursor(visible={self.visible_count}/{self.max_count}, progress={self.progress:.3f})"
