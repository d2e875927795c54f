"""
phaseflow Tracking

Trajectory records built from paired forward/backward integrations and the
playback cursor the renderer uses to reveal them over time.
"""

from .trajectory import Trajectory, build_trajectory
from .playback import PlaybackCursor

__all__ = [
    "Trajectory",
    "build_trajectory",
    "PlaybackCursor",
]
