"""
Captured camera frame plus the metadata the polling loop logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class FrameData:
    """
    One frame read from a frame source.

    `frame` is the BGR image as OpenCV returns it; `timestamp` is the wall
    clock time of the read and `frame_index` counts reads since open().
    """
    frame: np.ndarray
    width: int
    height: int
    timestamp: float
    frame_index: int = 0
    source: Optional[str] = None

    @classmethod
    def from_numpy(
        cls,
        frame: np.ndarray,
        timestamp: float,
        frame_index: int = 0,
        source: Optional[str] = None,
    ) -> "FrameData":
        height, width = frame.shape[:2]
        return cls(frame, width, height, timestamp, frame_index, source)
