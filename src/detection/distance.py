"""
Coarse proximity estimate from normalized bbox area.

A larger box means the object fills more of the frame and is treated as
closer. Boundary areas fall into the farther bucket.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence, Union

import numpy as np

from models.detection import BoundingBox, Detection, DistanceEstimate, DistanceLevel

CLOSE_AREA = 0.20
MEDIUM_AREA = 0.05

DEFAULT_LABELS: Mapping[DistanceLevel, str] = {
    DistanceLevel.CLOSE: "close",
    DistanceLevel.MEDIUM: "medium distance",
    DistanceLevel.FAR: "far",
}


def _area(bbox: Union[BoundingBox, Sequence[float]]) -> np.float32:
    if isinstance(bbox, BoundingBox):
        return bbox.area
    return np.float32(bbox[2]) * np.float32(bbox[3])


def classify_area(area: float) -> DistanceLevel:
    # Same float32 precision as the decoder, so boxes exactly on a boundary land in the farther bucket.
    area = np.float32(area)
    if area > np.float32(CLOSE_AREA):
        return DistanceLevel.CLOSE
    if area > np.float32(MEDIUM_AREA):
        return DistanceLevel.MEDIUM
    return DistanceLevel.FAR


def estimate_distance(
    bbox: Union[BoundingBox, Sequence[float]],
    labels: Optional[Mapping[DistanceLevel, str]] = None,
) -> DistanceEstimate:
    """
    Estimate proximity from a bbox.

    Args:
        bbox: BoundingBox or [cx, cy, w, h] with normalized w/h.
        labels: Optional level -> spoken label mapping (defaults to English).
    """
    level = classify_area(_area(bbox))
    return DistanceEstimate(level=level, label=(labels or DEFAULT_LABELS)[level])


def nearest(detections: Iterable[Detection]) -> Optional[Detection]:
    """Return the detection with the largest bbox area, first one on ties."""
    best: Optional[Detection] = None
    for det in detections:
        if best is None or det.bbox.area > best.bbox.area:
            best = det
    return best
