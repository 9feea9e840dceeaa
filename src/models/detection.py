"""
Detection models for decoded object detector output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """
    A bounding box in normalized image coordinates.

    Attributes:
        cx: Center x coordinate (0-1).
        cy: Center y coordinate (0-1).
        width: Box width (0-1).
        height: Box height (0-1).
    """
    cx: float
    cy: float
    width: float
    height: float

    @property
    def area(self) -> np.float32:
        """Normalized area at the model's float32 precision."""
        return np.float32(self.width) * np.float32(self.height)

    def as_list(self) -> List[float]:
        """Return as [cx, cy, w, h] list."""
        return [self.cx, self.cy, self.width, self.height]


@dataclass(frozen=True)
class Detection:
    """
    A single decoded detection.

    Attributes:
        class_name: Recognized class label.
        confidence: Objectness times best class probability, in (0, 1].
        bbox: Normalized center-size bounding box.
    """
    class_name: str
    confidence: float
    bbox: BoundingBox

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class": self.class_name,
            "confidence": self.confidence,
            "bbox": self.bbox.as_list(),
        }


class DistanceLevel(str, Enum):
    CLOSE = "close"
    MEDIUM = "medium"
    FAR = "far"


@dataclass(frozen=True)
class DistanceEstimate:
    """Coarse proximity of a detection, derived from its bbox area."""
    level: DistanceLevel
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.level.value, "label": self.label}
