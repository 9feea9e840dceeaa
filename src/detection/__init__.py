"""
Navigation Assistant - Detection Module

Decodes raw detector output into recognized obstacles and estimates
their proximity.
"""

from .base import Detector
from .decoder import ShapeMismatchError, decode, expected_length
from .detector import ObstacleDetector
from .distance import estimate_distance, nearest

__all__ = [
    "Detector",
    "ObstacleDetector",
    "ShapeMismatchError",
    "decode",
    "expected_length",
    "estimate_distance",
    "nearest",
]
