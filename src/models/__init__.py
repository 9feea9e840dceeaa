"""
Typed models for the navigation assistant.
"""

from .frame import FrameData
from .detection import BoundingBox, Detection, DistanceEstimate, DistanceLevel
from .config import (
    DEFAULT_CLASSES,
    Config,
    CameraConfig,
    DetectorConfig,
    PollingConfig,
    NarrationConfig,
    WebConfig,
)

__all__ = [
    # Frame
    "FrameData",
    # Detection
    "BoundingBox",
    "Detection",
    "DistanceEstimate",
    "DistanceLevel",
    # Config
    "DEFAULT_CLASSES",
    "Config",
    "CameraConfig",
    "DetectorConfig",
    "PollingConfig",
    "NarrationConfig",
    "WebConfig",
]
