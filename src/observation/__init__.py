"""
Observation layer for pluggable frame sources.

Abstracts where frames come from (USB camera, network camera, video file)
from the polling loop. Each source implements ObservationSource and returns
FrameData objects.
"""

from .base import ObservationSource, ObservationConfig
from .opencv_source import OpenCVSource, OpenCVSourceConfig, create_source_from_config, redact_url

__all__ = [
    "ObservationSource",
    "ObservationConfig",
    "OpenCVSource",
    "OpenCVSourceConfig",
    "create_source_from_config",
    "redact_url",
]
