"""
Pipeline module for the navigation assistant.

The pipeline runs the periodic flow:
- Frame acquisition from the observation source
- Detection (preprocess, inference, decode)
- Reporting counts and a spoken summary (via AnnounceStage)
"""

from .engine import (
    DriverStats,
    FrameUnavailableError,
    InferenceTimeoutError,
    PollingDriver,
)
from .sinks import LogPresentationSink, PresentationSink
from .stages.announce import AnnounceStage, AnnounceStageConfig, count_by_class

__all__ = [
    "DriverStats",
    "FrameUnavailableError",
    "InferenceTimeoutError",
    "PollingDriver",
    "PresentationSink",
    "LogPresentationSink",
    "AnnounceStage",
    "AnnounceStageConfig",
    "count_by_class",
]
