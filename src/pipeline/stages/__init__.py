"""
Pipeline stages.
"""

from .announce import AnnounceStage, AnnounceStageConfig, count_by_class

__all__ = [
    "AnnounceStage",
    "AnnounceStageConfig",
    "count_by_class",
]
