"""
Announce stage: turns one tick's detections into on-screen counts and a
spoken summary.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from detection.distance import estimate_distance, nearest
from models.detection import Detection, DistanceLevel
from narration.base import NarrationSink
from narration.phrases import ENGLISH, Phrasebook
from pipeline.sinks import PresentationSink


@dataclass
class AnnounceStageConfig:
    """
    Attributes:
        announce_nearest: Append the nearest obstacle to the spoken summary
            when it is estimated to be close.
    """
    announce_nearest: bool = True


def count_by_class(detections: Sequence[Detection]) -> Dict[str, int]:
    """Occurrences per class label, in first-seen order."""
    return dict(Counter(d.class_name for d in detections))


class AnnounceStage:
    """
    Pipeline stage that reports detections to the presentation and
    narration sinks.

    Every tick updates the object list (an empty mapping clears it). Speech
    and the status line are only updated when something was detected, so a
    quiet scene does not produce a stream of "nothing here" utterances.
    """

    def __init__(
        self,
        presentation: PresentationSink,
        narration: NarrationSink,
        phrases: Phrasebook = ENGLISH,
        config: Optional[AnnounceStageConfig] = None,
    ):
        self._presentation = presentation
        self._narration = narration
        self._phrases = phrases
        self._config = config or AnnounceStageConfig()

    def build_message(self, detections: Sequence[Detection]) -> Optional[str]:
        """Spoken summary for a non-empty tick, None when nothing was detected."""
        if not detections:
            return None

        text = self._phrases.detected(len(detections))
        if self._config.announce_nearest:
            closest = nearest(detections)
            estimate = estimate_distance(closest.bbox, self._phrases.distance_labels)
            if estimate.level is DistanceLevel.CLOSE:
                text = f"{text}. {closest.class_name} {estimate.label}"
        return text

    def process(self, detections: List[Detection]) -> Dict[str, int]:
        counts = count_by_class(detections)
        self._presentation.show_objects(counts)

        message = self.build_message(detections)
        if message is not None:
            logging.info(f"[ANNOUNCE] {message} counts={counts}")
            self._narration.speak(message)
            self._presentation.show_status(message)
        return counts
