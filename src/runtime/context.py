from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, List

from models.detection import Detection
from narration.phrases import ENGLISH, Phrasebook


@dataclass
class RuntimeContext:
    """Holds the running flag and collaborator handles; avoids global singletons."""

    config: dict
    source: Any
    detector: Any
    presentation: Any
    narration: Any
    phrases: Phrasebook = ENGLISH

    # Set while the polling loop should keep scheduling ticks.
    running: threading.Event = field(default_factory=threading.Event)
    ready: bool = False

    # Results of the most recent successful tick
    last_detections: List[Detection] = field(default_factory=list)
    last_detections_ts: float = 0.0

    def set_detections(self, detections: List[Detection], ts: float) -> None:
        self.last_detections = list(detections)
        self.last_detections_ts = ts

    @property
    def is_running(self) -> bool:
        return self.running.is_set()
