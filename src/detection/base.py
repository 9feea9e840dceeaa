"""
Detection interfaces.

Detectors take a raw camera frame and return decoded detections with
normalized boxes. Keeping this thin lets the polling loop run against the
ONNX detector in production and simple fakes in tests.
"""

from __future__ import annotations

from typing import List

import numpy as np

from models.detection import Detection


class Detector:
    """Detector interface returning detections in normalized coordinates."""

    @property
    def is_loaded(self) -> bool:
        return True

    def load(self) -> None:
        """Prepare the detector (load model weights). No-op by default."""

    def detect(self, frame: np.ndarray) -> List[Detection]:
        raise NotImplementedError
