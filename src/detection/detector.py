"""
Obstacle detector: preprocess -> inference provider -> decoder.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from inference.backend import InferenceProvider
from inference.onnx_backend import OnnxConfig, OnnxInferenceProvider
from inference.preprocess import preprocess_frame
from models.config import DetectorConfig
from models.detection import Detection
from .base import Detector
from .decoder import decode


class ObstacleDetector(Detector):
    """
    Runs the configured model on a frame and decodes the recognized obstacles.

    A provider can be injected (tests, alternative runtimes); otherwise
    load() creates an ONNX Runtime provider from the config.
    """

    def __init__(self, cfg: DetectorConfig, provider: Optional[InferenceProvider] = None):
        self.cfg = cfg
        self._provider = provider

    @property
    def is_loaded(self) -> bool:
        return self._provider is not None

    def load(self) -> None:
        if self._provider is not None:
            return
        self._provider = OnnxInferenceProvider(
            OnnxConfig(
                model_path=self.cfg.model,
                providers=tuple(self.cfg.execution_providers),
                output_name=self.cfg.output_name,
            )
        )

    def detect(self, frame: np.ndarray) -> List[Detection]:
        if self._provider is None:
            raise RuntimeError("Model not loaded")

        input_tensor = preprocess_frame(frame, self.cfg.input_size)
        raw = self._provider.infer(input_tensor)
        detections = decode(
            raw,
            anchor_count=self.cfg.anchor_count,
            class_count=self.cfg.class_count,
            recognized_classes=self.cfg.classes,
            objectness_threshold=self.cfg.objectness_threshold,
            confidence_threshold=self.cfg.confidence_threshold,
        )
        logging.debug(f"[DETECT] {len(detections)} detections")
        return detections
