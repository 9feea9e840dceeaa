"""
Frame preprocessing for the detector input tensor.
"""

from __future__ import annotations

import cv2
import numpy as np

DEFAULT_INPUT_SIZE = 320


def preprocess_frame(frame: np.ndarray, input_size: int = DEFAULT_INPUT_SIZE) -> np.ndarray:
    """
    Convert a BGR camera frame into a [1, 3, S, S] float32 RGB tensor in [0, 1].

    The frame is stretched to S x S without letterboxing, so the decoded
    boxes are relative to the whole frame.
    """
    if frame is None or frame.ndim != 3 or frame.shape[2] != 3:
        shape = None if frame is None else frame.shape
        raise ValueError(f"Expected an HxWx3 BGR frame, got shape {shape}")
    if input_size <= 0:
        raise ValueError("input_size must be positive")

    resized = cv2.resize(frame, (input_size, input_size), interpolation=cv2.INTER_LINEAR)
    rgb = cv2.cvtColor(resized, cv2.COLOR_BGR2RGB)
    chw = rgb.astype(np.float32).transpose(2, 0, 1) / 255.0
    return np.ascontiguousarray(chw[np.newaxis, ...], dtype=np.float32)
