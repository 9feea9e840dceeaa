"""
Inference provider interface.

Providers take a normalized [1, 3, S, S] float32 tensor and return the raw
model output as a flat float32 array. Decoding is done by the caller.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class ModelLoadError(RuntimeError):
    """Raised when a model cannot be loaded by the inference runtime."""


class InferenceProvider(Protocol):
    def infer(self, input_tensor: np.ndarray) -> np.ndarray:
        ...
