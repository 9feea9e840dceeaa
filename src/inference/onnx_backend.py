"""
ONNX Runtime inference provider.

Runs an exported single-stage detector (e.g. yolov8n.onnx) and returns its
first (or named) output flattened to float32.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .backend import InferenceProvider, ModelLoadError


@dataclass(frozen=True)
class OnnxConfig:
    model_path: str
    providers: Sequence[str] = field(default_factory=lambda: ("CPUExecutionProvider",))
    output_name: Optional[str] = "output0"


class OnnxInferenceProvider(InferenceProvider):
    def __init__(self, cfg: OnnxConfig):
        self.cfg = cfg
        try:
            import onnxruntime as ort  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "onnxruntime is not installed. Install with `pip install onnxruntime`."
            ) from e

        if not os.path.exists(cfg.model_path):
            raise ModelLoadError(f"Model file not found: {cfg.model_path}")

        try:
            self._session = ort.InferenceSession(cfg.model_path, providers=list(cfg.providers))
        except Exception as e:
            raise ModelLoadError(f"Failed to load model {cfg.model_path}: {e}") from e

        model_input = self._session.get_inputs()[0]
        self._input_name = model_input.name
        self._input_shape = list(model_input.shape)

        output_names: List[str] = [o.name for o in self._session.get_outputs()]
        if cfg.output_name and cfg.output_name in output_names:
            self._output_name = cfg.output_name
        else:
            self._output_name = output_names[0]
            if cfg.output_name:
                logging.warning(
                    f"Output '{cfg.output_name}' not in model outputs {output_names}, "
                    f"using '{self._output_name}'"
                )

        logging.info(
            f"ONNX model loaded: {cfg.model_path} input={self._input_name}{self._input_shape} "
            f"output={self._output_name} providers={self._session.get_providers()}"
        )

    @property
    def input_name(self) -> str:
        return self._input_name

    @property
    def input_shape(self) -> List:
        return self._input_shape

    @property
    def output_name(self) -> str:
        return self._output_name

    def infer(self, input_tensor: np.ndarray) -> np.ndarray:
        outputs = self._session.run([self._output_name], {self._input_name: input_tensor})
        return np.asarray(outputs[0], dtype=np.float32).ravel()
