"""
Inference layer: model runtime adapters and input preprocessing.
"""

from .backend import InferenceProvider, ModelLoadError
from .onnx_backend import OnnxConfig, OnnxInferenceProvider
from .preprocess import DEFAULT_INPUT_SIZE, preprocess_frame

__all__ = [
    "InferenceProvider",
    "ModelLoadError",
    "OnnxConfig",
    "OnnxInferenceProvider",
    "DEFAULT_INPUT_SIZE",
    "preprocess_frame",
]
