"""
Tests for detector input preprocessing.
"""

import numpy as np
import pytest

from inference.preprocess import preprocess_frame


class TestPreprocessFrame:
    def test_output_shape_and_dtype(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)

        tensor = preprocess_frame(frame, 320)

        assert tensor.shape == (1, 3, 320, 320)
        assert tensor.dtype == np.float32
        assert tensor.flags["C_CONTIGUOUS"]

    def test_values_scaled_to_unit_range(self):
        frame = np.full((100, 100, 3), 255, dtype=np.uint8)

        tensor = preprocess_frame(frame, 32)

        assert tensor.min() == pytest.approx(1.0)
        assert tensor.max() == pytest.approx(1.0)

    def test_bgr_is_converted_to_rgb(self):
        frame = np.zeros((64, 64, 3), dtype=np.uint8)
        frame[:, :, 0] = 255  # blue channel in BGR

        tensor = preprocess_frame(frame, 32)

        assert tensor[0, 2].mean() == pytest.approx(1.0)
        assert tensor[0, 0].mean() == pytest.approx(0.0)

    def test_custom_input_size(self):
        tensor = preprocess_frame(np.zeros((10, 30, 3), dtype=np.uint8), 64)

        assert tensor.shape == (1, 3, 64, 64)

    @pytest.mark.parametrize("shape", [(480, 640), (480, 640, 4), (480, 640, 1)])
    def test_rejects_non_bgr_frames(self, shape):
        with pytest.raises(ValueError):
            preprocess_frame(np.zeros(shape, dtype=np.uint8))

    def test_rejects_none(self):
        with pytest.raises(ValueError):
            preprocess_frame(None)

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            preprocess_frame(np.zeros((10, 10, 3), dtype=np.uint8), 0)
