"""
Decoder for raw single-stage detector output.

The model returns one flat float32 buffer logically shaped
[1, 4 + 1 + C, A], channel-major:

    planes 0..3   box geometry (cx, cy, w, h), A values each
    plane  4      objectness
    planes 5..    one probability plane per class (C planes)

Each anchor is filtered on objectness, then on objectness times its best
class probability, and kept only when that class has a recognized label.
Overlapping boxes are NOT merged (no non-max suppression); consumers
receive every anchor that clears both thresholds, in anchor order.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from models.config import DEFAULT_CLASSES
from models.detection import BoundingBox, Detection

ANCHOR_COUNT = 8400
CLASS_COUNT = 80
OBJECTNESS_THRESHOLD = 0.3
CONFIDENCE_THRESHOLD = 0.4

# cx, cy, w, h + objectness
_HEADER_PLANES = 5


class ShapeMismatchError(ValueError):
    """Raised when a raw output buffer does not match the expected layout."""

    def __init__(self, actual: int, expected: int, anchor_count: int, class_count: int):
        super().__init__(
            f"Raw detection tensor has {actual} values, expected {expected} "
            f"(anchors={anchor_count}, classes={class_count})"
        )
        self.actual = actual
        self.expected = expected


def expected_length(anchor_count: int = ANCHOR_COUNT, class_count: int = CLASS_COUNT) -> int:
    """Number of values in a raw output buffer for the given layout."""
    return (_HEADER_PLANES + class_count) * anchor_count


def decode(
    tensor,
    anchor_count: int = ANCHOR_COUNT,
    class_count: int = CLASS_COUNT,
    recognized_classes: Optional[Sequence[str]] = None,
    objectness_threshold: float = OBJECTNESS_THRESHOLD,
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> List[Detection]:
    """
    Decode a raw output buffer into detections.

    Args:
        tensor: Flat (or [1, 5+C, A]-shaped) buffer of model output values.
        anchor_count: Number of anchors A.
        class_count: Number of class planes C.
        recognized_classes: Class index -> label. Indices past the end of
            the list (or with an empty label) are dropped.
        objectness_threshold: Anchors with objectness <= this are skipped.
        confidence_threshold: Anchors with objectness * best class
            probability <= this are skipped.

    Returns:
        Detections in ascending anchor order.

    Raises:
        ShapeMismatchError: If the buffer length does not match the layout.
    """
    if anchor_count <= 0 or class_count <= 0:
        raise ValueError("anchor_count and class_count must be positive")
    labels = DEFAULT_CLASSES if recognized_classes is None else recognized_classes

    data = np.asarray(tensor, dtype=np.float32).ravel()
    expected = expected_length(anchor_count, class_count)
    if data.size != expected:
        raise ShapeMismatchError(data.size, expected, anchor_count, class_count)

    planes = data.reshape(_HEADER_PLANES + class_count, anchor_count)
    objectness = planes[4]

    # Thresholds are compared at float32 so a stored 0.3 sits exactly on the boundary.
    candidates = np.flatnonzero(objectness > np.float32(objectness_threshold))
    if candidates.size == 0:
        return []

    class_probs = planes[_HEADER_PLANES:, candidates]
    # argmax returns the first maximum, so ties resolve to the lowest class index.
    best_class = class_probs.argmax(axis=0)
    best_prob = class_probs[best_class, np.arange(candidates.size)]
    final = objectness[candidates] * best_prob

    keep = (final > np.float32(confidence_threshold)) & (best_class < len(labels))

    detections: List[Detection] = []
    for anchor, class_id, confidence in zip(candidates[keep], best_class[keep], final[keep]):
        label = labels[int(class_id)]
        if not label:
            continue
        detections.append(
            Detection(
                class_name=label,
                confidence=float(confidence),
                bbox=BoundingBox(
                    cx=float(planes[0, anchor]),
                    cy=float(planes[1, anchor]),
                    width=float(planes[2, anchor]),
                    height=float(planes[3, anchor]),
                ),
            )
        )
    return detections
