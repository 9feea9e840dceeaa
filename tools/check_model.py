#!/usr/bin/env python3
"""
Check an exported detector model against the decoder's expected layout.

This utility helps verify that:
1. The ONNX model loads with the configured execution providers
2. Its output has (5 + classes) * anchors values
3. Decoding an image (or a blank frame) produces sensible detections

Usage:
    python tools/check_model.py --model models/yolov8n.onnx
    python tools/check_model.py --model models/yolov8n.onnx --image street.jpg
"""

import argparse
import os
import sys
import time

# Add project directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

import cv2
import numpy as np

from detection.decoder import ShapeMismatchError, decode, expected_length
from detection.distance import estimate_distance
from inference.backend import ModelLoadError
from inference.onnx_backend import OnnxConfig, OnnxInferenceProvider
from inference.preprocess import preprocess_frame


def main() -> int:
    parser = argparse.ArgumentParser(description="Check detector model output layout")
    parser.add_argument("--model", required=True, help="Path to the .onnx model")
    parser.add_argument("--image", default=None, help="Optional image to run detection on")
    parser.add_argument("--input-size", type=int, default=320)
    parser.add_argument("--anchors", type=int, default=8400)
    parser.add_argument("--classes", type=int, default=80)
    args = parser.parse_args()

    try:
        provider = OnnxInferenceProvider(OnnxConfig(model_path=args.model))
    except ModelLoadError as e:
        print(f"Model failed to load: {e}")
        return 1

    print(f"Input : name={provider.input_name!r} shape={provider.input_shape}")
    print(f"Output: name={provider.output_name!r}")

    if args.image:
        frame = cv2.imread(args.image)
        if frame is None:
            print(f"Could not read image: {args.image}")
            return 1
    else:
        frame = np.zeros((480, 640, 3), dtype=np.uint8)

    start = time.time()
    raw = provider.infer(preprocess_frame(frame, args.input_size))
    print(f"Inference: {(time.time() - start) * 1000:.1f} ms, {raw.size} values")

    expected = expected_length(args.anchors, args.classes)
    try:
        detections = decode(raw, anchor_count=args.anchors, class_count=args.classes)
    except ShapeMismatchError as e:
        print(f"Layout mismatch: {e}")
        if raw.size == (4 + args.classes) * args.anchors:
            print("Output has no objectness plane; this model is not compatible with the decoder.")
        return 1

    print(f"Layout OK ({expected} values). {len(detections)} detections:")
    for det in detections:
        distance = estimate_distance(det.bbox)
        print(f"  {det.class_name:<14} conf={det.confidence:.2f} bbox={det.bbox.as_list()} {distance.label}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
