"""
Navigation Assistant: camera-based obstacle narration.

Loads the detector and camera, then runs a polling loop that narrates the
obstacles in front of the user every few seconds. A small web page (or the
--autostart flag) starts and stops scanning.

Usage:
    python src/main.py --config config/config.yaml
    python src/main.py --headless --autostart

Arguments:
    --config: Path to configuration file
    --headless: No web server; status and counts go to the log
    --autostart: Start scanning as soon as setup succeeds
    --no-speech: Log narration instead of speaking it
"""

import argparse
import logging
import os
import signal
import sys
import threading
from typing import Any, Dict, Optional, Tuple

import uvicorn
import yaml

from narration.phrases import get_phrasebook
from ops.logging import setup_logging
from pipeline.sinks import LogPresentationSink
from runtime.services import create_service_from_config
from web.app import create_app
from web.state import WebPresentationState

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    config_dir = os.path.dirname(config_path)
    base_path = os.path.join(config_dir, "default.yaml")
    local_overrides_path = os.path.join(config_dir, "config.yaml")

    merged: Dict[str, Any] = _read_yaml(base_path) if os.path.exists(base_path) else {}
    if os.path.exists(local_overrides_path):
        merged = _deep_merge(merged, _read_yaml(local_overrides_path))

    if (
        os.path.exists(config_path)
        and os.path.abspath(config_path) != os.path.abspath(local_overrides_path)
        and os.path.abspath(config_path) != os.path.abspath(base_path)
    ):
        merged = _deep_merge(merged, _read_yaml(config_path))

    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def disable_speech(config: Dict[str, Any]) -> Dict[str, Any]:
    """Route narration to the log (--no-speech). A bare `narration:` key loads as None."""
    config["narration"] = {**(config.get("narration") or {}), "backend": "log"}
    return config


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'detector', 'polling', 'narration', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Camera
    camera = config.get('camera') or {}
    if 'device_id' not in camera:
        return False, "Missing camera.device_id"
    device_id = camera['device_id']
    if isinstance(device_id, bool) or not isinstance(device_id, (int, str)):
        return False, "camera.device_id must be an integer (index) or string (URL or file path)"
    if isinstance(device_id, int) and device_id < 0:
        return False, "camera.device_id integer must be non-negative"
    if camera.get('backend', 'opencv') != 'opencv':
        return False, "camera.backend must be: opencv"
    if 'resolution' in camera:
        resolution = camera['resolution']
        if not isinstance(resolution, list) or len(resolution) != 2:
            return False, "camera.resolution must be a list of [width, height]"
        if not all(isinstance(x, int) and x > 0 for x in resolution):
            return False, "camera.resolution values must be positive integers"
    if camera.get('rotate', 0) not in (0, 90, 180, 270, None):
        return False, "camera.rotate must be one of: 0, 90, 180, 270"

    # Detector
    detector = config.get('detector') or {}
    if not isinstance(detector.get('model'), str) or not detector.get('model'):
        return False, "detector.model is required"
    for key in ('input_size', 'anchor_count', 'class_count'):
        if key in detector and (not isinstance(detector[key], int) or detector[key] <= 0):
            return False, f"detector.{key} must be a positive integer"
    for key in ('objectness_threshold', 'confidence_threshold'):
        if key in detector:
            value = detector[key]
            if not _is_number(value) or not (0 <= value < 1):
                return False, f"detector.{key} must be a number in [0, 1)"
    if 'classes' in detector:
        classes = detector['classes']
        if not isinstance(classes, list) or not classes or not all(isinstance(c, str) for c in classes):
            return False, "detector.classes must be a non-empty list of strings"

    # Polling
    polling = config.get('polling') or {}
    if 'interval_s' in polling and (not _is_number(polling['interval_s']) or polling['interval_s'] <= 0):
        return False, "polling.interval_s must be a positive number"
    timeout = polling.get('inference_timeout_s')
    if timeout is not None and (not _is_number(timeout) or timeout <= 0):
        return False, "polling.inference_timeout_s must be a positive number or null"

    # Narration
    narration = config.get('narration') or {}
    if narration.get('backend', 'pyttsx3') not in ('pyttsx3', 'log'):
        return False, "narration.backend must be one of: pyttsx3, log"
    if 'rate' in narration and (not _is_number(narration['rate']) or narration['rate'] <= 0):
        return False, "narration.rate must be a positive number"

    # Logging
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"

    return True, None


def main():
    """Main application function."""
    parser = argparse.ArgumentParser(description='Navigation Assistant')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--headless', action='store_true',
                        help='Run without the web control page')
    parser.add_argument('--autostart', action='store_true',
                        help='Start scanning as soon as setup succeeds')
    parser.add_argument('--no-speech', action='store_true',
                        help='Log narration instead of speaking it')
    parser.add_argument('--host', type=str, default=None, help='Web server host')
    parser.add_argument('--port', type=int, default=None, help='Web server port')
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    if args.no_speech:
        disable_speech(config)

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config['log_path'], config['log_level'])
    logging.info("Starting Navigation Assistant")

    phrases = get_phrasebook((config.get('narration') or {}).get('language', 'en'))
    if args.headless:
        presentation = LogPresentationSink(empty_text=phrases.no_objects, count_unit=phrases.count_unit)
    else:
        presentation = WebPresentationState(phrases)

    service = create_service_from_config(config, presentation)
    ready = service.init()
    if args.autostart and ready:
        service.start()

    try:
        if args.headless:
            if not ready:
                sys.exit(1)
            stop_event = threading.Event()
            signal.signal(signal.SIGTERM, lambda *_: stop_event.set())
            if not args.autostart:
                service.start()
            while not stop_event.wait(1.0):
                pass
        else:
            web_cfg = config.get('web', {}) or {}
            app = create_app(service, presentation)
            uvicorn.run(
                app,
                host=args.host or web_cfg.get('host', '127.0.0.1'),
                port=args.port or web_cfg.get('port', 8000),
                log_level=config['log_level'].lower(),
            )
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
    finally:
        service.shutdown()


if __name__ == "__main__":
    main()
