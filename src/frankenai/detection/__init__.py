"""Project scanning and end-to-end stack detection."""

from frankenai.detection.detector import StackDetector, StackReport, build_detected_stack
from frankenai.detection.scanner import ProjectScanner

__all__ = ["ProjectScanner", "StackDetector", "StackReport", "build_detected_stack"]
