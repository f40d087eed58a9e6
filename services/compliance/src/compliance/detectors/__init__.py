"""
Detection strategies for Whisperwire.

Contains the closed set of detectors: metadata predicates, exact trigger
phrases, and regex patterns.
"""

from compliance.detectors.base import DetectionContext, Detector, TextDetector
from compliance.detectors.metadata_detector import MetadataDetector
from compliance.detectors.regex_detector import RegexDetector
from compliance.detectors.trigger_detector import TriggerPhraseDetector

__all__ = [
    "DetectionContext",
    "Detector",
    "MetadataDetector",
    "RegexDetector",
    "TextDetector",
    "TriggerPhraseDetector",
]
