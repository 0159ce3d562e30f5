"""Keyframe interpolation and Lottie export for the vector animation editor."""
from .exporter import BODYMOVIN_VERSION, export_to_lottie
from .interpolation import value_at_time
from .validator import ValidationResult, validate_with_message

__all__ = [
    "BODYMOVIN_VERSION",
    "ValidationResult",
    "export_to_lottie",
    "validate_with_message",
    "value_at_time",
]
