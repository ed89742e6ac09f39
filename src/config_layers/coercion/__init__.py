"""String-to-value conversion for configuration fields."""

from config_layers.coercion.duration import parse_duration
from config_layers.coercion.registry import apply_value, coerce, coerce_and_apply, get_parser

__all__ = [
    "apply_value",
    "coerce",
    "coerce_and_apply",
    "get_parser",
    "parse_duration",
]
