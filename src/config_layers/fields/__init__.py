"""Field discovery for configuration records."""

from config_layers.fields.builder import build_catalog, classify
from config_layers.fields.models import FieldDescriptor, FieldKind, FieldLocation

__all__ = ["FieldDescriptor", "FieldKind", "FieldLocation", "build_catalog", "classify"]
