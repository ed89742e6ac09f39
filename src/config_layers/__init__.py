"""Layered configuration loading for dataclass records."""

from config_layers.errors import (
    CoercionError,
    ConfigError,
    FileDecodeError,
    InvalidTargetError,
    UnsupportedFileFormatError,
    UnsupportedKindError,
)
from config_layers.fields import FieldDescriptor, FieldKind, build_catalog
from config_layers.loader import ConfigLoader, Loader, LoaderConfig, load
from config_layers.schema import (
    Duration,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    embed,
    group,
    setting,
)

__all__ = [
    "CoercionError",
    "ConfigError",
    "ConfigLoader",
    "Duration",
    "FieldDescriptor",
    "FieldKind",
    "FileDecodeError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidTargetError",
    "Loader",
    "LoaderConfig",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnsupportedFileFormatError",
    "UnsupportedKindError",
    "build_catalog",
    "embed",
    "group",
    "load",
    "setting",
]
