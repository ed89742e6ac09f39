from __future__ import annotations

from pathlib import Path
from typing import Union


class ConfigError(Exception):
    """Base class for errors raised while loading a configuration record."""


class InvalidTargetError(ConfigError, TypeError):
    pass


class UnsupportedFileFormatError(ConfigError, ValueError):
    def __init__(self, path: Union[str, Path], extension: str) -> None:
        self.path = str(path)
        self.extension = extension
        super().__init__(f"File format '{extension}' isn't supported: {self.path}")


class FileDecodeError(ConfigError, ValueError):
    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"File parsing error in {self.path}: {reason}")


class CoercionError(ConfigError, ValueError):
    def __init__(self, *, field: str, kind: str, value: object, reason: str) -> None:
        self.field = field
        self.kind = kind
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot set '{field}' ({kind}) from {value!r}: {reason}")


class UnsupportedKindError(TypeError):
    """
    A source targeted a field whose type has no coercion.

    This is a schema error rather than a configuration error, so it is not a
    ConfigError and is never meant to be handled per field.
    """

    def __init__(self, field: str, annotation: object) -> None:
        self.field = field
        self.annotation = annotation
        super().__init__(f"Unsupported field type for '{field}': {annotation!r}")
