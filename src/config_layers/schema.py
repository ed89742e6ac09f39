"""Helpers for declaring configuration records."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field
from datetime import timedelta
from typing import Annotated, Any, Callable, Optional

DEFAULT_TAG = "default"
EMBEDDED_TAG = "embedded"


@dataclass(frozen=True, slots=True)
class IntWidth:
    bits: int
    signed: bool = True

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True, slots=True)
class FloatWidth:
    bits: int


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]

UInt = Annotated[int, IntWidth(64, signed=False)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]

Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]

Duration = timedelta


def setting(default: str = "", *, zero: Any = None, help: str = "") -> Any:
    """
    Declare a leaf field with a raw default string.

    The default is kept verbatim and only parsed when the defaults stage applies
    it. `zero` is the value the field holds before any stage runs.
    """
    metadata = {DEFAULT_TAG: default}
    if help:
        metadata["help"] = help
    return field(default=zero, metadata=metadata)


def group(factory: Callable[[], Any], *, embedded: bool = False) -> Any:
    return field(default_factory=factory, metadata={EMBEDDED_TAG: embedded})


def embed(factory: Callable[[], Any]) -> Any:
    """Declare a group whose fields are named as if declared on the enclosing record."""
    return group(factory, embedded=True)


def field_default(metadata: Any) -> str:
    value: Optional[Any] = metadata.get(DEFAULT_TAG) if metadata else None
    if value is None or value is MISSING:
        return ""
    return str(value)
