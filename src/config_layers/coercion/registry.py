from __future__ import annotations

import math
import re
import struct
from datetime import timedelta
from functools import lru_cache
from typing import Annotated, Any, Callable, get_args, get_origin

from pydantic import TypeAdapter, ValidationError

from config_layers.coercion.duration import parse_duration
from config_layers.errors import CoercionError, UnsupportedKindError
from config_layers.fields.models import FieldDescriptor, FieldKind
from config_layers.schema import IntWidth

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?)|nan",
    re.IGNORECASE,
)
# Hex mantissa with a mandatory binary exponent, e.g. 0x1.8p3.
_HEX_FLOAT = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_FLOAT32_MAX = 3.4028234663852886e38

Parser = Callable[[FieldDescriptor, str], Any]


def _fail(field: FieldDescriptor, value: object, reason: str) -> CoercionError:
    return CoercionError(field=field.full_name, kind=field.kind.value, value=value, reason=reason)


def _parse_bool(field: FieldDescriptor, raw: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise _fail(field, raw, "invalid syntax")


def _check_int_range(field: FieldDescriptor, value: int, raw: object) -> int:
    width = IntWidth(field.bits or 64, signed=field.kind is not FieldKind.UINT)
    if not width.min_value <= value <= width.max_value:
        raise _fail(field, raw, f"value out of range for {width.bits}-bit field")
    return value


def _to_int(field: FieldDescriptor, raw: str) -> int:
    # int() refuses very long digit strings; none of them fit 64 bits anyway.
    if len(raw.lstrip("+-0")) > 20:
        raise _fail(field, raw, f"value out of range for {field.bits or 64}-bit field")
    return int(raw)


def _parse_int(field: FieldDescriptor, raw: str) -> int:
    if not _SIGNED_INT.fullmatch(raw):
        raise _fail(field, raw, "invalid syntax")
    return _check_int_range(field, _to_int(field, raw), raw)


def _parse_uint(field: FieldDescriptor, raw: str) -> int:
    if not _UNSIGNED_INT.fullmatch(raw):
        raise _fail(field, raw, "invalid syntax")
    return _check_int_range(field, _to_int(field, raw), raw)


def _parse_duration(field: FieldDescriptor, raw: str) -> timedelta:
    try:
        return parse_duration(raw)
    except ValueError as exc:
        raise _fail(field, raw, str(exc)) from exc


def _check_float_range(field: FieldDescriptor, value: float, raw: object) -> float:
    if field.bits != 32 or not math.isfinite(value):
        return value
    if abs(value) > _FLOAT32_MAX:
        raise _fail(field, raw, "value out of range for 32-bit field")
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_float(field: FieldDescriptor, raw: str) -> float:
    if _HEX_FLOAT.fullmatch(raw):
        try:
            value = float.fromhex(raw)
        except OverflowError as exc:
            raise _fail(field, raw, "value out of range") from exc
        return _check_float_range(field, value, raw)
    if not _FLOAT.fullmatch(raw):
        raise _fail(field, raw, "invalid syntax")
    value = float(raw)
    if math.isinf(value) and "inf" not in raw.lower():
        raise _fail(field, raw, "value out of range")
    return _check_float_range(field, value, raw)


def _parse_string(field: FieldDescriptor, raw: str) -> str:
    return raw


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return TypeAdapter(annotation)


_PARSERS: dict[FieldKind, Parser] = {
    FieldKind.BOOL: _parse_bool,
    FieldKind.INT: _parse_int,
    FieldKind.UINT: _parse_uint,
    FieldKind.FLOAT: _parse_float,
    FieldKind.STRING: _parse_string,
    FieldKind.DURATION: _parse_duration,
}


def get_parser(field: FieldDescriptor) -> Parser:
    parser = _PARSERS.get(field.kind)
    if parser is None:
        raise UnsupportedKindError(field.full_name, field.annotation)
    return parser


def coerce(field: FieldDescriptor, raw: str) -> Any:
    """Convert a raw source string to the field's kind without applying it."""
    return get_parser(field)(field, raw)


def coerce_and_apply(field: FieldDescriptor, raw: str) -> None:
    field.location.set(coerce(field, raw))


def _scalar_text(value: bool | int | float) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def apply_value(field: FieldDescriptor, value: Any) -> None:
    """
    Apply a value decoded from a structured file.

    Strings take the same path as environment and flag values. Numbers and
    booleans given for string fields are kept in their document spelling.
    Other scalars are validated against the field annotation, then width-checked.
    """
    if isinstance(value, str):
        coerce_and_apply(field, value)
        return
    if field.kind is FieldKind.STRING and isinstance(value, (bool, int, float)):
        coerce_and_apply(field, _scalar_text(value))
        return

    get_parser(field)
    try:
        converted = _adapter(field.annotation).validate_python(value)
    except ValidationError as exc:
        reason = "; ".join(err["msg"] for err in exc.errors())
        raise _fail(field, value, reason) from exc

    if field.kind in (FieldKind.INT, FieldKind.UINT):
        converted = _check_int_range(field, converted, value)
    elif field.kind is FieldKind.FLOAT:
        converted = _check_float_range(field, converted, value)
    field.location.set(converted)
