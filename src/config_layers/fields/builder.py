from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
from datetime import timedelta
from typing import Annotated, Any, Optional, get_args, get_origin, get_type_hints

from config_layers.errors import InvalidTargetError
from config_layers.fields.models import FieldDescriptor, FieldKind, FieldLocation
from config_layers.schema import EMBEDDED_TAG, FloatWidth, IntWidth, field_default

logger = logging.getLogger(__name__)


def classify(annotation: Any) -> tuple[FieldKind, Optional[int]]:
    """Map a resolved annotation to its field kind and declared width."""
    base = annotation
    metadata: tuple[Any, ...] = ()
    if get_origin(annotation) is Annotated:
        base, *rest = get_args(annotation)
        metadata = tuple(rest)

    if base is bool:
        return FieldKind.BOOL, None
    if base is timedelta:
        return FieldKind.DURATION, 64
    if base is int:
        width = next((m for m in metadata if isinstance(m, IntWidth)), IntWidth(64))
        return (FieldKind.INT if width.signed else FieldKind.UINT), width.bits
    if base is float:
        float_width = next((m for m in metadata if isinstance(m, FloatWidth)), FloatWidth(64))
        return FieldKind.FLOAT, float_width.bits
    if base is str:
        return FieldKind.STRING, None
    if isinstance(base, type) and dataclasses.is_dataclass(base):
        return FieldKind.GROUP, None
    return FieldKind.UNSUPPORTED, None


def _type_hints(record_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(record_type, include_extras=True)
    except NameError:
        # Records declared inside a function name types that only exist in its locals.
        return {}


def _declaring_class(record_type: type, name: str) -> type:
    for base in record_type.__mro__:
        if name in inspect.get_annotations(base):
            return base
    return record_type


def _resolve_annotation(record: Any, field: dataclasses.Field, hints: dict[str, Any]) -> Any:
    if field.name in hints:
        return hints[field.name]
    annotation = field.type
    if not isinstance(annotation, str):
        return annotation

    owner = _declaring_class(type(record), field.name)
    module = sys.modules.get(owner.__module__)
    try:
        return eval(annotation, dict(vars(module)) if module else {}, dict(vars(owner)))
    except NameError:
        pass

    factory = field.default_factory
    if isinstance(factory, type) and dataclasses.is_dataclass(factory):
        return factory
    value = getattr(record, field.name, None)
    if value is not None and not isinstance(value, type) and dataclasses.is_dataclass(value):
        return type(value)
    raise InvalidTargetError(
        f"Cannot resolve type '{annotation}' of field '{field.name}' on {type(record).__name__}"
    )


def _is_settable(record: Any, field: dataclasses.Field) -> bool:
    if field.name.startswith("_"):
        return False
    params = getattr(type(record), "__dataclass_params__", None)
    return not (params is not None and params.frozen)


def build_catalog(record: Any) -> list[FieldDescriptor]:
    """
    Enumerate every settable leaf of a dataclass record, in declaration order.

    Group fields are expanded recursively and only their leaves are returned.
    Embedded groups add no segment to their children's dotted names.
    """
    if isinstance(record, type) or not dataclasses.is_dataclass(record):
        raise InvalidTargetError(
            f"Configuration target must be a dataclass instance, got: {type(record).__name__}"
        )
    if getattr(type(record), "__dataclass_params__").frozen:
        raise InvalidTargetError(
            f"Configuration target must be mutable, {type(record).__name__} is a frozen dataclass"
        )
    fields = _build_fields(record, None)
    logger.debug("config.catalog_built record=%s fields=%d", type(record).__name__, len(fields))
    return fields


def _build_fields(record: Any, parent: Optional[FieldDescriptor]) -> list[FieldDescriptor]:
    hints = _type_hints(type(record))
    fields: list[FieldDescriptor] = []

    for field in dataclasses.fields(record):
        if not _is_settable(record, field):
            continue

        annotation = _resolve_annotation(record, field, hints)
        kind, bits = classify(annotation)
        descriptor = FieldDescriptor(
            name=field.name,
            parent=parent,
            kind=kind,
            location=FieldLocation(record, field.name),
            annotation=annotation,
            default_value=field_default(field.metadata),
            bits=bits,
            embedded=bool(field.metadata.get(EMBEDDED_TAG, False)),
            help=str(field.metadata.get("help", "")),
        )

        if kind is not FieldKind.GROUP:
            fields.append(descriptor)
            continue

        value = descriptor.location.get()
        if value is None:
            value = _new_group(descriptor)
            descriptor.location.set(value)

        anchor = descriptor.parent if descriptor.embedded else descriptor
        fields.extend(_build_fields(value, anchor))

    return fields


def _new_group(descriptor: FieldDescriptor) -> Any:
    group_type = descriptor.annotation
    if get_origin(group_type) is Annotated:
        group_type = get_args(group_type)[0]
    try:
        return group_type()
    except TypeError as exc:
        raise InvalidTargetError(
            f"Group field '{descriptor.full_name}' is unset and {group_type.__name__} "
            f"cannot be created without arguments"
        ) from exc
