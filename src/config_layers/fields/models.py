from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional


class FieldKind(str, enum.Enum):
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    DURATION = "duration"
    GROUP = "group"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class FieldLocation:
    """A writable attribute slot on a live record instance."""

    owner: Any
    attribute: str

    def get(self) -> Any:
        return getattr(self.owner, self.attribute)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attribute, value)


@dataclass(eq=False, slots=True)
class FieldDescriptor:
    name: str
    parent: Optional[FieldDescriptor]
    kind: FieldKind
    location: FieldLocation
    annotation: Any
    default_value: str = ""
    bits: Optional[int] = None
    embedded: bool = False
    help: str = ""

    @property
    def full_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.full_name}.{self.name}"

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.full_name.split("."))

    def __repr__(self) -> str:
        return f"FieldDescriptor({self.full_name!r}, kind={self.kind.value})"
