from __future__ import annotations

from typing import Any, Protocol


class ConfigLoader(Protocol):
    """
    Populates a configuration record in place.

    Sources are applied in this order, each overriding the previous per field:
    declared defaults, the first existing file, environment variables, flags.
    """

    def load(self, record: Any) -> None:
        ...
