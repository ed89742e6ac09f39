from __future__ import annotations

from typing import Optional, Protocol


class ValueSource(Protocol):
    """
    Exact-key lookup of raw string values.

    Implementations never scan or enumerate keys; a missing key returns None.
    """

    def lookup(self, name: str) -> Optional[str]:
        ...


class FlagSource(ValueSource, Protocol):
    """Already parsed command-line flags, looked up by full flag name."""
