from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """
    Options for one or more load operations.

    Prefixes are given bare ("APP", "app"); the loader appends the separators.
    """

    use_defaults: bool = True
    use_file: bool = True
    use_env: bool = True
    use_flag: bool = True

    env_prefix: str = ""
    flag_prefix: str = ""

    files: Sequence[str] = field(default_factory=tuple)
    dotenv_path: Optional[str] = None

    @classmethod
    def default(cls) -> LoaderConfig:
        return cls()
