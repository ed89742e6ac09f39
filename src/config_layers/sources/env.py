from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from config_layers.fields.models import FieldDescriptor

logger = logging.getLogger(__name__)


class EnvironmentSource:
    """
    Environment variables looked up by exact name.

    Values from an optional .env file are visible only where the process
    environment does not define the same name.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: Optional[Mapping[str, Optional[str]]] = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._dotenv = dotenv or {}

    @classmethod
    def from_process(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> EnvironmentSource:
        dotenv: Mapping[str, Optional[str]] = {}
        if dotenv_path is not None:
            path = Path(dotenv_path)
            if path.exists():
                dotenv = dotenv_values(path)
                logger.debug("config.dotenv_loaded path=%s keys=%d", path, len(dotenv))
            else:
                logger.debug("config.dotenv_missing path=%s", path)
        return cls(environ=environ, dotenv=dotenv)

    def lookup(self, name: str) -> Optional[str]:
        value = self._environ.get(name)
        if value is not None:
            return value
        return self._dotenv.get(name)


def env_name(field: FieldDescriptor, env_prefix: str) -> str:
    return (env_prefix + field.full_name.replace(".", "_")).upper()
