from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from config_layers.coercion import apply_value, coerce_and_apply
from config_layers.fields import FieldDescriptor, build_catalog
from config_layers.loader.models import LoaderConfig
from config_layers.sources import (
    EnvironmentSource,
    FlagSource,
    env_name,
    flag_name,
    lookup_path,
    process_flags,
    read_first_file,
)

logger = logging.getLogger(__name__)


class Loader:
    def __init__(
        self,
        config: LoaderConfig = LoaderConfig(),
        *,
        environ: Optional[Mapping[str, str]] = None,
        flags: Optional[FlagSource] = None,
    ) -> None:
        self._config = config
        self._env_prefix = config.env_prefix + "_" if config.env_prefix else ""
        self._flag_prefix = config.flag_prefix + "." if config.flag_prefix else ""
        self._environ = environ
        self._flags = flags
        self._fields: list[FieldDescriptor] = []

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def env_prefix(self) -> str:
        return self._env_prefix

    @property
    def flag_prefix(self) -> str:
        return self._flag_prefix

    @property
    def fields(self) -> Sequence[FieldDescriptor]:
        """Catalog built by the most recent load."""
        return tuple(self._fields)

    def env_name(self, field: FieldDescriptor) -> str:
        return env_name(field, self._env_prefix)

    def flag_name(self, field: FieldDescriptor) -> str:
        return flag_name(field, self._flag_prefix)

    def load(self, record: Any) -> None:
        """
        Populate `record` from every enabled source.

        Stops at the first error. Fields applied before the failure keep their
        new values.
        """
        self._fields = build_catalog(record)
        logger.debug("config.load_start record=%s fields=%d", type(record).__name__, len(self._fields))

        if self._config.use_defaults:
            self._load_defaults()
        if self._config.use_file:
            self._load_file()
        if self._config.use_env:
            self._load_environment()
        if self._config.use_flag:
            self._load_flags()

    def _load_defaults(self) -> None:
        logger.debug("config.stage_start stage=defaults")
        for field in self._fields:
            if not field.default_value:
                continue
            coerce_and_apply(field, field.default_value)

    def _load_file(self) -> None:
        logger.debug("config.stage_start stage=file files=%d", len(self._config.files))
        selected = read_first_file(self._config.files)
        if selected is None:
            return

        path, document = selected
        applied = 0
        for field in self._fields:
            found, value = lookup_path(path, document, field.path)
            if not found or value is None:
                continue
            apply_value(field, value)
            applied += 1
        logger.debug("config.file_applied path=%s fields=%d", path, applied)

    def _load_environment(self) -> None:
        logger.debug("config.stage_start stage=env prefix=%s", self._env_prefix)
        source = EnvironmentSource.from_process(
            Path(self._config.dotenv_path) if self._config.dotenv_path else None,
            environ=self._environ,
        )
        for field in self._fields:
            value = source.lookup(self.env_name(field))
            if value is None:
                continue
            coerce_and_apply(field, value)

    def _load_flags(self) -> None:
        logger.debug("config.stage_start stage=flags prefix=%s", self._flag_prefix)
        source = self._flags if self._flags is not None else process_flags()
        for field in self._fields:
            value = source.lookup(self.flag_name(field))
            if value is None:
                continue
            coerce_and_apply(field, value)


def load(record: Any, config: Optional[LoaderConfig] = None) -> None:
    Loader(config or LoaderConfig.default()).load(record)
