from __future__ import annotations

import logging
from dataclasses import dataclass, field

from config_layers import Duration, Loader, LoaderConfig, UInt16, embed, setting
from config_layers.logging import LoggingSettings, init_logging


@dataclass
class AppSettings:
    dry_run: bool = setting("false", zero=False)


@dataclass
class ServerSettings:
    host: str = setting("127.0.0.1", zero="")
    port: UInt16 = setting("8080", zero=0)
    read_timeout: Duration = setting("30s", zero=None)


@dataclass
class SmokeConfig:
    app: AppSettings = embed(AppSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    server: ServerSettings = field(default_factory=ServerSettings)


def main() -> None:
    config = SmokeConfig()
    loader = Loader(LoaderConfig(env_prefix="SMOKE", flag_prefix="smoke", files=("examples/config.yaml",)))
    loader.load(config)
    init_logging(config.logging)

    logger = logging.getLogger("smoke")
    logger.info("Config loaded dry_run=%s", config.app.dry_run)
    logger.info("Logging level=%s", config.logging.level)
    logger.info("Server port=%s read_timeout=%s", config.server.port, config.server.read_timeout)
    for fd in loader.fields:
        logger.info("field name=%s env=%s flag=--%s", fd.full_name, loader.env_name(fd), loader.flag_name(fd))


if __name__ == "__main__":
    main()
