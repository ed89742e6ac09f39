"""Layered loading of configuration records."""

from config_layers.loader.impl import Loader, load
from config_layers.loader.interfaces import ConfigLoader
from config_layers.loader.models import LoaderConfig

__all__ = ["ConfigLoader", "Loader", "LoaderConfig", "load"]
