"""Value sources consulted by the loader."""

from config_layers.sources.env import EnvironmentSource, env_name
from config_layers.sources.files import decode_file, get_decoder, lookup_path, read_first_file
from config_layers.sources.flags import NamespaceFlags, flag_name, process_flags, register_flags
from config_layers.sources.interfaces import FlagSource, ValueSource

__all__ = [
    "EnvironmentSource",
    "FlagSource",
    "NamespaceFlags",
    "ValueSource",
    "decode_file",
    "env_name",
    "flag_name",
    "get_decoder",
    "lookup_path",
    "process_flags",
    "read_first_file",
    "register_flags",
]
