from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import yaml

from config_layers.errors import FileDecodeError, UnsupportedFileFormatError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Decoder = Callable[[bytes], Any]


def _decode_yaml(raw: bytes) -> Any:
    return yaml.safe_load(raw)


def _decode_json(raw: bytes) -> Any:
    return json.loads(raw)


def _decode_toml(raw: bytes) -> Any:
    return tomllib.loads(raw.decode("utf-8"))


_DECODERS: dict[str, Decoder] = {
    ".yaml": _decode_yaml,
    ".yml": _decode_yaml,
    ".json": _decode_json,
    ".toml": _decode_toml,
}

_DECODE_ERRORS = (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError, UnicodeDecodeError)


def get_decoder(path: PathLike) -> Decoder:
    extension = Path(path).suffix.lower()
    decoder = _DECODERS.get(extension)
    if decoder is None:
        raise UnsupportedFileFormatError(path, extension)
    return decoder


def decode_file(path: PathLike, raw: bytes) -> dict[str, Any]:
    decoder = get_decoder(path)
    try:
        data = decoder(raw)
    except _DECODE_ERRORS as exc:
        raise FileDecodeError(path, str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FileDecodeError(path, f"top-level value must be a mapping, got: {type(data).__name__}")
    return data


def read_first_file(paths: Sequence[PathLike]) -> Optional[tuple[Path, dict[str, Any]]]:
    """
    Decode the first file in `paths` that exists.

    Missing files are skipped. Once a file opens, it is the only one used: its
    format and decode errors are raised and later paths are never consulted.
    Returns None for an empty list and re-raises the last FileNotFoundError if
    none of the files exist.
    """
    missing: Optional[FileNotFoundError] = None
    for entry in paths:
        path = Path(entry)
        try:
            with path.open("rb") as f:
                raw = f.read()
        except FileNotFoundError as exc:
            logger.debug("config.file_missing path=%s", path)
            missing = exc
            continue

        logger.debug("config.file_selected path=%s", path)
        return path, decode_file(path, raw)

    if missing is not None:
        raise missing
    return None


def lookup_path(path: PathLike, document: Mapping[str, Any], segments: Sequence[str]) -> tuple[bool, Any]:
    """
    Find the value at a dotted path in a decoded document.

    Keys match field names case-insensitively, exact matches first.
    """
    current: Any = document
    for depth, segment in enumerate(segments):
        if not isinstance(current, Mapping):
            dotted = ".".join(segments[:depth])
            raise FileDecodeError(path, f"expected a mapping at '{dotted}', got: {type(current).__name__}")
        if segment in current:
            current = current[segment]
            continue
        folded = segment.lower()
        for key, value in current.items():
            if isinstance(key, str) and key.lower() == folded:
                current = value
                break
        else:
            return False, None
    return True, current
