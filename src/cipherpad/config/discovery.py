"""Locating and reading ``cipherpad.toml``.

Lookup order: ``$CIPHERPAD_CONFIG`` when set (a missing file there means
no config at all), otherwise the nearest ``cipherpad.toml`` in the start
directory or any parent. The directory holding the file becomes the data
root for the store.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from cipherpad.config.models import CipherpadConfig

CONFIG_FILENAME = "cipherpad.toml"
CONFIG_ENV_VAR = "CIPHERPAD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config that applies to *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> CipherpadConfig:
    """Validated config sections; code defaults when no file applies.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
        pydantic.ValidationError: A section holds an out-of-range value.
    """
    path = path or find_config(cwd)
    if path is None:
        return CipherpadConfig()
    with path.open("rb") as fh:
        return CipherpadConfig.model_validate(tomllib.load(fh))
