"""CipherpadSettings — one frozen object for flags, environment, and TOML.

Precedence, highest first:

1. keyword arguments (CLI flags; ``None`` means "not given")
2. ``CIPHERPAD_*`` environment variables, ``__`` for nested sections,
   e.g. ``CIPHERPAD_REGISTRY__MAX_DEVICES_PER_IDENTITY=4``
3. the discovered ``cipherpad.toml``
4. defaults on the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from cipherpad.config.discovery import find_config
from cipherpad.config.models import BackupConfig, NotesConfig, RegistryConfig

# The TOML path is chosen per construction, not per class.
_pending = threading.local()


class CipherpadSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        data_root: Directory holding ``.cipherpad/``; the config file's
            directory, else the working directory.
        config_path: The TOML file in effect, if any.
        identity: Caller identity for CLI commands. Services never read
            it; every service call receives the identity explicitly.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="CIPHERPAD_",
        env_nested_delimiter="__",
    )

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    identity: str | None = None

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)

    @field_validator("identity")
    @classmethod
    def _blank_identity_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path: Path | None = getattr(_pending, "toml_path", None)
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **flags: Any,
    ) -> CipherpadSettings:
        """Build settings the way the root CLI group does.

        An explicit *config_path* that does not exist is ignored. Flags
        whose value is ``None`` are dropped so lower layers can fill them.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(data_root)

        if data_root is None:
            data_root = toml_path.parent if toml_path is not None else Path.cwd()

        _pending.toml_path = toml_path
        try:
            return cls(
                data_root=data_root,
                config_path=toml_path,
                **{name: value for name, value in flags.items() if value is not None},
            )
        except tomllib.TOMLDecodeError as exc:
            import click

            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _pending.toml_path = None
