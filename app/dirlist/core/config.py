"""Library settings.

This module provides the settings model and I/O functions for dirlist.
Settings select the enumeration backend and the defaults used by the
line reader.

Settings are stored in ~/.config/dirlist/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dirlist.core.paths import get_settings_path

logger = logging.getLogger(__name__)

BackendName = Literal["auto", "scandir", "win32"]

DEFAULT_READ_BUFFER_SIZE = 32


class Settings(BaseModel):
    """Configuration for directory enumeration and line reading.

    Attributes:
        backend: Enumeration backend ("auto" picks scandir).
        read_buffer_size: Default chunk size in bytes for read_line.
        encoding: Text encoding used to decode lines from binary handles.
        default_extensions: Extension filter applied by collect when the
            caller passes none.
    """

    model_config = ConfigDict(extra="forbid")

    backend: Annotated[
        BackendName,
        Field(description="Enumeration backend"),
    ] = "auto"
    read_buffer_size: Annotated[
        int,
        Field(ge=1, le=1024 * 1024, description="Line reader chunk size (1-1048576)"),
    ] = DEFAULT_READ_BUFFER_SIZE
    encoding: Annotated[
        str,
        Field(min_length=1, description="Encoding for binary file handles"),
    ] = "utf-8"
    default_extensions: Annotated[
        list[str],
        Field(default_factory=list, description="Extensions collected by default"),
    ]

    @field_validator("default_extensions")
    @classmethod
    def strip_leading_dots(cls, value: list[str]) -> list[str]:
        """Store extensions without their leading separator."""
        return [ext.lstrip(".") for ext in value if ext.lstrip(".")]


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no file exists.

    Parse and validation errors still propagate.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file, using defaults")
        return get_default_settings()


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    Only includes values that differ from the defaults to keep the file clean.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {"backend": settings.backend}

    if settings.read_buffer_size != DEFAULT_READ_BUFFER_SIZE:
        result["read_buffer_size"] = settings.read_buffer_size

    if settings.encoding != "utf-8":
        result["encoding"] = settings.encoding

    if settings.default_extensions:
        result["default_extensions"] = list(settings.default_extensions)

    return result


def get_default_settings() -> Settings:
    """Create a default Settings object.

    Returns:
        Settings with default values.
    """
    return Settings()
