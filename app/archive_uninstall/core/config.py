"""Run defaults loaded from the configuration file.

The configuration file lets users turn options on by default, so that
e.g. ``--verify`` does not have to be passed on every run:

    [defaults]
    verify = true
    remove_dirs = true

Configuration is stored in ~/.config/archive-uninstall/config.toml
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from archive_uninstall.core.paths import get_config_path
from archive_uninstall.errors import ConfigError, ConfigParseError

logger = logging.getLogger(__name__)


class RunDefaults(BaseModel):
    """Default values for the run options.

    A command-line flag always enables its option; these defaults can
    only turn an option on when the flag is absent.

    Attributes:
        verbose: Emit per-entry status lines.
        dry_run: Never mutate the filesystem.
        verify: Only remove files whose content matches the archive.
        remove_dirs: Remove directories left empty after the pass.
        no_color: Disable colored output.
    """

    model_config = ConfigDict(extra="forbid")

    verbose: Annotated[bool, Field(description="Emit per-entry status lines")] = False
    dry_run: Annotated[bool, Field(description="Report decisions without removing")] = False
    verify: Annotated[bool, Field(description="Verify content before removal")] = False
    remove_dirs: Annotated[bool, Field(description="Remove emptied directories")] = False
    no_color: Annotated[bool, Field(description="Disable colored output")] = False


class UninstallConfig(BaseModel):
    """Top-level configuration file model."""

    model_config = ConfigDict(extra="forbid")

    defaults: RunDefaults = Field(default_factory=RunDefaults)


def load_config(path: Path | None = None) -> UninstallConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: every option then defaults to off.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated UninstallConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return UninstallConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = UninstallConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
