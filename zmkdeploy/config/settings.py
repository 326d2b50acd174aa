"""
Settings for zmk-deploy.

Settings are loaded from multiple sources with the following precedence:
1. Environment variables (highest precedence)
2. YAML config file (CLI provided, current directory or XDG config directory)
3. .env file in the current directory
4. Default values (lowest precedence)

The GitHub repository and token keep their plain ``GITHUB_REPO_URL`` and
``GITHUB_TOKEN`` names so an existing ``.env`` works unchanged. Every other
setting uses the ``ZMK_DEPLOY_`` prefix.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zmkdeploy.core.errors import ConfigError
from zmkdeploy.core.structlog_logger import get_struct_logger
from zmkdeploy.utils.xdg import get_default_scratch_dir, get_xdg_config_dir


logger = get_struct_logger(__name__)

ENV_PREFIX = "ZMK_DEPLOY_"

GITHUB_URL_PATTERN = re.compile(r"github\.com[/:]([^/]+)/([^/]+)")


class DeploySettings(BaseSettings):
    """Deployment settings with automatic environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override the YAML file data passed as init kwargs."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    github_repo_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPO_URL", "github_repo_url"),
        description="URL of the GitHub repository building the firmware",
    )
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "github_token"),
        description="Token with actions:read access to the repository",
    )

    volume_marker: str = Field(
        default="nicenano",
        description="Case-insensitive substring of the bootloader volume name",
    )
    firmware_extension: str = Field(default=".uf2")
    drive_poll_interval: float = Field(default=1.0, gt=0)
    permission_retry_delay: float = Field(default=1.0, ge=0)
    github_poll_interval: float = Field(
        default=10.0, gt=0, description="Seconds between watch-mode checks"
    )
    scratch_dir: Path = Field(default_factory=get_default_scratch_dir)
    mount_root: Path | None = Field(
        default=None,
        description="Directory holding mounted volumes, overrides the platform default",
    )
    log_level: str = Field(default="WARNING")

    @field_validator("firmware_extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        v = v.strip().lower()
        return v if v.startswith(".") else f".{v}"

    @field_validator("volume_marker")
    @classmethod
    def validate_volume_marker(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("volume_marker must not be empty")
        return v.strip().lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    def get_log_level_int(self) -> int:
        return int(getattr(logging, self.log_level, logging.WARNING))

    def github_repository(self) -> tuple[str, str]:
        """Owner and repository name parsed from ``github_repo_url``.

        Raises:
            ConfigError: If the URL is missing or is not a GitHub repository URL
        """
        if not self.github_repo_url:
            raise ConfigError("GITHUB_REPO_URL is not set in .env file")

        match = GITHUB_URL_PATTERN.search(self.github_repo_url)
        if not match:
            raise ConfigError(
                f"Could not parse GitHub URL: {self.github_repo_url}"
            )

        owner = match.group(1)
        repo = match.group(2)
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        return owner, repo

    def require_token(self) -> str:
        if not self.github_token:
            raise ConfigError("GITHUB_TOKEN is not set in .env file")
        return self.github_token


def generate_config_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Config file locations in order of precedence."""
    config_paths = []

    if cli_config_path:
        config_paths.append(Path(cli_config_path).expanduser().resolve())

    config_paths.extend(
        [Path.cwd() / "zmk-deploy.yaml", Path.cwd() / ".zmk-deploy.yml"]
    )

    xdg_dir = get_xdg_config_dir()
    config_paths.extend([xdg_dir / "config.yaml", xdg_dir / "config.yml"])

    return config_paths


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dictionary.

    Raises:
        ConfigError: If the file cannot be read or does not hold a mapping
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file format: {path}")
    return data


def load_settings(
    config_file: str | Path | None = None,
    env_file: str | Path | None = ".env",
) -> DeploySettings:
    """Load settings from the first config file found plus the environment.

    Args:
        config_file: Optional config file path provided via CLI
        env_file: Dotenv file to read, None to skip

    Raises:
        ConfigError: If an explicitly given config file does not exist, or a
            config file is invalid
    """
    if config_file and not Path(config_file).expanduser().exists():
        raise ConfigError(f"Config file not found: {config_file}")

    config_data: dict[str, Any] = {}
    for path in generate_config_paths(config_file):
        if path.is_file():
            config_data = read_config_file(path)
            logger.debug("config_file_loaded", path=str(path))
            break
    else:
        logger.debug("no_config_file_found")

    try:
        return DeploySettings(_env_file=env_file, **config_data)  # type: ignore[call-arg]
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
