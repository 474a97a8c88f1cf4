"""
Configuration loading for mcmod.

Handles the per-project mcmod.yaml file and the EULA environment override.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .errors import ConfigError
from .utils import get_logger


CONFIG_FILE_NAME = "mcmod.yaml"
EULA_ENV_VAR = "MCMOD_EULA_AUTO_AGREE"


@dataclass
class SourceMapping:
    """A directory copied from the project into the Forge workspace."""
    source: str
    destination: str


@dataclass
class SyncConfig:
    """Sync configuration."""
    sources: list[SourceMapping] = field(
        default_factory=lambda: [SourceMapping(source="src", destination="src")]
    )
    exclude: list[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    file: str = "mcmod.log"
    level: str = "INFO"


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    root: Path
    forge_dir: str = "forge"
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def forge_root(self) -> Path:
        """Path to the Forge workspace."""
        return self.root / self.forge_dir

    @property
    def state_dir(self) -> Path:
        """Directory holding mcmod's own bookkeeping files."""
        return self.root / ".mcmod"

    @property
    def log_file(self) -> Path:
        """Path to the log file."""
        return self.root / self.logging.file


@dataclass
class EulaConfig:
    """EULA gate configuration."""
    auto_agree: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EulaConfig':
        """Read the auto-agree override. Only "true" and "1" are accepted."""
        if environ is None:
            environ = os.environ
        value = environ.get(EULA_ENV_VAR, "")
        return cls(auto_agree=value in ("true", "1"))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _string_list(value: Any, description: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{description} must be a list of strings")
    return list(value)


def _destination(value: Any) -> str:
    """Check that a sync destination is a subdirectory of the Forge workspace."""
    destination = str(value)
    path = Path(destination)
    if path.is_absolute() or not path.parts or ".." in path.parts:
        raise ConfigError(
            f"Sync destination {destination!r} must be a subdirectory of the Forge workspace"
        )
    return destination


def _string(value: Any, description: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{description} must be a non-empty string")
    return value


def parse_sync_config(data: dict[str, Any]) -> SyncConfig:
    """Parse sync configuration section."""
    sync_data = _section(data, 'sync')

    if 'sources' not in sync_data:
        sources = SyncConfig().sources
    else:
        raw_sources = sync_data['sources']
        if not isinstance(raw_sources, list):
            raise ConfigError("'sync.sources' must be a list")

        sources = []
        for entry in raw_sources:
            if isinstance(entry, str):
                # Shorthand: same relative path on both sides
                sources.append(SourceMapping(source=entry, destination=_destination(entry)))
                continue
            if not isinstance(entry, dict) or 'from' not in entry:
                raise ConfigError(f"Invalid sync source entry: {entry!r}")
            source = str(entry['from'])
            sources.append(SourceMapping(
                source=source,
                destination=_destination(entry.get('to', source)),
            ))

    return SyncConfig(
        sources=sources,
        exclude=_string_list(sync_data.get('exclude', []), "'sync.exclude'"),
    )


def parse_logging_config(data: dict[str, Any]) -> LoggingConfig:
    """Parse logging configuration section."""
    logging_data = _section(data, 'logging')

    return LoggingConfig(
        file=_string(logging_data.get('file', 'mcmod.log'), "'logging.file'"),
        level=_string(logging_data.get('level', 'INFO'), "'logging.level'"),
    )


def load_project_config(root: Path) -> ProjectConfig:
    """
    Load the configuration of the project at root.

    Returns:
        Validated ProjectConfig object

    Raises:
        ConfigError: If the file is invalid
    """
    config_path = root / CONFIG_FILE_NAME
    get_logger().debug(f"Loading config from: {config_path}")
    data = load_yaml_file(config_path)

    forge_dir = data.get('forge_dir', 'forge')
    if not isinstance(forge_dir, str) or not forge_dir:
        raise ConfigError("'forge_dir' must be a non-empty string")

    return ProjectConfig(
        root=root,
        forge_dir=forge_dir,
        sync=parse_sync_config(data),
        logging=parse_logging_config(data),
    )
