"""
Runtime settings loaded from a TOML policy file.

Example policy-config.toml:

    log_level = "INFO"
    listen_address = "[::1]:50051"
    allowed_npubs = [
        "npub1mkq63wkt4v94cvq869njlwpszwpmf62c84p3sdvc2ptjy04jnzjs20r4tx",
    ]
"""

import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .config import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_MAX_WORKERS,
)
from .errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """
    Validated runtime settings.
    """
    log_level: str = DEFAULT_LOG_LEVEL
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    allowed_npubs: Tuple[str, ...] = field(default_factory=tuple)
    verify_curve_points: bool = False
    max_workers: int = DEFAULT_MAX_WORKERS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """
        Create settings from a parsed TOML table.

        Missing keys take their defaults.

        Raises:
            ConfigError: If keys are unknown or values have the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = {}

        for name in ('log_level', 'listen_address'):
            if name in data:
                if not isinstance(data[name], str):
                    raise ConfigError(f"{name} must be a string")
                values[name] = data[name]

        if 'listen_address' in values and not values['listen_address'].strip():
            raise ConfigError("listen_address must not be empty")

        if 'allowed_npubs' in data:
            npubs = data['allowed_npubs']
            if not isinstance(npubs, list) or not all(isinstance(n, str) for n in npubs):
                raise ConfigError("allowed_npubs must be a list of strings")
            values['allowed_npubs'] = tuple(npubs)

        if 'verify_curve_points' in data:
            if not isinstance(data['verify_curve_points'], bool):
                raise ConfigError("verify_curve_points must be a boolean")
            values['verify_curve_points'] = data['verify_curve_points']

        if 'max_workers' in data:
            workers = data['max_workers']
            if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
                raise ConfigError("max_workers must be a positive integer")
            values['max_workers'] = workers

        return cls(**values)

    def with_overrides(
        self,
        listen_address: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> 'Settings':
        """Return a copy with command-line overrides applied."""
        changes = {}
        if listen_address:
            changes['listen_address'] = listen_address
        if log_level:
            changes['log_level'] = log_level
        return replace(self, **changes)


def load_settings(path: Union[str, Path, None] = None) -> Settings:
    """
    Load settings from a TOML file.

    Args:
        path: Path to the policy file (defaults to ./policy-config.toml)

    Returns:
        Settings instance

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    config_path = Path(path or DEFAULT_CONFIG_FILE)

    try:
        with config_path.open('rb') as fh:
            data = tomllib.load(fh)
    except OSError as e:
        raise ConfigError(f"failed to read config {config_path}: {e}")
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse config {config_path}: {e}")

    return Settings.from_dict(data)
