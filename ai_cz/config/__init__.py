"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

APP_DIR_NAME = "ai-cz"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    model: str = "gpt-4o-mini"
    temperature: float = 0.1
    max_diff_chars: int = 60000
    config_root: Optional[str] = None  # Parent of the ai-cz/ directory holding token.enc

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.model, str) or not self.model.strip():
            warnings.append(f"Invalid model '{self.model}', using '{defaults.model}'")
            self.model = defaults.model

        if (isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float))
                or not 0 <= self.temperature <= 2):
            warnings.append(f"Invalid temperature '{self.temperature}', using {defaults.temperature}")
            self.temperature = defaults.temperature

        if (isinstance(self.max_diff_chars, bool) or not isinstance(self.max_diff_chars, int)
                or self.max_diff_chars <= 0):
            warnings.append(f"Invalid max_diff_chars '{self.max_diff_chars}', using {defaults.max_diff_chars}")
            self.max_diff_chars = defaults.max_diff_chars

        if self.config_root is not None and not isinstance(self.config_root, str):
            warnings.append(f"Invalid config_root '{self.config_root}', using default location")
            self.config_root = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def default_config_root() -> Path:
    xdg = os.environ.get('XDG_CONFIG_HOME')
    return Path(xdg) if xdg else Path.home() / ".config"


def resolve_token_dir(config: Config) -> Path:
    """Directory holding the encrypted token.

    Precedence: AI_CZ_CONFIG_ROOT > config file > XDG_CONFIG_HOME > ~/.config
    """
    root = os.environ.get('AI_CZ_CONFIG_ROOT') or config.config_root
    base = Path(root).expanduser() if root else default_config_root()
    return base / APP_DIR_NAME


def resolve_model(config: Config, override: str | None = None) -> str:
    """Precedence: CLI flag > AI_CZ_MODEL > config file."""
    return override or os.environ.get('AI_CZ_MODEL') or config.model


class ConfigManager:
    """Loads configuration from .aiczrc files."""

    CONFIG_FILENAME = ".aiczrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            return Config.from_dict(data)
        except (ValueError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "APP_DIR_NAME",
    "Config",
    "ConfigManager",
    "default_config_root",
    "get_config_path",
    "load_config",
    "resolve_model",
    "resolve_token_dir",
]
