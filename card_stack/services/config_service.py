"""
Configuration service for the card stack.
Settings live in a JSON or YAML file; the stack section is validated on
every load and every change so a bad value never reaches the widget.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import os

import yaml

from ..core.card_io import DEFAULT_CARD_WIDTH
from ..core.errors import InvalidConfigurationError
from ..core.layout import DEFAULT_VGAP, validate_vgap
from .interfaces import IConfigService, ILogger

YAML_SUFFIXES = {'.yaml', '.yml'}


@dataclass
class StackConfig:
    """Card stack geometry and image lookup."""
    vgap: int = DEFAULT_VGAP
    card_width: int = DEFAULT_CARD_WIDTH
    image_dir: Optional[str] = None
    image_extension: str = ".jpg"

    def __post_init__(self):
        validate_vgap(self.vgap)
        if isinstance(self.card_width, bool) or not isinstance(self.card_width, int) or self.card_width <= 0:
            raise InvalidConfigurationError(f"Card width must be a positive integer, got {self.card_width!r}")
        if not isinstance(self.image_extension, str):
            raise InvalidConfigurationError(f"Image extension must be a string, got {self.image_extension!r}")
        if self.image_dir is not None and not isinstance(self.image_dir, str):
            raise InvalidConfigurationError(f"Image directory must be a string, got {self.image_dir!r}")
        if not self.image_extension.startswith('.'):
            self.image_extension = '.' + self.image_extension


@dataclass
class UIConfig:
    """Demo window settings."""
    window_title: str = "Card Stack"
    cards: List[str] = field(default_factory=lambda: ["Bazaar", "Market", "Bazaar", "Festival", "PirateShip"])
    log_level: str = "INFO"


@dataclass
class AppConfig:
    stack: StackConfig = field(default_factory=StackConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def default_config_path() -> Path:
    if os.name == 'nt':
        config_dir = Path.home() / "AppData" / "Local" / "CardStack"
    else:
        config_dir = Path.home() / ".config" / "card-stack"
    return config_dir / "config.json"


def _read_file(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return data or {}


def _write_file(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)


class ConfigService(IConfigService):
    """Concrete implementation of configuration service."""

    def __init__(self, logger: ILogger, config_path: Optional[Path] = None):
        self._logger = logger
        self._config_path = Path(config_path) if config_path else default_config_path()
        self._config = AppConfig()
        self._load_config_from_file()

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def stack(self) -> StackConfig:
        return self._config.stack

    @property
    def ui(self) -> UIConfig:
        return self._config.ui

    def _load_config_from_file(self) -> None:
        if not self._config_path.exists():
            self._logger.info("No config file found, using defaults", path=str(self._config_path))
            return

        try:
            data = _read_file(self._config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            self._logger.error(f"Failed to read config from {self._config_path}", exception=e)
            return

        self._config = self._dict_to_config(data)
        self._logger.info(f"Loaded configuration from: {self._config_path}")

    def _dict_to_config(self, data: Dict[str, Any]) -> AppConfig:
        """Build an AppConfig; raises InvalidConfigurationError on bad values."""
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")
        try:
            return AppConfig(
                stack=StackConfig(**(data.get('stack') or {})),
                ui=UIConfig(**(data.get('ui') or {})),
            )
        except TypeError as e:
            raise InvalidConfigurationError(f"Unknown configuration key: {e}") from e

    def load_config(self) -> Dict[str, Any]:
        return asdict(self._config)

    def save_config(self, config: Optional[Dict[str, Any]] = None) -> bool:
        if config is not None:
            self._config = self._dict_to_config(config)
        return self.export_config(self._config_path)

    def export_config(self, path: Path) -> bool:
        """Write the current configuration; format follows the file suffix."""
        try:
            _write_file(Path(path), self.load_config())
        except OSError as e:
            self._logger.error(f"Failed to write config to {path}", exception=e)
            return False
        self._logger.info(f"Saved configuration to: {path}")
        return True

    def get_setting(self, key: str, default: Any = None) -> Any:
        value: Any = self._config
        for part in key.split('.'):
            if not hasattr(value, part):
                return default
            value = getattr(value, part)
        return value

    def set_setting(self, key: str, value: Any) -> None:
        """Set 'section.name'; the section is rebuilt so validation runs again."""
        parts = key.split('.')
        if len(parts) != 2 or not hasattr(self._config, parts[0]):
            raise KeyError(f"Unknown setting: {key}")
        section_name, name = parts
        section = getattr(self._config, section_name)
        if not hasattr(section, name):
            raise KeyError(f"Unknown setting: {key}")

        setattr(self._config, section_name, replace(section, **{name: value}))
        self._logger.debug(f"Set setting '{key}' = {value}")
