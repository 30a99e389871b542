"""Simple YAML configuration loader for speech2text."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "ui": {
        "start_directory": None,
        "show_hidden": False,
        "tick_interval_seconds": 0.1,
        "allowed_extensions": [
            ".mp4", ".avi", ".mov", ".mkv", ".webm",
            ".mp3", ".wav", ".m4a", ".flac",
        ],
    },
    "pipeline": {
        "ffmpeg_path": None,
        "ffmpeg_fallback_paths": [
            "C:\\ffmpeg\\bin\\ffmpeg.exe",
            "C:\\Program Files\\ffmpeg\\bin\\ffmpeg.exe",
            ".\\ffmpeg.exe",
        ],
        "python_path": None,
        "auto_install": True,
        "package": "openai-whisper",
        "model": "base",
        "language": None,
        "cancel_grace_seconds": 2.0,
    },
    "logging": {
        "level": "INFO",
        "file_path": "data/logs/speech2text.log",
        "console_output": False,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Speech2TextConfig:
    """speech2text configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults
                        are used as-is.
        """
        self.config_file: Optional[Path] = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not loaded:
            raise ValueError("Configuration file is empty")
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")

        config = _deep_merge(DEFAULT_CONFIG, loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        log_path = config['logging'].get('file_path')
        if log_path and not os.path.isabs(log_path):
            config['logging']['file_path'] = str(config_dir / log_path)

        start_dir = config['ui'].get('start_directory')
        if start_dir and not os.path.isabs(start_dir):
            config['ui']['start_directory'] = str(config_dir / start_dir)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'pipeline.model').

        Args:
            key_path: Dot-separated key path (e.g., 'logging.file_path')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return default if value is None else value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'pipeline.model')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_start_directory(self) -> str:
        """Get the directory the file browser opens in."""
        start_dir = self.get('ui.start_directory', os.getcwd())
        return str(Path(start_dir).expanduser().absolute())

    def get_allowed_extensions(self) -> list:
        """Get the selectable file extensions, lower-cased with a leading dot."""
        extensions = self.get('ui.allowed_extensions', [])
        return [ext.lower() if ext.startswith('.') else f".{ext.lower()}" for ext in extensions]
