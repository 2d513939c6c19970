#!/usr/bin/env python3
"""
Configuration loader for kana layout tools.

Provides unified configuration management using YAML files.
Handles merging of common settings with section-specific settings.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigLoader:
    """Handles loading and processing of YAML configuration files."""

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Returns:
            Full configuration dictionary

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        if config is None:
            config = {}

        self._config_cache = config
        return config

    def get_section_config(self, section_name: str) -> Dict[str, Any]:
        """
        Get configuration for one section with common settings merged.

        Args:
            section_name: Name of the section (e.g., 'layout_search')

        Returns:
            Merged configuration dictionary (section settings take precedence)

        Raises:
            ValueError: If the section is not in the configuration
        """
        full_config = self.load_config()

        if section_name not in full_config:
            raise ValueError(
                f"Section '{section_name}' not found in configuration. "
                f"Available sections: {sorted(k for k in full_config if k != 'common')}"
            )

        common_config = full_config.get('common') or {}
        section_config = dict(full_config[section_name] or {})
        if 'data_files' in section_config:
            section_config['data_files'] = dict(section_config['data_files'] or {})

        self._resolve_data_file_paths(section_config, common_config)

        return {**common_config, **section_config}

    def _resolve_data_file_paths(self, section_config: Dict[str, Any],
                                 common_config: Dict[str, Any]) -> None:
        """
        Resolve relative data file paths against the configured data directory.

        Args:
            section_config: Section configuration (modified in place)
            common_config: Common configuration settings
        """
        data_directories = common_config.get('data_directories') or {}

        if 'data_files' not in section_config:
            return

        base_dir = data_directories.get('base', 'input/')

        for key, filename in section_config['data_files'].items():
            if filename is None:
                continue

            filepath = Path(filename)

            if not filepath.is_absolute() and not str(filepath).startswith(base_dir):
                section_config['data_files'][key] = str(Path(base_dir) / filename)


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: str = "config.yaml") -> ConfigLoader:
    """
    Get global configuration loader instance (singleton pattern).

    Args:
        config_path: Path to configuration file

    Returns:
        ConfigLoader instance
    """
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader


def load_section_config(section_name: str, config_path: str = "config.yaml") -> Dict[str, Any]:
    """Convenience function to load one merged configuration section."""
    loader = get_config_loader(config_path)
    return loader.get_section_config(section_name)
