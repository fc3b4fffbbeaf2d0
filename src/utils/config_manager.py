"""
Configuration management for the matching system.

Handles loading, updating, and persisting configuration including
scoring weights and schedule association settings.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional
import yaml

logger = logging.getLogger(__name__)

# Default config path relative to project root
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / 'config' / 'matcher_config.yaml'


class ConfigManager:
    """
    Manages system configuration including scoring weights.

    Provides methods to load, update, and persist configuration. Loaded
    files are merged over DEFAULT_CONFIG so every key is always present.
    """

    DEFAULT_CONFIG = {
        'scoring': {
            'item_name_weight': 5,
            'task_description_weight': 2,
            'exact_match_score': 10,
            'partial_match_score': 1,
            'base_safety_penalty': 5,
        },
        'association': {
            'max_workers': 1,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
            else:
                # Merge with defaults to ensure all keys exist
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def get_scoring_param(self, name: str) -> int:
        """
        Get a scoring parameter by name.

        Args:
            name: Parameter name (e.g., 'item_name_weight')

        Returns:
            Parameter value

        Raises:
            KeyError: If parameter not found
        """
        if name not in self.config.get('scoring', {}):
            raise KeyError(f"Scoring parameter '{name}' not found in configuration")

        return self.config['scoring'][name]

    def update_scoring_param(self, name: str, value: int) -> None:
        """
        Update a scoring parameter.

        Args:
            name: Parameter name
            value: New value (positive integer)

        Raises:
            ValueError: If value is not a positive integer
        """
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"Scoring parameter must be a positive integer, got {value!r}")

        if 'scoring' not in self.config:
            self.config['scoring'] = {}

        old_value = self.config['scoring'].get(name)
        self.config['scoring'][name] = value

        logger.info(f"Updated scoring parameter '{name}': {old_value} -> {value}")

    def get_association_param(self, name: str) -> Any:
        """
        Get a schedule association parameter by name.

        Args:
            name: Parameter name

        Returns:
            Parameter value

        Raises:
            KeyError: If parameter not found
        """
        if name not in self.config.get('association', {}):
            raise KeyError(f"Association parameter '{name}' not found in configuration")

        return self.config['association'][name]

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        try:
            # Ensure parent directory exists
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    self.config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            logger.info(f"Saved configuration to {save_path}")

        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def get_all_config(self) -> dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Full configuration dictionary
        """
        return self._deep_copy_dict(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = self._deep_copy_dict(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def _deep_copy_dict(self, d: dict) -> dict:
        """Deep copy a dictionary."""
        return copy.deepcopy(d)

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate scoring weights
        scoring = self.config.get('scoring', {})
        for name, value in scoring.items():
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"Scoring parameter '{name}' must be an integer, got {type(value)}")
            elif value < 1:
                errors.append(f"Scoring parameter '{name}' must be positive, got {value}")

        exact = scoring.get('exact_match_score')
        partial = scoring.get('partial_match_score')
        if isinstance(exact, int) and isinstance(partial, int) and exact <= partial:
            errors.append("exact_match_score must be greater than partial_match_score")

        # Validate association parameters
        association = self.config.get('association', {})
        if 'max_workers' in association:
            workers = association['max_workers']
            if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
                errors.append("max_workers must be a positive integer")

        return errors
