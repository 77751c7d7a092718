"""
Configuration loader for gitxray.

This module provides functionality for loading and managing
configuration settings.

"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from gitxray.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Minimum number of parts in an environment variable name after the prefix
MIN_ENV_VAR_PARTS = 2

ENV_PREFIX = "GITXRAY_"

# Settings that must hold whole numbers
INT_KEYS = ("objects.binary_scan_limit", "reflog.limit")

ConfigValue = str | int | float | bool | dict[str, Any] | list[Any] | None


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigLoader:
	"""
	Loads and manages configuration for gitxray.

	This class handles loading configuration from files, environment
	variables, and default values.

	"""

	_instance = None

	@classmethod
	def get_instance(
		cls, config_file: str | None = None, reload: bool = False, repo_root: Path | None = None
	) -> "ConfigLoader":
		"""
		Get the singleton instance of ConfigLoader.

		Args:
		        config_file: Path to configuration file (optional)
		        reload: Whether to reload config even if already loaded
		        repo_root: Repository root path (optional)

		Returns:
		        ConfigLoader: Singleton instance

		"""
		if cls._instance is None or reload:
			cls._instance = cls(config_file, repo_root=repo_root)
		return cls._instance

	def __init__(self, config_file: str | None = None, repo_root: Path | None = None) -> None:
		self.config: dict[str, Any] = {}
		self.repo_root = repo_root
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .gitxray.yml in the repository root, then the current directory
		2. $XDG_CONFIG_HOME/gitxray/config.yml
		3. ~/.gitxray/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path

		candidates = []
		if self.repo_root is not None:
			candidates.append(Path(self.repo_root) / ".gitxray.yml")
		candidates.append(Path(".gitxray.yml"))
		candidates.append(Path(xdg_config_home) / "gitxray" / "config.yml")
		candidates.append(Path.home() / ".gitxray" / "config.yml")

		for candidate in candidates:
			if candidate.exists():
				return candidate

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        Dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If configuration file exists but cannot be loaded

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file:
			try:
				if self.config_file.exists():
					with self.config_file.open(encoding="utf-8") as f:
						file_config = yaml.safe_load(f)
					if file_config:
						if not isinstance(file_config, dict):
							msg = f"Configuration in {self.config_file} must be a mapping"
							raise ConfigError(msg)
						self._merge_configs(self.config, file_config)
					logger.info("Loaded configuration from %s", self.config_file)
				else:
					logger.warning("Configuration file not found: %s", self.config_file)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

		self._apply_env_overrides()
		self._validate()

		return self.config

	def _validate(self) -> None:
		"""Check that numeric settings can be read as integers."""
		for key in INT_KEYS:
			self._get_int(key)

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""Recursively merge ``override`` into ``base``."""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	def _apply_env_overrides(self) -> None:
		"""Apply GITXRAY_SECTION_KEY environment variable overrides."""
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var[len(ENV_PREFIX) :].lower().split("_")
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue
			section, key = parts[0], "_".join(parts[1:])

			typed_value: ConfigValue
			if value.lower() in ("true", "yes"):
				typed_value = True
			elif value.lower() in ("false", "no"):
				typed_value = False
			else:
				try:
					typed_value = int(value)
				except ValueError:
					try:
						typed_value = float(value)
					except ValueError:
						typed_value = value

			if not isinstance(self.config.get(section), dict):
				self.config[section] = {}

			self.config[section][key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value using dot notation.

		Examples:
		        config.get("reflog")
		        config.get("reflog.limit")

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        T: Configuration value or default

		"""
		current: Any = self.config
		for part in key.split("."):
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default

		return cast("T", current)

	def set(self, key: str, value: ConfigValue) -> None:
		"""Set a configuration value, creating intermediate sections."""
		parts = key.split(".")
		current = self.config

		for part in parts[:-1]:
			if not isinstance(current.get(part), dict):
				current[part] = {}
			current = current[part]

		current[parts[-1]] = value

	def save(self, config_file: str | None = None) -> None:
		"""
		Save the current configuration to a file.

		Args:
		        config_file: Path to save configuration to (optional, defaults to current config_file)

		Raises:
		        ConfigError: If configuration cannot be saved

		"""
		save_path = Path(config_file) if config_file else self.config_file

		if not save_path:
			error_msg = "No configuration file specified for saving"
			logger.error(error_msg)
			raise ConfigError(error_msg)

		try:
			save_path.parent.mkdir(parents=True, exist_ok=True)
			with save_path.open("w", encoding="utf-8") as f:
				yaml.dump(self.config, f, default_flow_style=False)
			logger.info("Configuration saved to %s", save_path)
		except OSError as e:
			error_msg = f"Error saving configuration to {save_path}: {e}"
			logger.exception(error_msg)
			raise ConfigError(error_msg) from e

	def _get_int(self, key: str) -> int:
		"""
		Read a dotted key as an integer.

		Raises:
		        ConfigError: If the value is not a whole number

		"""
		section, name = key.split(".", 1)
		value = self.get(key, DEFAULT_CONFIG[section][name])
		if isinstance(value, bool):
			msg = f"{key} must be an integer, got {value!r}"
			raise ConfigError(msg)
		try:
			return int(value)
		except (TypeError, ValueError) as e:
			msg = f"{key} must be an integer, got {value!r}"
			raise ConfigError(msg) from e

	def get_binary_scan_limit(self) -> int:
		"""Number of leading blob bytes scanned when detecting binary content."""
		return self._get_int("objects.binary_scan_limit")

	def get_reflog_path(self) -> str:
		return str(self.get("reflog.log_path", DEFAULT_CONFIG["reflog"]["log_path"]))

	def get_reflog_limit(self) -> int:
		return self._get_int("reflog.limit")

	def get_branch_prefix(self) -> str:
		return str(self.get("ghosts.branch_prefix", DEFAULT_CONFIG["ghosts"]["branch_prefix"]))
