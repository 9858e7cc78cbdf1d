"""
Configuration Loader

Loads querytree configuration from querytree.json in the project root.
Environment variables always take precedence over config file values.

Config file location (in order of precedence):
1. QUERYTREE_PROJECT_ROOT/querytree.json (if QUERYTREE_PROJECT_ROOT is set)
2. CWD/querytree.json

Supported settings in querytree.json:
{
    "highlight_name": "ident",     // -> QUERYTREE_HIGHLIGHT_NAME
    "highlight_value": "pm",       // -> QUERYTREE_HIGHLIGHT_VALUE
    "strict_kinds": false,         // -> QUERYTREE_STRICT_KINDS
    "log_level": "WARNING",        // -> QUERYTREE_LOG_LEVEL
    "debug_log": "1"               // -> QUERYTREE_DEBUG_LOG
}
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_config import configure_logger_for_debug_trace

logger = configure_logger_for_debug_trace(__name__)

CONFIG_FILENAME = "querytree.json"


class ConfigLoader:
    """
    Loads configuration from querytree.json file.

    Priority: Environment variables > querytree.json > defaults
    """

    # Mapping from querytree.json keys to environment variable names
    CONFIG_KEY_TO_ENV = {
        "highlight_name": "QUERYTREE_HIGHLIGHT_NAME",
        "highlight_value": "QUERYTREE_HIGHLIGHT_VALUE",
        "strict_kinds": "QUERYTREE_STRICT_KINDS",
        "log_level": "QUERYTREE_LOG_LEVEL",
        "log_dir": "QUERYTREE_LOG_DIR",
        "debug_log": "QUERYTREE_DEBUG_LOG",
    }

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None
        self._loaded = False

    def load(self, project_root: Optional[Path] = None) -> bool:
        """
        Load configuration from querytree.json.

        Args:
            project_root: Project root directory. If None, uses QUERYTREE_PROJECT_ROOT or CWD.

        Returns:
            True if config file was found and loaded, False otherwise.
        """
        if self._loaded:
            return self._config_path is not None

        if project_root is None:
            env_root = os.getenv("QUERYTREE_PROJECT_ROOT")
            project_root = Path(env_root) if env_root else Path.cwd()

        config_path = Path(project_root) / CONFIG_FILENAME
        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    self._config = json.load(f)
            except json.JSONDecodeError as e:
                logger.warning("Invalid JSON in %s: %s", config_path, e)
            else:
                self._config_path = config_path
                logger.info("Loaded config from: %s", config_path)
                self._apply_config()

        self._loaded = True
        return self._config_path is not None

    def _apply_config(self) -> None:
        """
        Apply config values as environment variables (only if not already set).
        This allows env vars to override config file values.
        """
        for config_key, env_var in self.CONFIG_KEY_TO_ENV.items():
            if config_key in self._config and not os.getenv(env_var):
                value = self._config[config_key]
                # bool before int: bool is an int subclass
                if isinstance(value, bool):
                    value = "true" if value else "false"
                elif isinstance(value, (int, float)):
                    value = str(value)
                os.environ[env_var] = value
                logger.debug("%s=%s (from %s)", env_var, value, CONFIG_FILENAME)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value."""
        return self._config.get(key, default)

    @property
    def config_path(self) -> Optional[Path]:
        """Path to the loaded config file, or None if not loaded."""
        return self._config_path

    @property
    def config(self) -> Dict[str, Any]:
        """The loaded configuration dictionary."""
        return self._config.copy()


# Global singleton instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get the global config loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_config(project_root: Optional[Path] = None) -> bool:
    """
    Load configuration from querytree.json.

    Call this early, before a SelectorConfig is built from the environment.

    Args:
        project_root: Project root directory. If None, auto-detects.

    Returns:
        True if config was loaded, False otherwise.
    """
    return get_config_loader().load(project_root)
