import json
import logging
from pathlib import Path
from typing import Dict, Any, Union

# Default settings ship inside the package (selenium_extensions/config/settings.json)
PACKAGE_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PACKAGE_ROOT / 'config'
DEFAULT_SETTINGS_FILE = CONFIG_DIR / 'settings.json'

logger = logging.getLogger(__name__)


class ConfigLoader:
    def __init__(self, settings_file: Union[str, Path] = DEFAULT_SETTINGS_FILE):
        """
        Initializes the ConfigLoader.

        Args:
            settings_file (Union[str, Path], optional): Path to the settings JSON file.
                                                        Defaults to the settings.json bundled with the package.
        """
        self.settings_file: Path = Path(settings_file)
        self.settings: Dict[str, Any] = self._load_json(self.settings_file, default_value={})

        if not self.settings:
            logger.warning(f"Settings file '{self.settings_file}' was not found or is empty/invalid. Using empty settings.")

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> 'ConfigLoader':
        """Builds a loader around an in-memory settings dictionary (no file access)."""
        loader = cls.__new__(cls)
        loader.settings_file = Path('<memory>')
        loader.settings = dict(settings)
        return loader

    def _load_json(self, file_path: Path, default_value: Dict[str, Any]) -> Any:
        """
        Loads a JSON file.

        Args:
            file_path (Path): The path to the JSON file.
            default_value (Dict[str, Any]): The default value to return if loading fails.

        Returns:
            Any: The loaded JSON data or the default value.
        """
        if not file_path.exists():
            logger.debug(f"Configuration file not found: {file_path}")
            return default_value
        if not file_path.is_file():
            logger.error(f"Configuration path is not a file: {file_path}")
            return default_value

        try:
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Could not decode JSON from {file_path}: {e}")
            return default_value
        except OSError as e:
            logger.error(f"Could not read {file_path}: {e}")
            return default_value

        if not isinstance(data, dict):
            logger.error(f"Expected a JSON object in {file_path}, found {type(data).__name__}.")
            return default_value
        logger.debug(f"Successfully loaded JSON from {file_path}")
        return data

    def get_settings(self) -> Dict[str, Any]:
        """Returns all loaded settings."""
        return self.settings

    def get_setting(self, path_str: str, default: Any = None) -> Any:
        """
        Retrieves a setting value using a dot-separated path.

        Args:
            path_str (str): Dot-separated path to the setting (e.g., "logging.level").
            default (Any, optional): Default value if the setting is not found. Defaults to None.

        Returns:
            Any: The setting value or the default.
        """
        current_level: Any = self.settings
        for key in path_str.split('.'):
            if not isinstance(current_level, dict):
                logger.warning(f"Invalid path '{path_str}' at key '{key}'. Expected a dictionary, found {type(current_level)}.")
                return default
            if key not in current_level:
                logger.debug(f"Setting '{path_str}' not found. Returning default: {default}")
                return default
            current_level = current_level[key]
        return current_level

    def get_browser_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'browser_settings' block."""
        return self.get_setting(f'browser_settings.{setting_name}', default)

    def get_wait_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'wait_settings' block."""
        return self.get_setting(f'wait_settings.{setting_name}', default)

    def get_logging_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'logging' block."""
        return self.get_setting(f'logging.{setting_name}', default)
