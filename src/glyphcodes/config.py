# -*- coding: utf-8 -*-
"""
src/glyphcodes/config.py

Module for handling application configuration.

This module defines default settings for GlyphCodes, namely the glyph encoding
strategy used when codes are allocated and the logging level. It provides
functionality to load user-defined settings from a configuration file
(config.ini), creating one with default values on the first run.
"""

import configparser
import logging
import platform
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# --- Constants ---
APP_NAME = "GlyphCodes"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_ENCODING = "pua"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_app_dir() -> Path:
    """
    Gets the application's data directory in a cross-platform way.

    - Windows: %APPDATA%/GlyphCodes
    - macOS: ~/Library/Application Support/GlyphCodes
    - Linux: ~/.config/GlyphCodes

    Returns:
        Path: A Path object to the application's data directory.
    """
    if platform.system() == "Windows":
        app_dir = Path.home() / "AppData" / "Roaming" / APP_NAME
    elif platform.system() == "Darwin":  # macOS
        app_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    else:  # Linux and other Unix-like
        app_dir = Path.home() / ".config" / APP_NAME
    return app_dir


class Config:
    """
    Manages application configuration by loading defaults and overriding
    them with settings from a user-specific config file.
    """

    def __init__(self, app_dir: Optional[Path] = None):
        """
        Initializes the configuration manager.

        Args:
            app_dir (Optional[Path]): Directory holding config.ini. Defaults to
                                      the per-user application directory.
        """
        self.parser = configparser.ConfigParser()
        self.app_dir = Path(app_dir) if app_dir is not None else get_app_dir()
        self.config_file_path = self.app_dir / DEFAULT_CONFIG_FILENAME

        self._load_defaults()
        self._load_from_file()

    def _load_defaults(self):
        """Sets the default configuration values in the parser object."""
        self.parser["Encoding"] = {
            "strategy": DEFAULT_ENCODING
        }
        self.parser["Logging"] = {
            "level": DEFAULT_LOG_LEVEL
        }

    def _load_from_file(self):
        """
        Loads settings from the config.ini file, overriding defaults.
        If the file doesn't exist, it will be created with default values.
        """
        if not self.config_file_path.exists():
            self.save()
        else:
            self.parser.read(self.config_file_path)

    def save(self) -> bool:
        """
        Writes the current configuration to the config file.

        Returns:
            bool: True if the file was written.
        """
        try:
            self.app_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w') as configfile:
                configfile.write(f"# {APP_NAME} Configuration File\n")
                configfile.write("# strategy is one of: pua, ascii, unicode\n\n")
                self.parser.write(configfile)
            return True
        except OSError as e:
            # Non-critical: the in-memory settings still apply.
            logger.error(f"Could not write to config file at {self.config_file_path}: {e}")
            return False

    # --- Properties to access settings easily and with correct types ---

    @property
    def encoding(self) -> str:
        """
        The glyph encoding strategy, as written in the file.

        Validation happens when a code is allocated, so a bad value surfaces
        as an UnknownEncodingStrategy error at that point.
        """
        return self.parser.get("Encoding", "strategy", fallback=DEFAULT_ENCODING)

    def set_encoding(self, value) -> None:
        """
        Changes the encoding strategy in memory. Call `save()` to persist it.

        Raises:
            UnknownEncodingStrategy: If the value is not a known strategy.
        """
        from .core.allocator import EncodingStrategy
        self.parser.set("Encoding", "strategy", EncodingStrategy.parse(value).value)

    @property
    def log_level(self) -> int:
        """The logging level, as a `logging` module constant."""
        name = self.parser.get("Logging", "level", fallback=DEFAULT_LOG_LEVEL)
        level = logging.getLevelName(name.strip().upper())
        return level if isinstance(level, int) else logging.INFO


_config: Optional[Config] = None


def get_config() -> Config:
    """Returns the process-wide Config, loading it on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def setup_logging(config: Optional[Config] = None) -> None:
    """Configures the root logger from the configured level."""
    config = config or get_config()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)


# --- Example Usage (for testing this module directly) ---
if __name__ == '__main__':
    cfg = get_config()
    setup_logging(cfg)
    print(f"--- {APP_NAME} Configuration ---")
    print(f"Config file path: {cfg.config_file_path}")
    print(f"Encoding strategy: {cfg.encoding}")
    print(f"Log level: {logging.getLevelName(cfg.log_level)}")
