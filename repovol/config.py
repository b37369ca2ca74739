"""Configuration for feature flags, tool names and the clones directory

The configuration is an INI file:

    [features]
    cow_snapshots = true     # attempt btrfs subvolumes at all

    [tools]
    cow_tool = btrfs

    [dirs]
    clones = $REPOVOL_HOME/clones
"""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

logger = logging.getLogger(__name__)

APP_NAME = "repovol"

HOME_VAR = "$REPOVOL_HOME"

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg = {
    "features": {"cow_snapshots": "true"},
    "tools": {"cow_tool": "btrfs"},
    "dirs": {"clones": f"{HOME_VAR}/clones"},
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/repovol").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


def init_dirs():
    """Create the configuration directory, warning instead of failing on read-only filesystems."""
    try:
        os.makedirs(config_dir, exist_ok=True)
    except OSError as e:
        logger.warning(
            f"Could not create config directory {config_dir}: {e}. "
            "Using in-memory configuration only."
        )


def expand_home_path(s: str) -> str:
    """
    Expand the $REPOVOL_HOME variable in the given string.

    Uses ~/.repovol when REPOVOL_HOME is not set in the environment.

    Args:
        s: String possibly containing $REPOVOL_HOME

    Returns:
        The string with every occurrence of $REPOVOL_HOME replaced
    """
    home = os.environ.get("REPOVOL_HOME")
    if not home:
        home = os.path.join(os.path.expanduser("~"), f".{APP_NAME}")
    return s.replace(HOME_VAR, home)


class ConfigAccessor:
    """
    Read and write access to an INI configuration file.

    Missing files, sections and keys are not errors; lookups fall back to
    the default given by the caller.

    Usage:
        config = ConfigAccessor()
        enabled = config.get_bool('features', 'cow_snapshots', default=True)
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
            init_dirs()
        else:
            self.config_path = config_path

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_bool(self, section: str, key: str, default: bool = False) -> bool:
        """
        Get a boolean configuration value.

        Accepts the spellings configparser accepts (yes/no, on/off, true/false, 1/0).

        Raises:
            ValueError: If the stored value is not a recognised boolean
        """
        value = self.get(section, key)
        if value is None:
            return default
        try:
            return self.config.BOOLEAN_STATES[value.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Invalid boolean for [{section}] {key} in {self.config_path}: {value!r}"
            )

    def sections(self) -> list:
        return self.config.sections()

    def options(self, section: str) -> list:
        """Keys of ``section``; a missing section has none."""
        try:
            return self.config.options(section)
        except configparser.NoSectionError:
            return []

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config[section][key] = value

    def save(self) -> None:
        """Write the configuration back; a read-only location only produces a warning."""
        try:
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )


# Create a global config accessor instance
config = ConfigAccessor()


def cow_snapshots_enabled() -> bool:
    """Whether the copy-on-write path may be attempted at all."""
    return config.get_bool(
        "features",
        "cow_snapshots",
        default=default_cfg["features"]["cow_snapshots"] == "true",
    )


def get_cow_tool() -> str:
    return config.get("tools", "cow_tool", default_cfg["tools"]["cow_tool"])


def get_clones_dir() -> Path:
    """
    Get the configured directory holding canonical clones.

    Returns:
        Path to the clones directory (defaults to $REPOVOL_HOME/clones)
    """
    clones_dir_str = config.get("dirs", "clones", default_cfg["dirs"]["clones"])
    clones_dir = Path(expand_home_path(clones_dir_str)).expanduser()

    # Create directory if it doesn't exist
    clones_dir.mkdir(parents=True, exist_ok=True)

    return clones_dir
