"""Configuration management for Retire Calc.

Configuration lives in a single settings.json holding tool preferences.
No personal financial data is stored; every calculation receives its
inputs explicitly.

Config directory resolution:
1. RETIRE_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/retire-calc/ (XDG_CONFIG_HOME fallback)

Known settings:
- tax_year: default tax year for rule lookup (e.g., 2024)
- tax_rules_dir: extra directory searched for <year>.yaml tax rules
"""

import json
import os
from pathlib import Path
from typing import Any

APP_NAME = "retire-calc"
SETTINGS_FILENAME = "settings.json"
TAX_RULES_DIRNAME = "tax-rules"

# Tax year of the bundled rules used when no setting overrides it
DEFAULT_TAX_YEAR = 2024

KNOWN_SETTINGS = ("tax_year", "tax_rules_dir")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. RETIRE_CALC_CONFIG_PATH environment variable
    2. ~/.config/retire-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("RETIRE_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "tax_year")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Args:
        key: Setting key
        value: Value to set

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting from settings.json.

    Returns:
        True if the key was present and removed
    """
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_default_tax_year() -> int:
    """Tax year used when a caller doesn't pass one."""
    return int(get_setting("tax_year", DEFAULT_TAX_YEAR))


def get_tax_rules_dirs() -> list[Path]:
    """Directories searched for <year>.yaml tax rules, highest priority first.

    1. settings.json "tax_rules_dir" (if set)
    2. <config dir>/tax-rules/
    3. Rules bundled with the package
    """
    dirs = []

    custom = get_setting("tax_rules_dir")
    if custom:
        dirs.append(Path(custom).expanduser())

    dirs.append(get_config_dir() / TAX_RULES_DIRNAME)

    package_root = Path(__file__).parent.parent  # sdk -> retirecalc
    dirs.append(package_root / TAX_RULES_DIRNAME)

    return dirs
