"""Cross-platform path helpers for svcdaemon's own files.

These locate svcdaemon's configuration and log directories. They are NOT the
locations of service definition files, which belong to the native service
managers and are configured in ``Settings.paths``.

All functions return Path objects. Directories are NOT created automatically;
callers should call ``path.mkdir(parents=True, exist_ok=True)`` as needed.
"""

import os
import sys
from pathlib import Path

from ..config import APP_NAME

__all__ = [
    'APP_NAME',
    'get_config_dir',
    'get_logs_dir',
    'get_config_file_path',
]


def _get_platform() -> str:
    """Detect the current platform.

    Returns:
        'windows', 'darwin', or 'linux'
    """
    if sys.platform == 'win32':
        return 'windows'
    elif sys.platform == 'darwin':
        return 'darwin'
    else:
        return 'linux'


def _get_xdg_path(xdg_var: str, default_subpath: str) -> Path:
    """Get XDG-compliant path with environment variable support.

    Args:
        xdg_var: XDG environment variable name (e.g., 'XDG_CONFIG_HOME')
        default_subpath: Default path relative to home (e.g., '.config')

    Returns:
        Path with APP_NAME appended
    """
    xdg_base = os.environ.get(xdg_var)
    if xdg_base:
        return Path(xdg_base) / APP_NAME
    return Path.home() / default_subpath / APP_NAME


def get_config_dir() -> Path:
    """Get platform-appropriate configuration directory.

    Returns:
        Path to configuration directory (not created automatically)
        - Windows: %LOCALAPPDATA%\\svcdaemon\\config
        - macOS: ~/Library/Preferences/svcdaemon
        - Linux: XDG_CONFIG_HOME/svcdaemon or ~/.config/svcdaemon
    """
    platform = _get_platform()

    if platform == 'windows':
        localappdata = os.environ.get('LOCALAPPDATA')
        if localappdata:
            return Path(localappdata) / APP_NAME / 'config'
        return Path.home() / 'AppData' / 'Local' / APP_NAME / 'config'

    elif platform == 'darwin':
        return Path.home() / 'Library' / 'Preferences' / APP_NAME

    else:  # linux
        return _get_xdg_path('XDG_CONFIG_HOME', '.config')


def get_logs_dir() -> Path:
    """Get platform-appropriate logs directory.

    Returns:
        Path to logs directory (not created automatically)
        - Windows: %LOCALAPPDATA%\\svcdaemon\\logs
        - macOS: ~/Library/Logs/svcdaemon
        - Linux: XDG_STATE_HOME/svcdaemon/logs or ~/.local/state/svcdaemon/logs
    """
    platform = _get_platform()

    if platform == 'windows':
        localappdata = os.environ.get('LOCALAPPDATA')
        if localappdata:
            return Path(localappdata) / APP_NAME / 'logs'
        return Path.home() / 'AppData' / 'Local' / APP_NAME / 'logs'

    elif platform == 'darwin':
        return Path.home() / 'Library' / 'Logs' / APP_NAME

    else:  # linux
        return _get_xdg_path('XDG_STATE_HOME', '.local/state') / 'logs'


def get_config_file_path() -> Path:
    """Get the path to the main configuration file.

    Returns:
        Path to config.json in the config directory
    """
    return get_config_dir() / 'config.json'
