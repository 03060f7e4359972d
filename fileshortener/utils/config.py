"""Utility functions for application configuration management.

Configuration is layered, later layers win:

    1. DEFAULT_CONFIG (below)
    2. <project root>/config/<APP_ENV>.yml, if present
    3. Environment variable overrides (SHORTEN_AUTH_USER, SHORTEN_AUTH_PASS,
       SHORTEN_DATA_DIR, SHORTEN_BASE_URL)

The YAML file follows the structure of DEFAULT_CONFIG, and may set any subset of it:

    storage:
      data_dir: /var/lib/fileshortener
      backup_interval: 300
    sessions:
      max_lifetime: 86400
      secure_cookie: true
    shortener:
      base_url: https://s.example.com

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_config() -> dict
        Load the application configuration as a Python dictionary.

Example:
    >>> from fileshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['storage']['records_file']
    'shorten_records.json'
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from fileshortener.types import AppConfig
from fileshortener.constants import ENV, Interval, Session, Shortcode, Storage
from fileshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: AppConfig = {
    'storage': {
        'data_dir': Storage.DATA_DIR,
        'records_file': Storage.RECORDS_FILE,
        'backup_dir': Storage.BACKUP_DIR,
        'backup_interval': Interval.BACKUP,
    },
    'sessions': {
        'cookie_name': Session.COOKIE_NAME,
        'max_lifetime': Session.MAX_LIFETIME,
        'gc_interval': Interval.SESSION_GC,
        'secure_cookie': False,
    },
    'auth': {
        'username': 'admin',
        'password': 'admin',
    },
    'shortener': {
        'code_length': Shortcode.LENGTH,
        'base_url': None,
    },
}

# (environment variable, config section, config key)
ENV_OVERRIDES = (
    (ENV.Shorten.AUTH_USER, 'auth', 'username'),
    (ENV.Shorten.AUTH_PASS, 'auth', 'password'),
    (ENV.Shorten.DATA_DIR, 'storage', 'data_dir'),
    (ENV.Shorten.BASE_URL, 'shortener', 'base_url'),
)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Config file {path} is not valid YAML: {e}') from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f'Config file {path} must contain a mapping (found {type(data).__name__}).')
    return data


def _check_sections(config: AppConfig) -> None:
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            found = type(config.get(section)).__name__
            raise BadConfigurationError(f"Config section '{section}' must be a mapping, got {found}.")


def _coerce_credentials(config: AppConfig) -> None:
    """Read credentials as strings

    YAML parses an unquoted `password: 123456` as an int, which would never
    compare equal to the password a client sends.
    """
    for key in ('username', 'password'):
        value = config['auth'].get(key)
        if value is None or isinstance(value, (dict, list)):
            raise BadConfigurationError(f"Config value 'auth.{key}' must be a string.")
        config['auth'][key] = str(value)


def load_config(path: str | os.PathLike | None = None) -> AppConfig:
    """Load the application configuration

    Args:
        path (str | os.PathLike | None):
            Explicit YAML config file. Defaults to <project root>/config/<APP_ENV>.yml,
            which is skipped when it doesn't exist.

    Returns:
        dict: The merged configuration.

    Raises:
        BadConfigurationError:
            If the YAML file is malformed or doesn't hold a mapping, if a section
            isn't a mapping, or if a credential isn't a scalar.
        FileNotFoundError:
            If an explicit path is given and doesn't exist.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    config_path = Path(path) if path is not None else project_root() / 'config' / f'{app_env()}.yml'
    if path is not None or config_path.is_file():
        logger.debug('Loading config file.', extra={'configPath': str(config_path)})
        config = _merge(config, _load_yaml(config_path))
    _check_sections(config)

    for variable, section, key in ENV_OVERRIDES:
        value = os.environ.get(variable)
        if value:
            config[section][key] = value
    _coerce_credentials(config)

    if config['auth']['username'] == 'admin' and config['auth']['password'] == 'admin':
        logger.warning(
            f'Using default admin credentials. Set {ENV.Shorten.AUTH_USER} and {ENV.Shorten.AUTH_PASS} to secure the service.'
        )

    return config
