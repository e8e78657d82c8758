"""
Configuration loading
Reads config.yaml and merges in secrets from environment variables.
"""

import copy
import os
from typing import Dict, Iterable, Optional
import logging
import pytz
import yaml

logger = logging.getLogger(__name__)

REQUIRED_ENV = ('BOT_TOKEN', 'CHAT_ID', 'RAPIDAPI_KEY')

DEFAULT_KEYWORDS = [
    "remote", "work from home", "wfh",
    "intern", "internship", "summer",
    "full stack", "full-stack", "backend", "frontend",
    "react", "node", "mern",
    "generative ai", "gen ai", "ai", "openai", "gpt",
    "machine learning", "ml engineer",
]

DEFAULTS: Dict = {
    'search': {
        'query': 'remote internship software engineer full stack backend frontend generative ai',
        'host': 'jsearch.p.rapidapi.com',
        'timeout': 15,
    },
    'job_keywords': DEFAULT_KEYWORDS,
    'schedule': {
        'interval_minutes': 5,
        'timezone': 'UTC',
    },
    'notifications': {
        'delay_seconds': 0.3,
    },
    'storage': {
        'seen_file': os.path.join('data', 'seen.json'),
    },
    'server': {
        'host': '0.0.0.0',
        'port': 3000,
    },
}


class ConfigError(Exception):
    """Configuration is missing or invalid; the service must not start"""


def _merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _number(config: Dict, section: str, key: str, kind=float, minimum: float = 0) -> None:
    value = config[section].get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{section}.{key} must be a number, got {value!r}")
    if kind is int and not isinstance(value, int):
        raise ConfigError(f"{section}.{key} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{section}.{key} must be at least {minimum}, got {value!r}")


def _validate(config: Dict) -> None:
    """Reject values the pipeline cannot run with"""
    for section in ('search', 'schedule', 'notifications', 'storage', 'server'):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"{section} must be a mapping")

    keywords = config.get('job_keywords')
    if not isinstance(keywords, list) or not keywords:
        raise ConfigError("job_keywords must be a non-empty list")
    bad = [kw for kw in keywords if not isinstance(kw, str) or not kw.strip()]
    if bad:
        raise ConfigError(f"job_keywords must be non-empty strings, got {bad!r}")

    if not isinstance(config['search'].get('query'), str) or not config['search']['query'].strip():
        raise ConfigError("search.query must be a non-empty string")
    _number(config, 'search', 'timeout', minimum=1)
    _number(config, 'schedule', 'interval_minutes', kind=int, minimum=1)
    _number(config, 'notifications', 'delay_seconds', minimum=0)
    _number(config, 'server', 'port', kind=int, minimum=1)

    if not isinstance(config['storage'].get('seen_file'), str) or not config['storage']['seen_file']:
        raise ConfigError("storage.seen_file must be a non-empty path")

    try:
        pytz.timezone(config['schedule'].get('timezone'))
    except (pytz.UnknownTimeZoneError, AttributeError) as e:
        raise ConfigError(f"Unknown schedule.timezone: {config['schedule'].get('timezone')!r}") from e


def load_config(config_path: str = 'config.yaml', env: Optional[Dict[str, str]] = None,
                required: Iterable[str] = REQUIRED_ENV) -> Dict:
    """
    Load configuration file and required credentials.

    Args:
        config_path: YAML file with non-secret settings. Defaults apply if absent.
        env: Environment mapping (defaults to os.environ)
        required: Environment variables that must be set

    Raises:
        ConfigError: Invalid YAML, invalid values or missing required environment variables
    """
    env = os.environ if env is None else env

    file_config: Dict = {}
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            file_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Config file not found: {config_path}, using defaults")
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {config_path}: {e}") from e

    if not isinstance(file_config, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    config = _merge(DEFAULTS, file_config)

    missing = [name for name in required if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing env var(s): {', '.join(missing)}")

    if env.get('PORT'):
        try:
            port = int(env['PORT'])
        except ValueError as e:
            raise ConfigError(f"Invalid PORT: {env['PORT']}") from e
        if isinstance(config.get('server'), dict):
            config['server']['port'] = port

    _validate(config)

    config['telegram'] = {
        'bot_token': env.get('BOT_TOKEN', ''),
        'chat_id': env.get('CHAT_ID', ''),
    }
    config['search']['api_key'] = env.get('RAPIDAPI_KEY', '')

    return config
