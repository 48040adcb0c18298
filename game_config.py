"""
Environment-variable configuration for the 2048 game.
"""

import os

DEFAULTS = {
    'APP_ENV': 'development',
    'AI_URL': 'http://localhost:11434/v1',
    'AI_MODEL': 'llama3.2:3b-instruct-q8_0',
    'AI_API_KEY': 'ollama',
    'AI_TIMEOUT': 300.0,
    'LOG_LEVEL': 'info',
    'LOG_TO_FILE': False,
    'LOG_FILE_PATH': 'logs/app.log',
}


def _parse_timeout(raw, default):
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return default
    return timeout if timeout > 0 else default


def load_config(environ=None) -> dict:
    """
    Read configuration from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Dict with every key in DEFAULTS; unset or empty variables take the default
    """
    env = os.environ if environ is None else environ

    def get(name):
        return env.get(name) or DEFAULTS[name]

    return {
        'APP_ENV': get('APP_ENV'),
        'AI_URL': get('AI_URL'),
        'AI_MODEL': get('AI_MODEL'),
        'AI_API_KEY': get('AI_API_KEY'),
        'AI_TIMEOUT': _parse_timeout(env.get('AI_TIMEOUT'), DEFAULTS['AI_TIMEOUT']),
        'LOG_LEVEL': get('LOG_LEVEL'),
        'LOG_TO_FILE': str(env.get('LOG_TO_FILE', '')).lower() == 'true',
        'LOG_FILE_PATH': get('LOG_FILE_PATH'),
    }
