import pytest

from game_config import DEFAULTS, load_config


def test_defaults_when_environment_is_empty():
    assert load_config({}) == DEFAULTS


def test_reads_environment():
    config = load_config({
        'APP_ENV': 'production',
        'AI_URL': 'http://example.test/v1',
        'AI_MODEL': 'gpt-4o-mini',
        'AI_API_KEY': 'sk-test',
        'AI_TIMEOUT': '12.5',
        'LOG_LEVEL': 'debug',
        'LOG_TO_FILE': 'true',
        'LOG_FILE_PATH': '/tmp/game.log',
    })
    assert config == {
        'APP_ENV': 'production',
        'AI_URL': 'http://example.test/v1',
        'AI_MODEL': 'gpt-4o-mini',
        'AI_API_KEY': 'sk-test',
        'AI_TIMEOUT': 12.5,
        'LOG_LEVEL': 'debug',
        'LOG_TO_FILE': True,
        'LOG_FILE_PATH': '/tmp/game.log',
    }


@pytest.mark.parametrize('raw, expected', [
    ('true', True),
    ('TRUE', True),
    ('false', False),
    ('1', False),
    ('yes', False),
    ('', False),
])
def test_log_to_file_needs_literal_true(raw, expected):
    assert load_config({'LOG_TO_FILE': raw})['LOG_TO_FILE'] is expected


@pytest.mark.parametrize('raw', ['soon', '-5', '0'])
def test_bad_timeout_falls_back_to_default(raw):
    assert load_config({'AI_TIMEOUT': raw})['AI_TIMEOUT'] == DEFAULTS['AI_TIMEOUT']


def test_empty_values_use_defaults():
    assert load_config({'AI_MODEL': '', 'AI_URL': ''})['AI_MODEL'] == DEFAULTS['AI_MODEL']


def test_reads_os_environ_by_default(monkeypatch):
    monkeypatch.setenv('AI_MODEL', 'qwen2.5:7b')
    assert load_config()['AI_MODEL'] == 'qwen2.5:7b'
