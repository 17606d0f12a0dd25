import sys
import os

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clueboard.config import Settings, load_settings

ENV_VARS = [
    'CLUEBOARD_STORAGE_PATH',
    'CLUEBOARD_ASSET_BASE_URL',
    'CLUEBOARD_CATALOG_PATH',
    'CLUEBOARD_LOG_LEVEL',
    'CLUEBOARD_CLEAR_ON_FOCUS',
]


def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    clean_env(monkeypatch)
    assert load_settings(str(tmp_path / 'missing.env')) == Settings()


def test_environment_overrides(monkeypatch, tmp_path):
    clean_env(monkeypatch)
    monkeypatch.setenv('CLUEBOARD_STORAGE_PATH', '/var/lib/clueboard/progress.json')
    monkeypatch.setenv('CLUEBOARD_LOG_LEVEL', 'debug')
    monkeypatch.setenv('CLUEBOARD_CLEAR_ON_FOCUS', 'off')
    settings = load_settings(str(tmp_path / 'missing.env'))
    assert settings.storage_path == '/var/lib/clueboard/progress.json'
    assert settings.log_level == 'DEBUG'
    assert settings.clear_on_focus is False
    assert settings.catalog_path is None


def test_dotenv_file_is_read(monkeypatch, tmp_path):
    clean_env(monkeypatch)
    env_file = tmp_path / '.env'
    env_file.write_text('CLUEBOARD_ASSET_BASE_URL=https://cdn.example.com/clues\nCLUEBOARD_CATALOG_PATH=levels.json\n')
    settings = load_settings(str(env_file))
    assert settings.asset_base_url == 'https://cdn.example.com/clues'
    assert settings.catalog_path == 'levels.json'
    # load_dotenv writes into os.environ; drop it again for the other tests
    for name in ENV_VARS:
        os.environ.pop(name, None)
