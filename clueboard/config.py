import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    storage_path: str = 'clueboard_progress.json'
    asset_base_url: str = 'assets/clues'
    catalog_path: Optional[str] = None  # None means the built-in levels
    log_level: str = 'INFO'
    clear_on_focus: bool = True


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build Settings from CLUEBOARD_* environment variables, reading a .env file first
    when one is found. Variables already set in the environment win over the file.
    """
    load_dotenv(dotenv_path)
    defaults = Settings()
    return Settings(
        storage_path=os.environ.get('CLUEBOARD_STORAGE_PATH', defaults.storage_path),
        asset_base_url=os.environ.get('CLUEBOARD_ASSET_BASE_URL', defaults.asset_base_url),
        catalog_path=os.environ.get('CLUEBOARD_CATALOG_PATH') or None,
        log_level=os.environ.get('CLUEBOARD_LOG_LEVEL', defaults.log_level).upper(),
        clear_on_focus=_env_flag('CLUEBOARD_CLEAR_ON_FOCUS', defaults.clear_on_focus),
    )


def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
