"""Run configuration: API credential and locale directory discovery."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .client import GOOGLE_TRANSLATE_API_URL
from .errors import ConfigurationError

API_KEY_ENV = 'GOOGLE_TRANSLATE_API_KEY'
API_URL_ENV = 'GOOGLE_TRANSLATE_API_URL'

# Searched in order under the project root
ASSETS_DIR_CANDIDATES = (
    Path('src') / 'assets' / 'i18n',
    Path('assets') / 'i18n',
)


@dataclass
class Settings:
    api_key: str
    api_url: str = GOOGLE_TRANSLATE_API_URL


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Read the translation credential from the environment.

    Variables from ``env_file`` (default: ``.env`` in the working directory)
    are loaded first without overriding ones already set.
    """
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.is_file():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        load_dotenv(env_path, override=False)
    else:
        load_dotenv(Path.cwd() / '.env', override=False)

    api_key = os.environ.get(API_KEY_ENV, '').strip()
    if not api_key:
        raise ConfigurationError(
            f"{API_KEY_ENV} is not set. Export it or add it to a .env file."
        )

    api_url = os.environ.get(API_URL_ENV, '').strip() or GOOGLE_TRANSLATE_API_URL
    return Settings(api_key=api_key, api_url=api_url)


def find_assets_dir(project_root: Optional[Union[str, Path]] = None) -> Path:
    """Locate the i18n assets directory under the project root."""
    root = Path(project_root) if project_root is not None else Path.cwd()
    for candidate in ASSETS_DIR_CANDIDATES:
        path = root / candidate
        if path.is_dir():
            return path

    searched = ', '.join(str(root / candidate) for candidate in ASSETS_DIR_CANDIDATES)
    raise ConfigurationError(f"Assets directory not found! Searched: {searched}")
