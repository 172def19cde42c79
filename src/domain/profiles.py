import logging
import os
from pathlib import Path

import tomlkit

from domain.models import ContourSettings
from domain.toml_sections import settings_to_tables, tables_to_fields
from shared.constants import DEFAULT_PROFILES_DIR, PROFILE_SUFFIX, PROFILES_DIR_ENV

logger = logging.getLogger(__name__)


def profiles_dir() -> Path:
    """$ISOLINES_PROFILES_DIR when set, else ~/.isolines/profiles."""
    env_dir = os.getenv(PROFILES_DIR_ENV)
    return Path(env_dir) if env_dir else DEFAULT_PROFILES_DIR


def profile_path(name_or_path: str | Path) -> Path:
    """
    Resolve a profile reference.

    ``*.toml`` is taken as a file path, anything else as a profile name in
    the profiles directory.
    """
    path = Path(name_or_path)
    if path.suffix.lower() == PROFILE_SUFFIX:
        return path
    return profiles_dir() / f'{name_or_path}{PROFILE_SUFFIX}'


def load_profile(name_or_path: str | Path) -> ContourSettings:
    """Read and validate a profile; raises FileNotFoundError if it is missing."""
    path = profile_path(name_or_path)
    if not path.exists():
        msg = f'Profile not found: {path}'
        raise FileNotFoundError(msg)
    data = tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
    settings = ContourSettings.model_validate(tables_to_fields(data))
    logger.info('Loaded profile %s', path)
    logger.debug('Profile settings: %s', settings.model_dump())
    return settings


def save_profile(name_or_path: str | Path, settings: ContourSettings) -> Path:
    """Write ``settings`` as a profile, replacing an existing one."""
    path = profile_path(name_or_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomlkit.dumps(settings_to_tables(settings)), encoding='utf-8')
    logger.info('Saved profile %s', path)
    return path
