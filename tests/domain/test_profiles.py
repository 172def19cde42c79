"""Tests for profiles module."""

import pytest

from domain.models import ContourSettings
from domain.profiles import load_profile, profile_path, profiles_dir, save_profile
from shared.constants import DEFAULT_PROFILES_DIR, PROFILES_DIR_ENV


@pytest.fixture
def user_dir(tmp_path, monkeypatch):
    folder = tmp_path / 'profiles'
    monkeypatch.setenv(PROFILES_DIR_ENV, str(folder))
    return folder


def create_test_settings(**overrides):
    """Create ContourSettings with typical values for testing."""
    defaults = {
        'levels': [100.0, 200.0],
        'lng_start': 37.0,
        'lat_start': 55.0,
        'grid_size': 0.5,
        'workers': 4,
        'skip_non_finite': True,
        'delimiter': ',',
    }
    defaults.update(overrides)
    return ContourSettings(**defaults)


class TestProfilePath:
    """Tests for profiles_dir / profile_path."""

    def test_env_override(self, user_dir):
        assert profiles_dir() == user_dir

    def test_default(self, monkeypatch):
        monkeypatch.delenv(PROFILES_DIR_ENV, raising=False)
        assert profiles_dir() == DEFAULT_PROFILES_DIR

    def test_name_resolves_into_profiles_dir(self, user_dir):
        assert profile_path('demo') == user_dir / 'demo.toml'

    def test_toml_path_kept(self, tmp_path, user_dir):
        target = tmp_path / 'x' / 'Custom.TOML'
        assert profile_path(target) == target

    def test_loading_does_not_create_directory(self, user_dir):
        with pytest.raises(FileNotFoundError):
            load_profile('demo')
        assert not user_dir.exists()


class TestSaveLoadProfile:
    """Tests for save_profile / load_profile."""

    def test_round_trip_by_name(self, user_dir):
        settings = create_test_settings()
        path = save_profile('demo', settings)
        assert path == user_dir / 'demo.toml'
        assert load_profile('demo') == settings

    def test_round_trip_by_path(self, tmp_path, user_dir):
        settings = create_test_settings(levels=[], iso_value=7.5)
        target = tmp_path / 'nested' / 'custom.toml'
        save_profile(target, settings)
        assert target.exists()
        assert load_profile(str(target)) == settings

    def test_saved_file_has_tables(self, user_dir):
        text = save_profile('demo', create_test_settings()).read_text(encoding='utf-8')
        assert '[georeference]' in text
        assert '[levels]' in text
        assert '[input]' in text

    def test_overwrite(self, user_dir):
        save_profile('demo', create_test_settings())
        save_profile('demo', create_test_settings(levels=[], iso_value=1.0))
        settings = load_profile('demo')
        assert settings.levels == []
        assert settings.iso_value == 1.0

    def test_load_flat_toml(self, tmp_path, user_dir):
        path = tmp_path / 'flat.toml'
        path.write_text('iso_value = 3.0\nworkers = 2\n', encoding='utf-8')
        settings = load_profile(path)
        assert settings.iso_value == 3.0
        assert settings.workers == 2

    def test_missing_profile(self, user_dir):
        with pytest.raises(FileNotFoundError):
            load_profile('nope')

    def test_invalid_profile(self, tmp_path, user_dir):
        path = tmp_path / 'bad.toml'
        path.write_text('[levels]\ninterval = -1.0\n', encoding='utf-8')
        with pytest.raises(ValueError):
            load_profile(path)
