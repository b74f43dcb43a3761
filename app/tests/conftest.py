"""Shared pytest fixtures for the test suite."""

import pytest

from infrastructure.configuration import I18nSettings


@pytest.fixture
def i18n_settings_factory(tmp_path):
    """Build I18nSettings pointing at a temporary directory.

    Keyword arguments use the environment variable names (aliases).
    """

    def _make(**overrides):
        values = {
            "I18N_FILE_PATHS": [str(tmp_path / "lang" / "lang_{LANGUAGE}.ini")],
            "I18N_CACHE_PATH": str(tmp_path / "langcache"),
        }
        values.update(overrides)
        return I18nSettings(**values)

    return _make
