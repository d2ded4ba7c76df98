"""Service test fixtures - repositories over the per-test SQLite session."""

import pytest

from anchor_pds.services.checkin_store import SqlCheckinRepository
from anchor_pds.services.user_settings_store import SqlUserSettingsRepository


@pytest.fixture
def checkin_repo(test_db):
    return SqlCheckinRepository(test_db)


@pytest.fixture
def settings_repo(test_db):
    return SqlUserSettingsRepository(test_db)
