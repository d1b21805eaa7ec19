import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it (e.g., some GitHub
# Actions runners invoking pytest differently).
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader
from services.db.database import Database
from tests.factories import make_bot, make_guild, make_settings


@pytest.fixture(autouse=True)
def reset_config_loader():
    """Every test starts from an unloaded ConfigLoader."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest_asyncio.fixture()
async def temp_db(tmp_path):
    """Initialize Database to a temporary file for isolation across tests."""
    # Save original state
    orig_path = Database._db_path
    orig_initialized = Database._initialized

    # Reset and initialize with temp database
    Database.reset()
    db_file = tmp_path / "test.db"
    await Database.initialize(str(db_file))

    # Verify initialization worked
    assert Database._initialized is True
    assert Database._db_path == str(db_file)

    yield str(db_file)

    # Restore original state completely
    Database._db_path = orig_path
    Database._initialized = orig_initialized


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def guild():
    return make_guild()


@pytest.fixture
def bot(guild):
    return make_bot(guilds=[guild])

