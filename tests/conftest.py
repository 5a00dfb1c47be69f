import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from undercroft import create_app  # noqa: E402
from undercroft.routes.dungeon_api import clear_dungeon_cache  # noqa: E402
from tests.dungeon_test_utils import TEST_SIDE  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app(
        {
            "TESTING": True,
            "DUNGEON_WIDTH": TEST_SIDE,
            "DUNGEON_HEIGHT": TEST_SIDE,
            "DUNGEON_ROOM_ATTEMPTS": 80,
            "DUNGEON_SEED": None,
            "DUNGEON_DISABLE_CACHE": False,
            "DUNGEON_MAX_SIDE": 101,
        }
    )
    clear_dungeon_cache()
    yield app
    clear_dungeon_cache()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_structured_logs(monkeypatch):
    """Keep generation chatter out of captured output unless a test opts in."""
    monkeypatch.setenv("UNDERCROFT_LOG_LEVEL", "error")
    monkeypatch.delenv("UNDERCROFT_LOG_JSON", raising=False)
