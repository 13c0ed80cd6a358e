"""
Ship Maintenance Test Suite: Shared Fixtures

Every test gets its own SQLite file under tmp_path, so tests never share
state and need no running server.

Usage:
    pip install -e ".[test]"
    pytest tests -v --tb=short
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure backend/ is on sys.path so module imports resolve.
BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import Settings  # noqa: E402
from core.db import Storage, init_db, make_engine  # noqa: E402
from modules.components.schemas import ComponentCreate  # noqa: E402
from modules.components.services import ComponentRegistry  # noqa: E402
from modules.crewing.services import CrewService  # noqa: E402
from modules.inventory.services import PartService  # noqa: E402
from modules.maintenance.services import MaintenanceHistoryLog, MaintenanceScheduler  # noqa: E402
from modules.purchasing.services import PurchaseOrderService  # noqa: E402
from modules.users.schemas import UserCreate  # noqa: E402
from modules.users.services import AuthService, UserService  # noqa: E402

# Fixed "now" for every clock-dependent service
NOW = datetime(2024, 6, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@pytest.fixture()
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'shipmaint.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def storage(engine):
    return Storage(engine)


class RecordingStorage(Storage):
    """Storage that remembers every statement passed to execute()."""

    def __init__(self, engine):
        super().__init__(engine)
        self.executed = []

    def execute(self, statement, params=None):
        self.executed.append(statement)
        return super().execute(statement, params)


@pytest.fixture()
def recording_storage(engine):
    return RecordingStorage(engine)


@pytest.fixture()
def clock():
    return lambda: NOW


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture()
def registry(storage):
    return ComponentRegistry(storage)


@pytest.fixture()
def scheduler(storage, clock):
    return MaintenanceScheduler(storage, clock=clock)


@pytest.fixture()
def history_log(storage, clock):
    return MaintenanceHistoryLog(storage, clock=clock)


@pytest.fixture()
def users(storage):
    return UserService(storage)


@pytest.fixture()
def auth(storage):
    return AuthService(storage)


@pytest.fixture()
def parts(storage):
    return PartService(storage)


@pytest.fixture()
def orders(storage):
    return PurchaseOrderService(storage)


@pytest.fixture()
def crew(storage, clock):
    return CrewService(storage, clock=clock)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_component(registry):
    """Insert a component; keyword arguments override the defaults."""
    def _make(name="Main Engine", type="component", **fields):
        return registry.insert(ComponentCreate(name=name, type=type, **fields))
    return _make


@pytest.fixture()
def make_user(users):
    def _make(username="chief", name="Chief Engineer", role="engineer", password="secret"):
        return users.create(UserCreate(username=username, password=password, name=name, role=role))
    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'shipmaint.db'}",
        api_key=None,
        seed_demo_data=False,
        seed_default_users=False,
    )


@pytest.fixture()
def client(settings, storage):
    from fastapi.testclient import TestClient
    from core.app import create_app

    app = create_app(settings=settings, storage=storage)
    with TestClient(app) as c:
        yield c
