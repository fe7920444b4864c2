import os
import sys
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from food_api.app.core.db import init_db  # noqa: E402
from food_api.app.core.stable_map import StableMap  # noqa: E402
from food_api.app.main import create_app  # noqa: E402
from food_api.app.schemas.food import Food  # noqa: E402
from food_api.app.services.food_service import FoodService  # noqa: E402


class StepClock:
    """Deterministic clock: each call advances by one second."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture()
def db_path(tmp_path):
    path = str(tmp_path / "foods.db")
    init_db(path)
    return path


@pytest.fixture()
def storage(db_path):
    return StableMap(db_path, Food)


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def service(storage, clock):
    return FoodService(storage, clock=clock)


@pytest.fixture()
def client(tmp_path):
    app = create_app(database_path=str(tmp_path / "api.db"))
    with TestClient(app) as c:
        yield c
