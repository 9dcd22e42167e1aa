import sys
import pathlib

import pytest
from tortoise import Tortoise, connections

# Make the flat module layout (models, services, routers...) importable
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import DailyConsumption  # noqa: E402


class ScriptedSource:
    """Reading source that replays fixed values per device; an Exception value is raised."""

    def __init__(self, values):
        self._values = {k: list(v) for k, v in values.items()}
        self.calls = []

    def read(self, device_id):
        self.calls.append(device_id)
        value = self._values[device_id].pop(0)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def scripted_source():
    return ScriptedSource


@pytest.fixture
async def db():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": ["models"]})
    await Tortoise.generate_schemas()
    yield
    await connections.close_all()


@pytest.fixture
def reports_dir(tmp_path, monkeypatch):
    from services import config
    out = tmp_path / "reports"
    monkeypatch.setattr(config, "REPORTS_DIR", str(out))
    return out


@pytest.fixture
def add_day(db):
    async def _add_day(device_id, day, consumption, start=1000.0):
        return await DailyConsumption.create(
            device_id=device_id,
            day=day,
            energy_start=start,
            energy_end=start + consumption,
            consumption=consumption,
        )
    return _add_day
