"""Tests for the SQLAlchemy key-value backend."""

import pytest

from database.crud import SqlAlchemyBackend
from plant_sim.config_store import ConfigurationStore, PersistenceError
from plant_sim.types import FuelMode


@pytest.fixture
def backend(tmp_path):
    backend = SqlAlchemyBackend(f"sqlite:///{tmp_path / 'settings.db'}")
    yield backend
    backend.dispose()


class TestSqlAlchemyBackend:
    def test_missing_key(self, backend):
        assert backend.get("app-config") is None

    def test_put_and_overwrite(self, backend):
        backend.put("app-selected-plant", '"UTE Juiz de Fora"')
        backend.put("app-selected-plant", '"UTE Norte Fluminense"')
        assert backend.get("app-selected-plant") == '"UTE Norte Fluminense"'

    def test_store_round_trip(self, backend):
        store = ConfigurationStore(backend)
        store.set("UTE Juiz de Fora", {"fuel_mode": "ETHANOL", "turbine_status": {5: "inactive"}})
        reloaded = ConfigurationStore(backend)
        assert reloaded.get("UTE Juiz de Fora").fuel_mode == FuelMode.ETHANOL
        assert reloaded.get("UTE Juiz de Fora") == store.get("UTE Juiz de Fora")

    def test_unreachable_database(self, tmp_path):
        with pytest.raises(PersistenceError):
            SqlAlchemyBackend(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'settings.db'}")
