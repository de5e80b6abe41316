# tests/unit/shared/test_settings.py
import pytest

from batepapo.errors import ErrorData
from batepapo.server.runtime.server import BatePapo, Settings
from batepapo.server.runtime.store import InMemoryStore
from batepapo.server.runtime.store.stores.sqlite_store import SqliteStore
from batepapo.shared.exceptions import BatePapoError


def test_settings_defaults(monkeypatch):
    for var in ["BATEPAPO_PORT", "BATEPAPO_STORE_URL", "BATEPAPO_STALE_THRESHOLD_MS"]:
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)

    assert settings.port == 5000
    assert settings.store_url == "memory://"
    assert settings.stale_threshold_ms == 10_000
    assert settings.eviction_interval_ms == 15_000


def test_environment_configures_the_server(monkeypatch, tmp_path):
    monkeypatch.setenv("BATEPAPO_PORT", "8123")
    monkeypatch.setenv("BATEPAPO_STORE_URL", f"sqlite:///{tmp_path / 'chat.db'}")
    monkeypatch.setenv("BATEPAPO_STALE_THRESHOLD_MS", "2500")

    server = BatePapo()

    assert server.settings.port == 8123
    assert isinstance(server.store, SqliteStore)
    assert server.scheduler.stale_threshold_ms == 2500
    server.store.engine.close()


def test_constructor_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("BATEPAPO_EVICTION_INTERVAL_MS", "99")

    server = BatePapo(InMemoryStore(), eviction_interval_ms=1_000, port=9000)

    assert server.scheduler.interval_ms == 1_000
    assert server.settings.port == 9000
    assert isinstance(server.store, InMemoryStore)


def test_error_carries_its_data():
    err = BatePapoError(ErrorData(code=409, message="Participant already exists"))

    assert str(err) == "Participant already exists"
    assert err.code == 409
    with pytest.raises(BatePapoError):
        raise err
