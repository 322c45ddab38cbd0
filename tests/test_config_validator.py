import os

import pytest
from utilities.validators.config_validator import (
    AppConfig,
    DatabaseConfig,
    ListenerConfig,
    MonitoringConfig
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test away from any .env file and TREESTORE_ variables"""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("TREESTORE_"):
            monkeypatch.delenv(name)
    yield


def test_app_config_defaults():
    """Test default values of AppConfig"""
    config = AppConfig()
    assert config.APP_NAME == "treestore"
    assert config.ENV == "development"
    assert config.DEBUG is False
    assert config.DATABASE.BASE_URL == "http://localhost:5000"
    assert config.DATABASE.API_PREFIX == "/api"
    assert config.DATABASE.ID_FIELD == "_id"
    assert config.LISTENER.POLL_INTERVAL == 5.0
    assert config.MONITORING.LOG_LEVEL == "INFO"


def test_app_config_env_validation():
    """Test ENV validator"""
    config = AppConfig(ENV="production")
    assert config.ENV == "production"

    with pytest.raises(ValueError, match="ENV must be one of: development, testing, production"):
        AppConfig(ENV="invalid")


def test_database_config_normalizes_urls():
    config = DatabaseConfig(BASE_URL="https://store.example.com/", API_PREFIX="/v1/api/")
    assert config.BASE_URL == "https://store.example.com"
    assert config.API_PREFIX == "/v1/api"


@pytest.mark.parametrize("overrides, message", [
    ({"BASE_URL": "ftp://store"}, "BASE_URL must start with"),
    ({"API_PREFIX": "api"}, 'API_PREFIX must start with "/"'),
    ({"REQUEST_TIMEOUT": 0}, "REQUEST_TIMEOUT must be positive"),
    ({"POOL_SIZE": 0}, "POOL_SIZE must be at least 1"),
])
def test_database_config_validation(overrides, message):
    with pytest.raises(ValueError, match=message):
        DatabaseConfig(**overrides)


def test_listener_config_validation():
    assert ListenerConfig(POLL_INTERVAL=0.5).POLL_INTERVAL == 0.5
    with pytest.raises(ValueError, match="POLL_INTERVAL must be positive"):
        ListenerConfig(POLL_INTERVAL=0)
    with pytest.raises(ValueError, match='NOTIFIER_TYPE must be "polling"'):
        ListenerConfig(NOTIFIER_TYPE="websocket")


def test_monitoring_config_level():
    assert MonitoringConfig(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValueError):
        MonitoringConfig(LOG_LEVEL="chatty")


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("TREESTORE_BASE_URL", "https://remote.example.com")
    monkeypatch.setenv("TREESTORE_POLL_INTERVAL", "1.5")

    config = AppConfig()
    assert config.DATABASE.BASE_URL == "https://remote.example.com"
    assert config.LISTENER.POLL_INTERVAL == 1.5


def test_custom_values():
    """Test setting custom values"""
    config = AppConfig(
        ENV="testing",
        DATABASE={"BASE_URL": "http://10.0.0.5:8080", "ID_FIELD": "id"},
        LISTENER={"POLL_INTERVAL": 2}
    )

    assert config.ENV == "testing"
    assert config.DATABASE.ID_FIELD == "id"
    assert config.LISTENER.POLL_INTERVAL == 2


def test_nested_config_validation():
    """Test validation in nested configs"""
    with pytest.raises(ValueError):
        AppConfig(DATABASE={"POOL_SIZE": 0})

    with pytest.raises(ValueError):
        AppConfig(LISTENER={"POLL_INTERVAL": -1})


def test_get_config_reads_dotenv(tmp_path):
    from utilities.config import get_config

    (tmp_path / ".env").write_text("TREESTORE_ENV=testing\nTREESTORE_POLL_INTERVAL=0.75\n")
    get_config.cache_clear()
    try:
        config = get_config()
        assert config.ENV == "testing"
        assert config.LISTENER.POLL_INTERVAL == 0.75
        assert get_config() is config
    finally:
        get_config.cache_clear()
        os.environ.pop("TREESTORE_ENV", None)
        os.environ.pop("TREESTORE_POLL_INTERVAL", None)
