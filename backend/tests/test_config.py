import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app import config


def test_defaults_when_environment_is_empty(monkeypatch):
    for name in (
        "CORS_ALLOW_ORIGINS",
        "REPORT_EXPORT_DIR",
        "LOG_LEVEL",
        "PRODUCT_API_URL",
        "PRODUCT_API_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = config.load_settings()
    assert settings.cors_allow_origins == ["http://localhost:5173", "http://localhost:3000"]
    assert settings.log_level == "INFO"
    assert settings.product_api_url == "http://localhost:5000/api"
    assert settings.product_api_timeout_seconds == 20.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PRODUCT_API_URL", "http://api.internal/api/")
    monkeypatch.setenv("PRODUCT_API_TIMEOUT_SECONDS", "5")

    settings = config.load_settings()
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"
    assert settings.product_api_url == "http://api.internal/api"
    assert settings.product_api_timeout_seconds == 5.0


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    monkeypatch.setenv("PRODUCT_API_TIMEOUT_SECONDS", "-3")

    settings = config.load_settings()
    assert settings.log_level == "INFO"
    assert settings.product_api_timeout_seconds == 20.0


def test_relative_export_dir_resolves_under_data_dir(tmp_path, monkeypatch):
    assert config.resolve_export_dir("reports") == (config.APP_DATA_DIR / "reports").resolve()
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config.resolve_export_dir("~/exports") == tmp_path / "exports"
