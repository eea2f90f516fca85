import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

APP_DATA_DIR = Path(__file__).resolve().parents[1] / "data"

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:3000")
DEFAULT_EXPORT_DIR = "~/Downloads"
DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_API_TIMEOUT_SECONDS = 20.0
DEFAULT_LOG_LEVEL = "INFO"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _resolve_cors_origins() -> list[str]:
    raw = _env("CORS_ALLOW_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def _resolve_timeout() -> float:
    raw = _env("PRODUCT_API_TIMEOUT_SECONDS")
    if raw:
        try:
            parsed = float(raw)
            if parsed > 0:
                return parsed
        except ValueError:
            pass
        logger.warning("Invalid PRODUCT_API_TIMEOUT_SECONDS value: %s", raw)
    return DEFAULT_API_TIMEOUT_SECONDS


def _resolve_log_level() -> str:
    raw = _env("LOG_LEVEL").upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    if raw:
        logger.warning("Invalid LOG_LEVEL value: %s", raw)
    return DEFAULT_LOG_LEVEL


def resolve_export_dir(raw_path: str | None) -> Path:
    configured = (raw_path or "").strip() or DEFAULT_EXPORT_DIR
    expanded = os.path.expandvars(os.path.expanduser(configured))
    export_dir = Path(expanded)
    if not export_dir.is_absolute():
        export_dir = (APP_DATA_DIR / export_dir).resolve()
    return export_dir


@dataclass(frozen=True)
class Settings:
    cors_allow_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    report_export_dir: Path = field(default_factory=lambda: resolve_export_dir(None))
    log_level: str = DEFAULT_LOG_LEVEL
    product_api_url: str = DEFAULT_API_URL
    product_api_timeout_seconds: float = DEFAULT_API_TIMEOUT_SECONDS


def load_settings() -> Settings:
    """Build settings from the environment, falling back to defaults on bad values."""
    return Settings(
        cors_allow_origins=_resolve_cors_origins(),
        report_export_dir=resolve_export_dir(_env("REPORT_EXPORT_DIR")),
        log_level=_resolve_log_level(),
        product_api_url=(_env("PRODUCT_API_URL") or DEFAULT_API_URL).rstrip("/"),
        product_api_timeout_seconds=_resolve_timeout(),
    )
