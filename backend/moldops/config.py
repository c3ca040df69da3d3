import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_SETTINGS_FILE = Path("data/settings.json")
_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_THEME_KEYS = frozenset({
    "default_theme",
    "default_light_mode",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "MoldOps ERP API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Gateway selection: "supabase" (hosted) or "local" (SQLAlchemy)
    gateway_backend: str = "local"
    gateway_timeout: float = 30.0

    # Supabase (hosted gateway): endpoint and public API key
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Local gateway storage
    database_url: str = "sqlite:///./moldops.db"
    seed_demo_data: bool = True
    seed_admin_email: str = "admin@moldops.local"
    seed_admin_password: str = "admin123"

    # Table view defaults
    default_page_size: int = 10

    # Appearance
    default_theme: str = "neon-blue"
    default_light_mode: bool = False

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine, SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore, outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_gateway: str = "INFO"          # GatewayCallLogger traces
    log_level_controller: str = "INFO"       # List-entity controllers

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Merge runtime appearance overrides from data/settings.json."""
        if _SETTINGS_FILE.exists():
            try:
                overrides = json.loads(_SETTINGS_FILE.read_text("utf-8"))
                for key in _THEME_KEYS:
                    if key in overrides:
                        object.__setattr__(self, key, overrides[key])
            except Exception as exc:
                _config_logger.warning("Could not load settings overrides: %s", exc)

    @property
    def uses_supabase(self) -> bool:
        return self.gateway_backend.strip().lower() == "supabase"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
