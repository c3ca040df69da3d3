"""Application service for system settings.

Reads/writes company settings to a JSON file so they persist across
restarts without a database migration. Environment values from
:class:`moldops.config.Settings` act as defaults for the appearance keys.
"""

import json
import logging
from pathlib import Path
from typing import Any

from moldops.application.schemas.settings import SystemSettings, SystemSettingsUpdate, ThemeOption
from moldops.config import get_settings
from moldops.domain.entities import get_palette, theme_keys

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("data/settings.json")


def _read_overrides() -> dict[str, Any]:
    """Read the JSON overrides file, returning {} if missing or corrupt."""
    if not SETTINGS_FILE.exists():
        return {}
    try:
        return json.loads(SETTINGS_FILE.read_text("utf-8"))
    except (OSError, ValueError):
        logger.warning("Could not read %s — using defaults", SETTINGS_FILE)
        return {}


def _write_overrides(data: dict[str, Any]) -> None:
    SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_FILE.write_text(json.dumps(data, indent=2), encoding="utf-8")


def get_system_settings() -> SystemSettings:
    """Effective settings: model defaults, then .env appearance, then the JSON file."""
    env = get_settings()
    values: dict[str, Any] = {
        "default_theme": env.default_theme,
        "default_light_mode": env.default_light_mode,
    }
    overrides = _read_overrides()
    values.update({k: v for k, v in overrides.items() if k in SystemSettings.model_fields})
    return SystemSettings.model_validate(values)


def update_system_settings(update: SystemSettingsUpdate) -> SystemSettings:
    """Persist the fields present in ``update`` and return the new effective settings.

    Raises:
        ValueError: if ``default_theme`` names an unknown palette.
    """
    changes = update.model_dump(mode="json", exclude_unset=True)
    if "default_theme" in changes and changes["default_theme"] not in theme_keys():
        raise ValueError(f"Unknown theme '{changes['default_theme']}'")

    overrides = _read_overrides()
    overrides.update(changes)
    _write_overrides(overrides)

    # Settings caches the appearance keys read from the same file.
    get_settings.cache_clear()

    logger.info("System settings updated: %s", sorted(changes))
    return get_system_settings()


def list_themes() -> list[ThemeOption]:
    options = []
    for key in theme_keys():
        light = get_palette(key, light_mode=True)
        dark = get_palette(key, light_mode=False)
        options.append(ThemeOption(key=key, name=dark.name, light=light.to_dict(), dark=dark.to_dict()))
    return options
