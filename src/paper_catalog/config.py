"""Site configuration persistence: load and save."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from paper_catalog.models import (
    CONFIG_APP_NAME,
    DEFAULT_FEED_LIMIT,
    ESCAPER_NAMES,
    MAX_FEED_LIMIT,
    SiteConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field             Rule                        Handler
#   ────────────────  ──────────────────────────  ─────────────────────
#   feed_limit        1 ≤ x ≤ MAX_FEED_LIMIT      _coerce_feed_limit
#   listing_escaper   in ESCAPER_NAMES            _dict_to_config
#   base_url          non-empty string            _dict_to_config
#   scalar fields     type-checked via _safe_get  _dict_to_config
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/paper-catalog/config.json
    - macOS: ~/Library/Application Support/paper-catalog/config.json
    - Windows: %APPDATA%/paper-catalog/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: SiteConfig) -> dict[str, Any]:
    """Serialize SiteConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "base_url": config.base_url,
        "feed_limit": _coerce_feed_limit(config.feed_limit),
        "site_title": config.site_title,
        "feed_title": config.feed_title,
        "feed_description": config.feed_description,
        "language": config.language,
        "listing_escaper": config.listing_escaper,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_feed_limit(value: Any) -> int:
    """Validate and clamp the configured feed entry cap."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_FEED_LIMIT
    return max(1, min(value, MAX_FEED_LIMIT))


def _dict_to_config(data: dict[str, Any]) -> SiteConfig:
    """Deserialize a dictionary into a SiteConfig, falling back per field."""
    defaults = SiteConfig()

    base_url = _safe_get(data, "base_url", defaults.base_url, str).strip()
    listing_escaper = _safe_get(data, "listing_escaper", defaults.listing_escaper, str)
    if listing_escaper not in ESCAPER_NAMES:
        logger.warning("Unknown listing_escaper %r in config, using default", listing_escaper)
        listing_escaper = defaults.listing_escaper

    return SiteConfig(
        base_url=base_url or defaults.base_url,
        feed_limit=_coerce_feed_limit(data.get("feed_limit", defaults.feed_limit)),
        site_title=_safe_get(data, "site_title", defaults.site_title, str),
        feed_title=_safe_get(data, "feed_title", defaults.feed_title, str),
        feed_description=_safe_get(data, "feed_description", defaults.feed_description, str),
        language=_safe_get(data, "language", defaults.language, str),
        listing_escaper=listing_escaper,
        version=_safe_get(data, "version", defaults.version, int),
    )


def load_config(config_path: Path | None = None) -> SiteConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return SiteConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise TypeError("top-level JSON value is not an object")
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return SiteConfig()
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return SiteConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return SiteConfig()


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to ``path`` via a temp file and ``os.replace()``.

    Readers never observe a partially written file. The parent directory is
    created if needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{path.name}-")
    closed = False
    try:
        os.write(fd, text.encode("utf-8"))
        os.close(fd)
        closed = True
        os.replace(tmp_path, path)
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def save_config(config: SiteConfig, config_path: Path | None = None) -> bool:
    """Save configuration to disk atomically.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = config_path or get_config_path()
    try:
        data = _config_to_dict(config)
        atomic_write_text(config_path, json.dumps(data, indent=2, ensure_ascii=False))
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_FILENAME",
    "atomic_write_text",
    "get_config_path",
    "load_config",
    "save_config",
]
