import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

BASE_SITE_CONFIG: Dict[str, Any] = {
    "siteName": "Portfolio",
    "colorProfile": "default",
    "skillsDisplay": {"design": "grid"},
    "i18n": {"defaultLocale": "en", "locales": ["en"]},
    "animation": {"enabled": True},
    "features": {"articles": True, "contact": True},
}


def getenv_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return v if (v is not None and str(v).strip() != "") else default


class Settings(BaseModel):
    content_dir: Path = Path("content/articles")
    public_dir: Path = Path("public")
    articles_mode: str = "live"  # live | static
    static_base_url: str = ""
    site_config_path: Path = Path("content/site.json")
    admin_username: str = "admin"
    admin_password: str = "admin"
    secret_key: str = "dev-secret"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            content_dir=Path(getenv_str("CONTENT_DIR", "content/articles")),
            public_dir=Path(getenv_str("PUBLIC_DIR", "public")),
            articles_mode=getenv_str("ARTICLES_MODE", "live").strip().lower(),
            static_base_url=getenv_str("STATIC_BASE_URL", ""),
            site_config_path=Path(getenv_str("SITE_CONFIG_PATH", "content/site.json")),
            admin_username=getenv_str("ADMIN_USERNAME", "admin"),
            admin_password=getenv_str("ADMIN_PASSWORD", "admin"),
            secret_key=getenv_str("SECRET_KEY", "dev-secret"),
            log_level=getenv_str("LOG_LEVEL", "INFO"),
        )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class SiteConfigProvider:
    """Site configuration (theme, i18n, feature flags) read from a JSON file.

    The file is read on first access and kept until refresh() is called.
    A missing file means built-in defaults; a malformed one is logged and
    ignored.
    """

    def __init__(self, path: Path, defaults: Optional[Dict[str, Any]] = None):
        self.path = Path(path)
        self.defaults = defaults if defaults is not None else BASE_SITE_CONFIG
        self._config: Optional[Dict[str, Any]] = None

    def _read_overrides(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring site config %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring site config %s: top level is not an object", self.path)
            return {}
        return data

    def refresh(self) -> Dict[str, Any]:
        self._config = deep_merge(self.defaults, self._read_overrides())
        return self._config

    def get(self) -> Dict[str, Any]:
        if self._config is None:
            return self.refresh()
        return self._config
