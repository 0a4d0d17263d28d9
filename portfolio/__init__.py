import logging
import sys
from typing import Optional

from flask import Flask

from .config import Settings, SiteConfigProvider

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("portfolio")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    return logger


def create_app(settings: Optional[Settings] = None):
    if settings is None:
        from dotenv import load_dotenv; load_dotenv()
        settings = Settings.from_env()

    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["SETTINGS"] = settings
    app.json.sort_keys = False

    from .queries import queries_from_settings
    app.extensions["portfolio.queries"] = queries_from_settings(settings)
    app.extensions["portfolio.site_config"] = SiteConfigProvider(settings.site_config_path)

    from .errors import register_error_handlers
    register_error_handlers(app)

    from .api import api_bp
    app.register_blueprint(api_bp)

    from .auth import auth_bp
    app.register_blueprint(auth_bp)

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "mode": settings.articles_mode}

    return app
