"""Application factory and app-wide configuration."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from compound_backend.app.api.routes import api_bp
from compound_backend.config import Config
from compound_backend.core.formatting import CURRENCIES

ENV_PREFIX = "COMPOUND"


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Build the Flask app instance.

    Config is layered: Config defaults, then COMPOUND_* environment
    variables, then explicit overrides (tests pass these).
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env(ENV_PREFIX)
    if overrides:
        app.config.update(overrides)

    known = [c.code for c in CURRENCIES]
    if app.config["DEFAULT_CURRENCY"] not in known:
        raise ValueError(f"DEFAULT_CURRENCY must be one of {known}, got {app.config['DEFAULT_CURRENCY']!r}")

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once handlers exist; keep the level in sync anyway
    logging.getLogger("compound_backend").setLevel(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("%s ready, CORS origins: %s", app.config["SERVICE_NAME"], app.config["CORS_ORIGINS"])
    return app
