from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, ensure_bootstrap_super_admin, list_tables
from .database.connection import DBConfig
from .notifications.controller import register as register_notifications
from .roles.controller import register as register_roles

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        ensure_bootstrap_super_admin(
            db_config,
            email=getattr(settings, "BOOTSTRAP_SUPER_ADMIN_EMAIL", ""),
            full_name=getattr(settings, "BOOTSTRAP_SUPER_ADMIN_NAME", ""),
        )

    container = build_container(db_config=db_config)

    register_roles(app, container)
    register_notifications(app, container)

    @app.route("/api/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
