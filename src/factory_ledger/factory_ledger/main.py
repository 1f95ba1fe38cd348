from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .ledger.controller import register as register_ledger
from .organization.controller import register as register_organization
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    if not getattr(settings, "OWNER_EMAIL", "") or not getattr(settings, "OWNER_PASSWORD", ""):
        logger.warning("OWNER_EMAIL/OWNER_PASSWORD not set; owner login is disabled")

    container = build_container(
        db_config=db_config,
        owner_email=getattr(settings, "OWNER_EMAIL", ""),
        owner_password=getattr(settings, "OWNER_PASSWORD", ""),
        blob_dir=getattr(settings, "BLOB_DIR", "var/blobs"),
        blob_base_url=getattr(settings, "BLOB_BASE_URL", "/media"),
        photo_max_size=int(getattr(settings, "PHOTO_MAX_SIZE", 1024)),
    )
    app.extensions["factory_ledger"] = container
    atexit.register(container.close)

    register_error_handlers(app)
    register_users(app, container)
    register_organization(app, container)
    register_ledger(app, container)
    register_reports(app, container)

    return app
