from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.controller import register as register_auth
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_HOURS
from .core.exceptions import StorageError
from .database.bootstrap import ensure_schema
from .employees.controller import register as register_employees
from .folhas.controller import register as register_folhas
from .health.controller import register as register_health
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def _load_settings(settings_module: Optional[str]) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings.__name__,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            try:
                ensure_schema(db_config)
            except StorageError:
                # Keep serving: health reports db=false until the database is reachable.
                logger.exception("schema bootstrap failed")

        container = build_container(
            db_config=db_config,
            admin_password=getattr(settings, "ADMIN_PASSWORD", None),
            admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", None),
            signing_secret=getattr(settings, "JWT_SECRET", None),
            token_hours=int(getattr(settings, "TOKEN_EXPIRE_HOURS", DEFAULT_TOKEN_HOURS)),
        )

    missing = container.auth_service.configuration_problems()
    if missing:
        logger.error("admin login disabled: %s not configured", ", ".join(missing))

    register_error_handlers(app)
    register_health(app, container)
    register_auth(app, container)
    register_employees(app, container)
    register_folhas(app, container)
    register_reports(app, container)

    return app
