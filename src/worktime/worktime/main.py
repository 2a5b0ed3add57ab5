from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_engine() -> Container:
    """Load settings and return wired services for the host application."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    storage = str(getattr(settings, "STORAGE", "mysql")).lower()
    if storage == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        db_config = getattr(settings, "DB_CONFIG")
        apply_schema(db_config)
        logger.debug("Schema ready (tables=%d)", len(list_tables(db_config)))

    logger.info("worktime engine ready settings=%s storage=%s", settings_module, storage)
    return build_container(settings)
