from __future__ import annotations

import importlib
import logging
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask

from .activities.controller import register as register_activities
from .checkin.controller import register as register_checkin
from .config import get_settings_module
from .container import build_container
from .persons.controller import register as register_persons


def create_app(*, settings_module: Optional[str] = None, http_session: Optional[requests.Session] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    api_config = {
        "base_url": getattr(settings, "API_BASE_URL"),
        "timeout": getattr(settings, "API_TIMEOUT", None),
        "person_search_limit": getattr(settings, "PERSON_SEARCH_LIMIT"),
        "directory_limit": getattr(settings, "DIRECTORY_LIMIT"),
        "batch_policy": getattr(settings, "BATCH_POLICY", "abort"),
    }
    app.logger.info("settings=%s backend=%s", settings_module, api_config["base_url"])

    container = build_container(api_config=api_config, session=http_session)
    app.extensions["youth_registry"] = container

    register_persons(app, container)
    register_activities(app, container)
    register_checkin(app, container)

    return app
