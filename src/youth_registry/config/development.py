import os

from .base import API_BASE_URL, API_TIMEOUT, BATCH_POLICY, DIRECTORY_LIMIT, PERSON_SEARCH_LIMIT  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
