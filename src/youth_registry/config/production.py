import os

from .base import API_BASE_URL, API_TIMEOUT, BATCH_POLICY, DIRECTORY_LIMIT, PERSON_SEARCH_LIMIT  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
