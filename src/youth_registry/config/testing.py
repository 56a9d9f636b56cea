import os

from .base import API_TIMEOUT, BATCH_POLICY, DIRECTORY_LIMIT, PERSON_SEARCH_LIMIT  # noqa: F401

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://backend.test")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
