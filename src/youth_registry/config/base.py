import os

from ..core.constants import DEFAULT_API_BASE_URL, DIRECTORY_LIMIT, PERSON_SEARCH_LIMIT


def _optional_float(name: str):
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


API_BASE_URL = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL)

# Unset by default: a stalled backend call blocks until it resolves.
API_TIMEOUT = _optional_float("API_TIMEOUT")

PERSON_SEARCH_LIMIT = int(os.getenv("PERSON_SEARCH_LIMIT", str(PERSON_SEARCH_LIMIT)))
DIRECTORY_LIMIT = int(os.getenv("DIRECTORY_LIMIT", str(DIRECTORY_LIMIT)))

# "abort" stops a batch at the first failed mark; "continue" tries every row
BATCH_POLICY = os.getenv("BATCH_POLICY", "abort")
