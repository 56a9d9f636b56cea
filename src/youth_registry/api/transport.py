from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.exceptions import HttpError, TransportError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@dataclass
class ApiConfig:
    base_url: str
    timeout: Optional[float] = None


class ApiClient:
    """Thin JSON-over-HTTP client for the backend.

    Note: no retries, and no timeout unless one is configured.
    """

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._base_url = config.base_url.rstrip("/")
        self._timeout = config.timeout
        self._session = session or requests.Session()

    def request(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None and v != ""}

        try:
            res = self._session.request(
                method,
                url,
                params=query or None,
                json=json,
                headers=JSON_HEADERS,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(str(e)) from e

        data = self._decode(res)

        if not res.ok:
            message = None
            if isinstance(data, dict) and isinstance(data.get("message"), str):
                message = data["message"]
            logger.info("%s %s -> %s", method, path, res.status_code)
            raise HttpError(message or res.reason or f"HTTP {res.status_code}", status=res.status_code, payload=data)

        return data

    @staticmethod
    def _decode(res: requests.Response) -> Any:
        text = res.text
        if not text:
            return None
        try:
            return res.json()
        except ValueError:
            if res.ok:
                raise HttpError("Respuesta no válida del servidor", status=res.status_code, payload=None)
            # Keep non-JSON error bodies (proxies, HTML pages) as raw text.
            return text
