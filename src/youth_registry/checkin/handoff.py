"""Prefill handoff from the check-in dialog to the sign-up form.

When both flows run in one process they talk through ``InMemoryPrefillChannel``.
When they are decoupled (separate HTTP requests) the prefill is parked in the
user's session under ``prefill_persona`` and deleted as soon as it is read.
"""

from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Optional, Protocol

from ..core.constants import PREFILL_SESSION_KEY

logger = logging.getLogger(__name__)

Prefill = dict[str, str]


class PrefillHandoff(Protocol):
    def publish(self, prefill: Prefill) -> None:
        raise NotImplementedError

    def consume(self) -> Optional[Prefill]:
        """Return the pending prefill (if any) and forget it."""
        raise NotImplementedError


def _clean(raw) -> Optional[Prefill]:
    if not isinstance(raw, dict):
        return None
    return {str(k): str(v) for k, v in raw.items() if isinstance(v, (str, int)) and not isinstance(v, bool)}


class InMemoryPrefillChannel(PrefillHandoff):
    """Explicit message passing between two flows of the same process."""

    def __init__(self):
        self._listeners: list[Callable[[Prefill], None]] = []
        self._pending: Optional[Prefill] = None

    def subscribe(self, listener: Callable[[Prefill], None]) -> None:
        self._listeners.append(listener)

    def publish(self, prefill: Prefill) -> None:
        data = dict(prefill)
        if not self._listeners:
            self._pending = data
            return
        for listener in self._listeners:
            listener(dict(data))

    def consume(self) -> Optional[Prefill]:
        data, self._pending = self._pending, None
        return data


class SessionPrefillStore(PrefillHandoff):
    """Session-scoped fallback, e.g. ``SessionPrefillStore(flask.session)``."""

    def __init__(self, session: MutableMapping):
        self._session = session

    def publish(self, prefill: Prefill) -> None:
        self._session[PREFILL_SESSION_KEY] = dict(prefill)

    def consume(self) -> Optional[Prefill]:
        raw = self._session.pop(PREFILL_SESSION_KEY, None)
        if raw is None:
            return None
        data = _clean(raw)
        if data is None:
            logger.warning("Discarding malformed prefill in session: %r", type(raw).__name__)
        return data
