"""Backend response shapes.

The backend wraps some responses as ``{status, data, ...}`` and returns others
bare. ``classify`` turns a decoded body into one of two tagged shapes, and the
helpers below extract what each call site needs from either of them.

Unrecognised shapes are never an error here: they normalise to an empty page
or an unknown outcome, so "no data" and "unexpected body" look the same to
callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from ..activities.model import AttendanceOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Wrapped:
    data: Any
    meta: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Bare:
    value: Any


Envelope = Union[Wrapped, Bare]


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list
    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    limit: int = 0

    @classmethod
    def empty(cls) -> "Page":
        return cls(items=[], current_page=1, total_pages=1, total_items=0, limit=0)

    @classmethod
    def of(cls, items: list) -> "Page":
        return cls(items=list(items), current_page=1, total_pages=1, total_items=len(items), limit=len(items))


def classify(raw: Any) -> Envelope:
    if isinstance(raw, dict) and "data" in raw:
        return Wrapped(data=raw["data"], meta={k: v for k, v in raw.items() if k != "data"})
    return Bare(value=raw)


def unwrap(raw: Any) -> Any:
    """Payload of a single-object response (e.g. a created record)."""
    env = classify(raw)
    if isinstance(env, Wrapped) and env.data:
        return env.data
    return raw


def unwrap_list(raw: Any) -> list:
    env = classify(raw)
    if isinstance(env, Wrapped) and isinstance(env.data, list):
        return list(env.data)
    if isinstance(env, Bare) and isinstance(env.value, list):
        return list(env.value)
    logger.debug("Unrecognised list response shape: %r", type(raw).__name__)
    return []


def _int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _page_from(container: dict, items: list) -> Page:
    return Page(
        items=list(items),
        current_page=_int(container.get("currentPage"), 1),
        total_pages=_int(container.get("totalPages"), 1),
        total_items=_int(container.get("totalItems"), len(items)),
        limit=_int(container.get("limit"), len(items)),
    )


def unwrap_page(raw: Any) -> Page:
    """Paginated listing: wrapped array, paginated object under ``data``, or bare array."""
    env = classify(raw)
    if isinstance(env, Wrapped):
        if isinstance(env.data, list):
            return _page_from(raw, env.data)
        if isinstance(env.data, dict) and isinstance(env.data.get("data"), list):
            return _page_from(env.data, env.data["data"])
    elif isinstance(env.value, list):
        return Page.of(env.value)

    logger.debug("Unrecognised page response shape: %r", type(raw).__name__)
    return Page.empty()


def _outcome_fields(obj: Any) -> Optional[AttendanceOutcome]:
    if not isinstance(obj, dict):
        return None
    registered = obj.get("registered")
    message = obj.get("message")
    if isinstance(registered, bool) or isinstance(message, str):
        return AttendanceOutcome(
            registered=registered if isinstance(registered, bool) else None,
            message=message if isinstance(message, str) else None,
        )
    return None


def parse_attendance_outcome(raw: Any) -> AttendanceOutcome:
    """Read ``{registered, message}`` from the top level or from under ``data``."""
    outcome = _outcome_fields(raw)
    if outcome is None and isinstance(raw, dict):
        outcome = _outcome_fields(raw.get("data"))
    if outcome is None:
        logger.debug("Attendance response without registered/message; treating as unknown")
        return AttendanceOutcome(registered=None, message=None)
    return outcome
