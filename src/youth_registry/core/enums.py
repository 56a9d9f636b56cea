from __future__ import annotations

from enum import Enum


class QueryKind(str, Enum):
    """How a free-text check-in query is matched against the registry."""

    CEDULA = "cedula"
    NAME = "nombre"


class CheckInState(str, Enum):
    """States of the check-in dialog."""

    IDLE = "IDLE"
    SEARCHING = "SEARCHING"
    NO_MATCH = "NO_MATCH"
    ONE_MATCH = "ONE_MATCH"
    MANY_MATCHES = "MANY_MATCHES"
    MARKING = "MARKING"
    MARKED = "MARKED"
    ALREADY_MARKED = "ALREADY_MARKED"
    ERROR = "ERROR"


class BatchPolicy(str, Enum):
    """What a batch does after one of its mark calls fails."""

    ABORT_ON_ERROR = "abort"
    CONTINUE_ON_ERROR = "continue"


class BatchItemStatus(str, Enum):
    MARKED = "MARKED"
    ALREADY_MARKED = "ALREADY_MARKED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
