from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..activities.model import AttendanceOutcome
from ..core.enums import CheckInState, QueryKind
from ..persons.model import Person
from .batch import BatchResult


@dataclass
class Candidate:
    """A search hit as shown in the dialog.

    `attended` is a view-only flag for the current dialog; the backend keeps
    the real attendance and nothing here is persisted.
    """

    person: Person
    attended: bool = False

    def to_dict(self) -> dict:
        return {**self.person.to_dict(), "attended": self.attended}


@dataclass
class CheckInSession:
    """State of one open check-in dialog."""

    state: CheckInState = CheckInState.IDLE
    query: str = ""
    query_kind: Optional[QueryKind] = None
    match_state: Optional[CheckInState] = None
    candidates: list[Candidate] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)
    busy: bool = False
    title: Optional[str] = None
    message: Optional[str] = None
    redirect_prefill: Optional[dict[str, str]] = None
    last_outcome: Optional[AttendanceOutcome] = None
    last_batch: Optional[BatchResult] = None

    def reset_search(self) -> None:
        self.state = CheckInState.IDLE
        self.query = ""
        self.query_kind = None
        self.match_state = None
        self.candidates = []
        self.selected = []
        self.title = None
        self.message = None
        self.redirect_prefill = None
        self.last_outcome = None
        self.last_batch = None

    def candidate(self, person_id: str) -> Optional[Candidate]:
        for c in self.candidates:
            if c.person.person_id == person_id:
                return c
        return None

    def snapshot(self) -> dict:
        batch = None
        if self.last_batch is not None:
            batch = {
                "actividadId": self.last_batch.activity_id,
                "ok": self.last_batch.ok,
                "items": [{"personaId": i.person_id, "status": i.status.value} for i in self.last_batch.items],
            }
        return {
            "state": self.state.value,
            "query": self.query,
            "queryKind": self.query_kind.value if self.query_kind else None,
            "candidates": [c.to_dict() for c in self.candidates],
            "selected": list(self.selected),
            "busy": self.busy,
            "title": self.title,
            "message": self.message,
            "redirect": dict(self.redirect_prefill) if self.redirect_prefill else None,
            "registered": self.last_outcome.registered if self.last_outcome else None,
            "batch": batch,
        }
