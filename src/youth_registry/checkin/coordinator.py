"""Check-in dialog flow.

Idle -> Searching -> {NoMatch | OneMatch | ManyMatches} -> Marking ->
{Marked | AlreadyMarked}, with Error reachable from Searching and Marking.
A repeat check-in (registered=False) is a success, never an error.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..activities.model import AttendanceOutcome
from ..activities.service import ActivityService
from ..core import constants as C
from ..core.enums import BatchPolicy, CheckInState, QueryKind
from ..core.exceptions import DomainError, ValidationError
from ..persons.resolver import PersonResolver, classify_query
from .batch import BatchMarker
from .handoff import Prefill, PrefillHandoff
from .state import Candidate, CheckInSession

logger = logging.getLogger(__name__)


def prefill_for(kind: QueryKind, value: str) -> Prefill:
    if kind == QueryKind.CEDULA:
        return {"cedula": value}
    return {"nombre": value}


class AttendanceCoordinator:
    def __init__(
        self,
        resolver: PersonResolver,
        activities: ActivityService,
        *,
        handoff: Optional[PrefillHandoff] = None,
        batch_policy: BatchPolicy = BatchPolicy.ABORT_ON_ERROR,
        activity_id: Optional[str] = None,
    ):
        self._resolver = resolver
        self._activities = activities
        self._handoff = handoff
        self._batch = BatchMarker(activities, policy=batch_policy)
        self._activity_id = activity_id
        self._session = CheckInSession()

    @property
    def session(self) -> CheckInSession:
        return self._session

    def snapshot(self) -> dict:
        return self._session.snapshot()

    # --- search -------------------------------------------------------------

    def submit(self, query: str) -> CheckInSession:
        s = self._session
        q = (query or "").strip()
        if not q or s.busy:
            return s

        s.reset_search()
        kind, value = classify_query(q)
        s.query = q
        s.query_kind = kind
        s.state = CheckInState.SEARCHING
        s.busy = True
        try:
            persons = self._resolver.resolve(q)
        except DomainError:
            logger.exception("Person search failed for %r", q)
            s.state = CheckInState.ERROR
            s.message = C.MSG_SEARCH_FAILED
            return s
        finally:
            s.busy = False

        if not persons:
            s.state = CheckInState.NO_MATCH
            s.message = C.MSG_NOT_FOUND
            s.redirect_prefill = prefill_for(kind, value)
        elif kind == QueryKind.CEDULA:
            s.state = CheckInState.ONE_MATCH
            s.candidates = [Candidate(persons[0])]
        else:
            s.state = CheckInState.MANY_MATCHES
            s.candidates = [Candidate(p) for p in persons]
        s.match_state = s.state if s.candidates else None
        return s

    def toggle(self, person_id: str) -> bool:
        """Flip selection of a listed candidate. Returns True when it ends up selected."""
        s = self._session
        if s.match_state != CheckInState.MANY_MATCHES or s.busy:
            raise ValidationError("No hay una lista de personas para seleccionar")
        cand = s.candidate(person_id)
        if cand is None:
            raise ValidationError("Persona no encontrada en los resultados")
        if cand.attended:
            return False
        if person_id in s.selected:
            s.selected.remove(person_id)
            return False
        s.selected.append(person_id)
        return True

    def select(self, person_ids) -> list[str]:
        for pid in person_ids:
            if pid not in self._session.selected:
                self.toggle(pid)
        return list(self._session.selected)

    # --- marking ------------------------------------------------------------

    def confirm(self, *, activity_id: Optional[str] = None) -> CheckInSession:
        """Mark the single person found by cedula."""
        s = self._session
        if s.match_state != CheckInState.ONE_MATCH or not s.candidates:
            raise ValidationError("No hay una persona para confirmar")
        if s.busy:
            return s

        cand = s.candidates[0]
        s.state = CheckInState.MARKING
        s.title = None
        s.message = None
        s.busy = True
        try:
            target = self._activities.resolve_target(activity_id or self._activity_id)
            if not target:
                s.state = CheckInState.ONE_MATCH
                s.message = C.MSG_NO_ACTIVITY_TODAY
                return s
            outcome = self._activities.mark(target, cand.person.person_id)
        except DomainError:
            logger.exception("Marking attendance failed for %s", cand.person.person_id)
            s.state = CheckInState.ERROR
            s.message = C.MSG_MARK_FAILED
            return s
        finally:
            s.busy = False

        self._apply_outcome(cand, outcome)
        return s

    def mark_selected(self, *, activity_id: Optional[str] = None) -> CheckInSession:
        """Mark every checked row of a name search, in selection order."""
        s = self._session
        if s.match_state != CheckInState.MANY_MATCHES:
            raise ValidationError("No hay una lista de personas para marcar")
        if not s.selected:
            raise ValidationError("Selecciona al menos una persona")
        if s.busy:
            return s

        s.state = CheckInState.MARKING
        s.title = None
        s.message = None
        s.busy = True
        try:
            result = self._batch.run(list(s.selected), activity_id=activity_id or self._activity_id, on_marked=self._flag_attended)
        except DomainError:
            logger.exception("Batch marking could not start")
            s.state = CheckInState.ERROR
            s.message = C.MSG_MARK_FAILED
            return s
        finally:
            s.busy = False

        s.last_batch = result
        if result.no_activity:
            s.state = CheckInState.MANY_MATCHES
            s.message = C.MSG_NO_ACTIVITY_TODAY
            return s

        if not result.ok:
            logger.warning("Batch marking at %s ended with failures", result.activity_id)
            s.selected = [pid for pid in s.selected if pid not in result.marked_ids]
            s.state = CheckInState.ERROR
            s.message = C.MSG_BATCH_FAILED
            return s

        s.selected = []
        if len(result.items) == 1:
            cand = s.candidate(result.items[0].person_id)
            outcome = result.items[0].outcome or AttendanceOutcome(registered=None)
            if cand is not None:
                self._apply_outcome(cand, outcome)
                return s

        if result.all_already_marked:
            s.state = CheckInState.ALREADY_MARKED
            s.title = C.TITLE_ALREADY_MARKED
            s.message = "Las personas seleccionadas ya estaban registradas para esta clase."
        else:
            s.state = CheckInState.MARKED
            s.title = C.TITLE_MARKED
            s.message = f"Asistencia registrada para {len(result.items)} personas."
        return s

    def _flag_attended(self, person_id: str, outcome: AttendanceOutcome) -> None:
        cand = self._session.candidate(person_id)
        if cand is not None:
            cand.attended = True
        self._session.last_outcome = outcome

    def _apply_outcome(self, cand: Candidate, outcome: AttendanceOutcome) -> None:
        s = self._session
        cand.attended = True
        s.last_outcome = outcome
        name = cand.person.display_name
        if outcome.already_marked:
            s.state = CheckInState.ALREADY_MARKED
            s.title = C.TITLE_ALREADY_MARKED
            s.message = outcome.message or f"La persona {name} ya estaba registrada para esta clase."
        else:
            s.state = CheckInState.MARKED
            s.title = C.TITLE_MARKED
            s.message = outcome.message or f"Asistencia registrada para {name}."

    # --- navigation ---------------------------------------------------------

    def redirect_to_registration(self) -> Prefill:
        """Hand the typed query over to the sign-up form."""
        s = self._session
        if s.state != CheckInState.NO_MATCH or not s.redirect_prefill:
            raise ValidationError("No hay datos para el registro")
        prefill = dict(s.redirect_prefill)
        if self._handoff is not None:
            self._handoff.publish(prefill)
        self.reset()
        return prefill

    def cancel_confirmation(self) -> None:
        self._session.reset_search()

    def reset(self) -> None:
        self._session = CheckInSession()
