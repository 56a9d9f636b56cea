from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..activities.model import AttendanceOutcome
from ..activities.service import ActivityService
from ..core.enums import BatchItemStatus, BatchPolicy
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchItemResult:
    person_id: str
    status: BatchItemStatus
    outcome: Optional[AttendanceOutcome] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class BatchResult:
    activity_id: Optional[str]
    items: tuple[BatchItemResult, ...] = ()
    no_activity: bool = False

    @property
    def ok(self) -> bool:
        return not self.no_activity and all(
            i.status in (BatchItemStatus.MARKED, BatchItemStatus.ALREADY_MARKED) for i in self.items
        )

    @property
    def marked_ids(self) -> list[str]:
        return [i.person_id for i in self.items if i.status in (BatchItemStatus.MARKED, BatchItemStatus.ALREADY_MARKED)]

    @property
    def all_already_marked(self) -> bool:
        return bool(self.items) and all(i.status == BatchItemStatus.ALREADY_MARKED for i in self.items)


class BatchMarker:
    """Marks several people against one activity, one call at a time.

    ABORT_ON_ERROR stops at the first failing call and reports the rest as
    SKIPPED. CONTINUE_ON_ERROR tries every id and aggregates the results.
    """

    def __init__(self, activities: ActivityService, *, policy: BatchPolicy = BatchPolicy.ABORT_ON_ERROR):
        self._activities = activities
        self._policy = BatchPolicy(policy)

    @property
    def policy(self) -> BatchPolicy:
        return self._policy

    def run(
        self,
        person_ids: Iterable[str],
        *,
        activity_id: Optional[str] = None,
        on_marked: Optional[Callable[[str, AttendanceOutcome], None]] = None,
    ) -> BatchResult:
        ids = list(dict.fromkeys(pid for pid in person_ids if pid))
        if not ids:
            raise ValidationError("Selecciona al menos una persona")

        target = self._activities.resolve_target(activity_id)
        if not target:
            return BatchResult(activity_id=None, no_activity=True)

        items: list[BatchItemResult] = []
        for index, person_id in enumerate(ids):
            try:
                outcome = self._activities.mark(target, person_id)
            except DomainError as e:
                logger.warning("Batch mark failed for %s at %s: %s", person_id, target, e)
                items.append(BatchItemResult(person_id=person_id, status=BatchItemStatus.FAILED, error=str(e)))
                if self._policy == BatchPolicy.ABORT_ON_ERROR:
                    items.extend(
                        BatchItemResult(person_id=rest, status=BatchItemStatus.SKIPPED) for rest in ids[index + 1 :]
                    )
                    break
                continue

            status = BatchItemStatus.ALREADY_MARKED if outcome.already_marked else BatchItemStatus.MARKED
            items.append(BatchItemResult(person_id=person_id, status=status, outcome=outcome))
            if on_marked:
                on_marked(person_id, outcome)

        return BatchResult(activity_id=target, items=tuple(items))
