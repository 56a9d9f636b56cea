from __future__ import annotations

import pytest

from youth_registry.core.enums import BatchItemStatus, BatchPolicy, CheckInState
from youth_registry.core.exceptions import ValidationError
from youth_registry.checkin.batch import BatchMarker
from youth_registry.checkin.coordinator import AttendanceCoordinator
from youth_registry.persons.resolver import PersonResolver


def _coordinator(persons_repo, activity_service, policy=BatchPolicy.ABORT_ON_ERROR):
    return AttendanceCoordinator(PersonResolver(persons_repo), activity_service, batch_policy=policy)


def test_batch_marks_in_selection_order(persons_repo, activities_repo, activity_service):
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    coordinator.select(["p-3", "p-1", "p-2"])

    s = coordinator.mark_selected()

    assert activities_repo.date_calls == ["2026-03-14"]
    assert activities_repo.mark_calls == [("act-1", "p-3"), ("act-1", "p-1"), ("act-1", "p-2")]
    assert s.state == CheckInState.MARKED
    assert s.selected == []
    assert all(c.attended for c in s.candidates)


def test_second_call_failing_abandons_the_rest(persons_repo, activities_repo, activity_service):
    activities_repo.fail_for.add("p-2")
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    coordinator.select(["p-1", "p-2", "p-3"])

    s = coordinator.mark_selected()

    assert s.state == CheckInState.ERROR
    assert s.message == "No se pudo registrar la asistencia de todas las personas seleccionadas."
    assert s.candidate("p-1").attended
    assert not s.candidate("p-2").attended
    assert not s.candidate("p-3").attended
    assert activities_repo.mark_calls == [("act-1", "p-1"), ("act-1", "p-2")]
    assert [i.status for i in s.last_batch.items] == [
        BatchItemStatus.MARKED,
        BatchItemStatus.FAILED,
        BatchItemStatus.SKIPPED,
    ]
    assert s.selected == ["p-2", "p-3"]


def test_continue_on_error_attempts_everyone(persons_repo, activities_repo, activity_service):
    activities_repo.fail_for.add("p-2")
    coordinator = _coordinator(persons_repo, activity_service, BatchPolicy.CONTINUE_ON_ERROR)
    coordinator.submit("Ana")
    coordinator.select(["p-1", "p-2", "p-3"])

    s = coordinator.mark_selected()

    assert s.state == CheckInState.ERROR
    assert len(activities_repo.mark_calls) == 3
    assert s.candidate("p-1").attended and s.candidate("p-3").attended
    assert not s.candidate("p-2").attended
    assert s.last_batch.marked_ids == ["p-1", "p-3"]


def test_all_already_marked_batch(persons_repo, activities_repo, activity_service):
    activities_repo.mark_attendance("act-1", "p-1")
    activities_repo.mark_attendance("act-1", "p-2")
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    coordinator.select(["p-1", "p-2"])

    s = coordinator.mark_selected()

    assert s.state == CheckInState.ALREADY_MARKED
    assert s.title == "Asistencia ya registrada"


def test_single_row_batch_reports_like_confirm(persons_repo, activity_service):
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    coordinator.select(["p-2"])

    s = coordinator.mark_selected()

    assert s.message == "Asistencia registrada para Ana María Gómez."


def test_activity_resolved_once_and_none_means_nothing_marked(persons_repo, activities_repo, activity_service):
    activities_repo.by_date.clear()
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    coordinator.select(["p-1", "p-2"])

    s = coordinator.mark_selected()

    assert activities_repo.date_calls == ["2026-03-14"]
    assert activities_repo.mark_calls == []
    assert s.message == "No hay actividades programadas para hoy."
    assert s.selected == ["p-1", "p-2"]


def test_empty_selection_is_rejected(persons_repo, activity_service):
    coordinator = _coordinator(persons_repo, activity_service)
    coordinator.submit("Ana")
    with pytest.raises(ValidationError):
        coordinator.mark_selected()


def test_marker_dedupes_ids(activity_service, activities_repo):
    result = BatchMarker(activity_service).run(["p-1", "p-1", "", "p-2"], activity_id="act-9")

    assert activities_repo.mark_calls == [("act-9", "p-1"), ("act-9", "p-2")]
    assert result.ok
