from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .activities.http_activity_repository import HttpActivityRepository
from .activities.service import ActivityService
from .api.transport import ApiClient, ApiConfig
from .checkin.coordinator import AttendanceCoordinator
from .checkin.handoff import PrefillHandoff
from .core.constants import DIRECTORY_LIMIT, PERSON_SEARCH_LIMIT
from .core.enums import BatchPolicy
from .persons.directory import PersonDirectory
from .persons.http_person_repository import HttpPersonRepository
from .persons.registration import RegistrationService
from .persons.resolver import PersonResolver


@dataclass(frozen=True)
class Container:
    client: ApiClient

    persons_repo: HttpPersonRepository
    activities_repo: HttpActivityRepository

    activity_service: ActivityService
    person_resolver: PersonResolver
    person_directory: PersonDirectory
    registration_service: RegistrationService
    batch_policy: BatchPolicy

    def new_coordinator(self, *, handoff: Optional[PrefillHandoff] = None, activity_id: Optional[str] = None) -> AttendanceCoordinator:
        """One coordinator per open check-in dialog."""
        return AttendanceCoordinator(
            self.person_resolver,
            self.activity_service,
            handoff=handoff,
            batch_policy=self.batch_policy,
            activity_id=activity_id,
        )


def build_container(*, api_config: dict, session: Optional[requests.Session] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=api_config.get("timeout"),
    )
    client = ApiClient(config, session=session)

    persons_repo = HttpPersonRepository(client)
    activities_repo = HttpActivityRepository(client)

    activity_service = ActivityService(activities_repo)
    person_resolver = PersonResolver(persons_repo, limit=int(api_config.get("person_search_limit", PERSON_SEARCH_LIMIT)))
    person_directory = PersonDirectory(persons_repo, limit=int(api_config.get("directory_limit", DIRECTORY_LIMIT)))
    registration_service = RegistrationService(persons_repo, activity_service)

    return Container(
        client=client,
        persons_repo=persons_repo,
        activities_repo=activities_repo,
        activity_service=activity_service,
        person_resolver=person_resolver,
        person_directory=person_directory,
        registration_service=registration_service,
        batch_policy=BatchPolicy(api_config.get("batch_policy", BatchPolicy.ABORT_ON_ERROR.value)),
    )
