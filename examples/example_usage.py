"""Example: drive the check-in flow through the service layer (no Flask).

Controllers are a thin layer; the reconciliation logic lives in the services.
"""

import importlib
import sys

from youth_registry.checkin.handoff import InMemoryPrefillChannel
from youth_registry.config import get_settings_module
from youth_registry.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config={"base_url": settings.API_BASE_URL, "timeout": settings.API_TIMEOUT})

    channel = InMemoryPrefillChannel()
    channel.subscribe(lambda prefill: print("prefill for sign-up form:", prefill))
    coordinator = container.new_coordinator(handoff=channel)

    query = " ".join(sys.argv[1:]) or "12345678"
    coordinator.submit(query)
    print(coordinator.snapshot())


if __name__ == "__main__":
    main()
