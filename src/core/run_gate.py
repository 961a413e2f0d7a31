# src/core/run_gate.py — v1
"""Run Gate: may this run use the remote cache at all?

Checks, in order, that the runner's server hosts the cache service and that
the triggering event carries a branch or tag ref. Pure predicate; callers
log the rejection reason.
"""

from __future__ import annotations

from urllib.parse import urlparse

from actcache.config.settings import Settings
from actcache.constants import (
    SUPPORTED_SERVER_HOSTS,
    SUPPORTED_SERVER_SUFFIXES,
    UNSUPPORTED_ENVIRONMENT_MESSAGE,
)
from actcache.core.models import GateDecision


class RunGate:
    """Precondition checks shared by the restore and save phases."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def is_supported_environment(self) -> bool:
        host = (urlparse(self._settings.github_server_url or "https://github.com")
                .hostname or "").lower()
        return host in SUPPORTED_SERVER_HOSTS or host.endswith(SUPPORTED_SERVER_SUFFIXES)

    def is_valid_event(self) -> bool:
        """Events without a ref (e.g. schedule on some hosts) are rejected."""
        return bool(self._settings.github_ref)

    def check(self) -> GateDecision:
        if not self.is_supported_environment():
            return GateDecision(
                allowed=False,
                reason=UNSUPPORTED_ENVIRONMENT_MESSAGE,
                environment_supported=False,
            )
        if not self.is_valid_event():
            return GateDecision(
                allowed=False,
                reason=(
                    f"Event Validation Error: The event type "
                    f"{self._settings.github_event_name} is not supported because "
                    "it's not tied to a branch or tag ref."
                ),
            )
        return GateDecision(allowed=True)

    def allowed(self) -> bool:
        return self.check().allowed
