"""
Governance Parameters

Mutable governance parameters, changed only by an administrator.
Changes apply immediately to future proposal creation and to quorum
evaluation of every proposal.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from tokengov.config.schema import (
    DEFAULT_PROPOSAL_THRESHOLD,
    DEFAULT_QUORUM_THRESHOLD,
    DEFAULT_VOTING_DURATION,
    MAX_VOTING_DURATION,
    MIN_VOTING_DURATION,
    GovernanceSettings,
)
from tokengov.errors import (
    InvalidDurationError,
    InvalidPercentageError,
    InvalidThresholdError,
    UnauthorizedError,
)
from tokengov.events import EventBus, EventType
from tokengov.ledger import AccessGate

logger = logging.getLogger(__name__)


@dataclass
class GovernanceParameters:
    """Current governance parameters"""
    voting_duration: int = DEFAULT_VOTING_DURATION  # seconds
    proposal_threshold: int = DEFAULT_PROPOSAL_THRESHOLD
    quorum_threshold: int = DEFAULT_QUORUM_THRESHOLD  # percent of total supply

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_settings(cls, settings: GovernanceSettings) -> "GovernanceParameters":
        return cls(
            voting_duration=settings.voting_duration,
            proposal_threshold=settings.proposal_threshold,
            quorum_threshold=settings.quorum_threshold,
        )


def validate_voting_duration(value: int) -> None:
    if not MIN_VOTING_DURATION <= value <= MAX_VOTING_DURATION:
        raise InvalidDurationError(
            f"Voting duration must be between {MIN_VOTING_DURATION} and {MAX_VOTING_DURATION} seconds",
            {"value": value},
        )


def validate_proposal_threshold(value: int) -> None:
    if value <= 0:
        raise InvalidThresholdError("Proposal threshold must be positive", {"value": value})


def validate_quorum_threshold(value: int) -> None:
    if not 1 <= value <= 100:
        raise InvalidPercentageError("Quorum threshold must be between 1 and 100", {"value": value})


class ParameterRegistry:
    """
    Holds the governance parameters behind the access gate

    Every update checks authorization first, then the value, then commits
    and emits a change notification.
    """

    def __init__(
        self,
        access_gate: AccessGate,
        event_bus: EventBus,
        params: Optional[GovernanceParameters] = None,
    ):
        self.access_gate = access_gate
        self.event_bus = event_bus
        self._params = params or GovernanceParameters()

        validate_voting_duration(self._params.voting_duration)
        validate_proposal_threshold(self._params.proposal_threshold)
        validate_quorum_threshold(self._params.quorum_threshold)

    @property
    def voting_duration(self) -> int:
        return self._params.voting_duration

    @property
    def proposal_threshold(self) -> int:
        return self._params.proposal_threshold

    @property
    def quorum_threshold(self) -> int:
        return self._params.quorum_threshold

    def snapshot(self) -> GovernanceParameters:
        """Copy of the current parameters"""
        return GovernanceParameters(**self._params.to_dict())

    def _require_admin(self, caller: str, action: str) -> None:
        if not self.access_gate.is_admin(caller):
            logger.warning(f"Unauthorized {action} attempt by {caller}")
            raise UnauthorizedError(f"{caller} is not allowed to {action}", caller=caller)

    def update_voting_duration(self, caller: str, value: int) -> None:
        """Set the voting duration used by future proposals"""
        self._require_admin(caller, "update the voting duration")
        validate_voting_duration(value)

        old = self._params.voting_duration
        self._params.voting_duration = value
        logger.info(f"Voting duration changed: {old} -> {value}")

        self.event_bus.emit(EventType.VOTING_DURATION_UPDATED, {"value": value}, source="governance")

    def update_proposal_threshold(self, caller: str, value: int) -> None:
        """Set the minimum balance required to create a proposal"""
        self._require_admin(caller, "update the proposal threshold")
        validate_proposal_threshold(value)

        old = self._params.proposal_threshold
        self._params.proposal_threshold = value
        logger.info(f"Proposal threshold changed: {old} -> {value}")

        self.event_bus.emit(EventType.PROPOSAL_THRESHOLD_UPDATED, {"value": value}, source="governance")

    def update_quorum_threshold(self, caller: str, value: int) -> None:
        """Set the quorum percentage used for every quorum evaluation"""
        self._require_admin(caller, "update the quorum threshold")
        validate_quorum_threshold(value)

        old = self._params.quorum_threshold
        self._params.quorum_threshold = value
        logger.info(f"Quorum threshold changed: {old}% -> {value}%")

        self.event_bus.emit(EventType.QUORUM_THRESHOLD_UPDATED, {"value": value}, source="governance")
