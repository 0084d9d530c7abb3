"""
Governance Engine

Entry point for the proposal lifecycle: creation, voting, tally queries,
execution, parameter changes and the admin-gated mint pass-through.

Every operation runs to completion synchronously and checks all of its
preconditions before it mutates anything, so a failed call leaves the
store, tallies and parameters untouched.
"""

import logging
from typing import Any, Dict, List, Optional

from tokengov.config.schema import GovernanceSettings
from tokengov.errors import (
    EmptyDescriptionError,
    EmptyTitleError,
    InsufficientBalanceError,
    UnauthorizedError,
    ValidationError,
)
from tokengov.events import EventBus, EventType
from tokengov.governance.execution import ExecutionRecord, ProposalExecutor
from tokengov.governance.params import GovernanceParameters, ParameterRegistry
from tokengov.governance.proposals import Proposal, ProposalState, ProposalStore
from tokengov.governance.voting import VotingManager
from tokengov.ledger import AccessGate, BalanceOracle, SupplyMinter

logger = logging.getLogger(__name__)


class GovernanceEngine:
    """
    Balance-weighted governance over an external token ledger

    Holds no state of its own beyond references to the proposal store,
    the parameter registry and the external collaborators.
    """

    def __init__(
        self,
        oracle: BalanceOracle,
        access_gate: AccessGate,
        event_bus: Optional[EventBus] = None,
        params: Optional[GovernanceParameters] = None,
        store: Optional[ProposalStore] = None,
        minter: Optional[SupplyMinter] = None,
    ):
        self.oracle = oracle
        self.access_gate = access_gate
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.store = store if store is not None else ProposalStore()
        self.registry = ParameterRegistry(access_gate, self.event_bus, params)
        self.minter = minter if minter is not None else _as_minter(oracle)

        self.voting = VotingManager(self.store, self.registry, oracle, self.event_bus)
        self.executor = ProposalExecutor(self.store, self.voting, self.event_bus)

    @classmethod
    def from_settings(
        cls,
        settings: GovernanceSettings,
        oracle: BalanceOracle,
        access_gate: AccessGate,
        event_bus: Optional[EventBus] = None,
        **kwargs: Any,
    ) -> "GovernanceEngine":
        params = GovernanceParameters.from_settings(settings)
        return cls(oracle, access_gate, event_bus=event_bus, params=params, **kwargs)

    # =========================================================================
    # PROPOSALS
    # =========================================================================

    def create_proposal(self, caller: str, title: str, description: str, now: int) -> int:
        """Create a new proposal whose voting window opens at now"""
        threshold = self.registry.proposal_threshold
        balance = self.oracle.balance_of(caller)
        if balance < threshold:
            logger.warning(f"{caller} below proposal threshold: {balance} < {threshold}")
            raise InsufficientBalanceError(
                f"{caller} needs {threshold} to create a proposal, has {balance}",
                account=caller, balance=balance, required=threshold,
            )

        if not title:
            raise EmptyTitleError("Proposal title must not be empty")
        if not description:
            raise EmptyDescriptionError("Proposal description must not be empty")

        start_time = now
        end_time = now + self.registry.voting_duration

        proposal_id = self.store.allocate(caller, title, description, start_time, end_time)
        logger.info(f"Created proposal {proposal_id}: {title}")

        self.event_bus.emit(
            EventType.PROPOSAL_CREATED,
            {
                "proposal_id": proposal_id,
                "proposer": caller,
                "title": title,
                "start_time": start_time,
                "end_time": end_time,
            },
            source="governance",
        )
        return proposal_id

    def vote(self, caller: str, proposal_id: int, support: bool, now: int) -> None:
        """Cast caller's balance-weighted vote"""
        self.voting.cast_vote(caller, proposal_id, support, now)

    def proposal_passed(self, proposal_id: int) -> bool:
        """True if quorum is met and for strictly exceeds against"""
        return self.voting.proposal_passed(proposal_id)

    def execute_proposal(self, proposal_id: int, now: int) -> ExecutionRecord:
        """Mark a passed, closed proposal as executed, exactly once"""
        return self.executor.execute(proposal_id, now)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_proposal(self, proposal_id: int) -> Dict[str, Any]:
        """Snapshot of a proposal without its per-voter records"""
        return self.store.get(proposal_id).to_dict()

    def has_voted(self, proposal_id: int, voter: str) -> bool:
        return self.voting.has_voted(proposal_id, voter)

    def get_vote_choice(self, proposal_id: int, voter: str) -> bool:
        return self.voting.get_vote_choice(proposal_id, voter)

    def get_vote_summary(self, proposal_id: int) -> Dict[str, Any]:
        return self.voting.get_vote_summary(proposal_id)

    def proposal_state(self, proposal_id: int, now: int) -> ProposalState:
        """Lifecycle state at now under the current quorum rule"""
        proposal = self.store.get(proposal_id)

        if proposal.executed:
            return ProposalState.EXECUTED
        if now < proposal.start_time:
            return ProposalState.PENDING
        if now <= proposal.end_time:
            return ProposalState.ACTIVE
        if self.voting.proposal_passed(proposal_id):
            return ProposalState.SUCCEEDED
        return ProposalState.DEFEATED

    def list_proposals(
        self,
        proposer: Optional[str] = None,
        executed: Optional[bool] = None,
        limit: int = 100,
    ) -> List[Proposal]:
        return self.store.list_proposals(proposer=proposer, executed=executed, limit=limit)

    def get_governance_params(self) -> Dict[str, int]:
        return {
            "voting_duration": self.registry.voting_duration,
            "proposal_threshold": self.registry.proposal_threshold,
            "quorum_threshold": self.registry.quorum_threshold,
            "proposal_count": self.store.count,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get governance statistics"""
        return {
            **self.store.get_stats(),
            **self.executor.get_stats(),
            "params": self.get_governance_params(),
        }

    # =========================================================================
    # ADMINISTRATION
    # =========================================================================

    def update_voting_duration(self, caller: str, value: int) -> None:
        self.registry.update_voting_duration(caller, value)

    def update_proposal_threshold(self, caller: str, value: int) -> None:
        self.registry.update_proposal_threshold(caller, value)

    def update_quorum_threshold(self, caller: str, value: int) -> None:
        self.registry.update_quorum_threshold(caller, value)

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Forward an admin's mint request to the token ledger"""
        if not self.access_gate.is_admin(caller):
            logger.warning(f"Unauthorized mint attempt by {caller}")
            raise UnauthorizedError(f"{caller} is not allowed to mint", caller=caller)
        if self.minter is None:
            raise ValidationError("Token ledger does not support minting")
        if amount <= 0:
            raise ValidationError("Mint amount must be positive", {"amount": amount})

        self.minter.mint(to, amount)
        logger.info(f"Minted {amount} to {to}")


def _as_minter(oracle: BalanceOracle) -> Optional[SupplyMinter]:
    if isinstance(oracle, SupplyMinter):
        return oracle
    return None
