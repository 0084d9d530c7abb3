"""
Governance Execution

Finalizes proposals once their voting window has closed. Execution only
flips the executed flag and notifies subscribers; any effect of a passed
proposal belongs to whoever handles the ProposalExecuted event.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from tokengov.errors import (
    AlreadyExecutedError,
    GovernanceError,
    ProposalRejectedError,
    QuorumNotReachedError,
    VotingStillActiveError,
)
from tokengov.events import EventBus, EventType
from tokengov.governance.proposals import Proposal, ProposalStore
from tokengov.governance.voting import VotingManager

logger = logging.getLogger(__name__)


@dataclass
class ExecutionRecord:
    """Outcome of a successful execution"""
    proposal_id: int
    executed_at: int
    for_votes: int
    against_votes: int
    required_quorum: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "executed_at": self.executed_at,
            "for_votes": self.for_votes,
            "against_votes": self.against_votes,
            "required_quorum": self.required_quorum,
        }


class ProposalExecutor:
    """
    Executes passed governance proposals

    Quorum is evaluated against the live total supply and the live quorum
    percentage at execution time.
    """

    def __init__(self, store: ProposalStore, voting: VotingManager, event_bus: EventBus):
        self.store = store
        self.voting = voting
        self.event_bus = event_bus
        self.execution_history: List[ExecutionRecord] = []

    def _validate(self, proposal: Proposal, now: int) -> int:
        """Raise the first failed precondition; return the required quorum"""
        proposal_id = proposal.proposal_id

        if now <= proposal.end_time:
            raise VotingStillActiveError(
                f"Voting on proposal {proposal_id} is open until {proposal.end_time}",
                {"proposal_id": proposal_id, "end_time": proposal.end_time, "now": now},
            )

        if proposal.executed:
            raise AlreadyExecutedError(
                f"Proposal {proposal_id} already executed",
                {"proposal_id": proposal_id, "executed_at": proposal.executed_at},
            )

        quorum = self.voting.required_quorum()

        # total_supply() may have re-entered and executed this proposal
        if proposal.executed:
            raise AlreadyExecutedError(
                f"Proposal {proposal_id} already executed",
                {"proposal_id": proposal_id, "executed_at": proposal.executed_at},
            )

        if proposal.total_votes < quorum:
            raise QuorumNotReachedError(
                f"Proposal {proposal_id} has {proposal.total_votes} votes, quorum is {quorum}",
                {"proposal_id": proposal_id, "total_votes": proposal.total_votes, "required_quorum": quorum},
            )

        if proposal.for_votes <= proposal.against_votes:
            raise ProposalRejectedError(
                f"Proposal {proposal_id} rejected: {proposal.for_votes} for, {proposal.against_votes} against",
                {
                    "proposal_id": proposal_id,
                    "for_votes": proposal.for_votes,
                    "against_votes": proposal.against_votes,
                },
            )

        return quorum

    def check_executable(self, proposal_id: int, now: int) -> Tuple[bool, str]:
        """Check if a proposal can be executed at now"""
        proposal = self.store.get(proposal_id)
        try:
            self._validate(proposal, now)
        except GovernanceError as e:
            return False, e.message
        return True, "Ready for execution"

    def execute(self, proposal_id: int, now: int) -> ExecutionRecord:
        """Execute a passed proposal"""
        proposal = self.store.get(proposal_id)

        try:
            quorum = self._validate(proposal, now)
        except GovernanceError as e:
            logger.warning(f"Proposal {proposal_id} not executed: {e.message}")
            raise

        # Committed before any notification so re-entrant calls see it
        proposal.executed = True
        proposal.executed_at = now

        record = ExecutionRecord(
            proposal_id=proposal_id,
            executed_at=now,
            for_votes=proposal.for_votes,
            against_votes=proposal.against_votes,
            required_quorum=quorum,
        )
        self.execution_history.append(record)

        logger.info(
            f"Proposal {proposal_id} executed",
            extra={"extra_data": record.to_dict()},
        )

        self.event_bus.emit(EventType.PROPOSAL_EXECUTED, {"proposal_id": proposal_id}, source="governance")
        return record

    def get_execution_history(
        self,
        proposal_id: Optional[int] = None,
        limit: int = 100,
    ) -> List[ExecutionRecord]:
        """Get execution history with optional filter"""
        results = self.execution_history

        if proposal_id is not None:
            results = [r for r in results if r.proposal_id == proposal_id]

        return results[-limit:]

    def get_stats(self) -> Dict[str, Any]:
        """Get execution statistics"""
        total = len(self.execution_history)
        return {
            "total_executions": total,
            "total_weight_for": sum(r.for_votes for r in self.execution_history),
            "total_weight_against": sum(r.against_votes for r in self.execution_history),
        }
