"""
Governance Voting

Balance-weighted voting. Each account votes once per proposal with a
weight equal to its balance at the moment the vote is cast.
"""

import logging
from typing import Any, Dict

from tokengov.errors import (
    AlreadyVotedError,
    NoVotingPowerError,
    NotVotedError,
    VotingEndedError,
    VotingNotStartedError,
)
from tokengov.events import EventBus, EventType
from tokengov.governance.params import ParameterRegistry
from tokengov.governance.proposals import Proposal, ProposalStore, VoteReceipt
from tokengov.ledger import BalanceOracle

logger = logging.getLogger(__name__)


def required_quorum(total_supply: int, quorum_threshold: int) -> int:
    """Minimum for+against weight, floor of the quorum share of supply"""
    return total_supply * quorum_threshold // 100


class VotingManager:
    """
    Manages vote casting and tallies

    Handles vote submission, per-voter receipts, and pass determination.
    """

    def __init__(
        self,
        store: ProposalStore,
        params: ParameterRegistry,
        oracle: BalanceOracle,
        event_bus: EventBus,
    ):
        self.store = store
        self.params = params
        self.oracle = oracle
        self.event_bus = event_bus

    def cast_vote(self, voter: str, proposal_id: int, support: bool, now: int) -> VoteReceipt:
        """Cast a vote on a proposal"""
        proposal = self.store.get(proposal_id)

        if not proposal.is_voting_open(now):
            if now < proposal.start_time:
                raise VotingNotStartedError(
                    f"Voting on proposal {proposal_id} opens at {proposal.start_time}",
                    {"proposal_id": proposal_id, "start_time": proposal.start_time, "now": now},
                )
            raise VotingEndedError(
                f"Voting on proposal {proposal_id} closed at {proposal.end_time}",
                {"proposal_id": proposal_id, "end_time": proposal.end_time, "now": now},
            )

        self._require_not_voted(proposal, voter)

        weight = self.oracle.balance_of(voter)
        # The oracle call may have re-entered and recorded a vote for voter
        self._require_not_voted(proposal, voter)
        if weight <= 0:
            logger.warning(f"Voter {voter} has no voting power")
            raise NoVotingPowerError(
                f"{voter} has no voting power",
                account=voter, balance=weight,
            )

        if support:
            proposal.for_votes += weight
        else:
            proposal.against_votes += weight

        receipt = VoteReceipt(has_voted=True, support=support, weight=weight)
        proposal.voters[voter] = receipt

        logger.info(
            f"Vote cast: {voter} voted {'for' if support else 'against'} on {proposal_id}",
            extra={"extra_data": {"proposal_id": proposal_id, "weight": weight}},
        )

        self.event_bus.emit(
            EventType.VOTE_CAST,
            {"proposal_id": proposal_id, "voter": voter, "support": support, "weight": weight},
            source="governance",
        )
        return receipt

    @staticmethod
    def _require_not_voted(proposal: Proposal, voter: str) -> None:
        if proposal.has_voted(voter):
            logger.warning(f"Voter {voter} already voted on {proposal.proposal_id}")
            raise AlreadyVotedError(
                f"{voter} already voted on proposal {proposal.proposal_id}",
                {"proposal_id": proposal.proposal_id, "voter": voter},
            )

    def has_voted(self, proposal_id: int, voter: str) -> bool:
        """Check whether voter has voted on a proposal"""
        return self.store.get(proposal_id).has_voted(voter)

    def get_vote_choice(self, proposal_id: int, voter: str) -> bool:
        """Get the support flag a voter cast on a proposal"""
        proposal = self.store.get(proposal_id)
        if not proposal.has_voted(voter):
            raise NotVotedError(proposal_id, voter)
        return proposal.voters[voter].support

    def required_quorum(self) -> int:
        """Quorum against the live total supply and live percentage"""
        return required_quorum(self.oracle.total_supply(), self.params.quorum_threshold)

    def quorum_reached(self, proposal: Proposal) -> bool:
        return proposal.total_votes >= self.required_quorum()

    def proposal_passed(self, proposal_id: int) -> bool:
        """Check quorum and strict majority; does not change state"""
        proposal = self.store.get(proposal_id)
        return self.quorum_reached(proposal) and proposal.for_votes > proposal.against_votes

    def get_vote_summary(self, proposal_id: int) -> Dict[str, Any]:
        """Get vote summary for a proposal"""
        proposal = self.store.get(proposal_id)
        quorum = self.required_quorum()

        return {
            "proposal_id": proposal_id,
            "votes_for": proposal.for_votes,
            "votes_against": proposal.against_votes,
            "total_votes": proposal.total_votes,
            "unique_voters": len(proposal.voters),
            "required_quorum": quorum,
            "quorum_reached": proposal.total_votes >= quorum,
            "passed": proposal.total_votes >= quorum and proposal.for_votes > proposal.against_votes,
        }
