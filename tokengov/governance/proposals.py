"""
Governance Proposals

Proposal records and the store that owns them.
Identifiers are dense and sequential from 0; records are never deleted.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from tokengov.errors import ProposalNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ProposalState(str, Enum):
    """Lifecycle state of a proposal, derived from time and tallies"""
    PENDING = "pending"       # Voting window not yet open
    ACTIVE = "active"         # Voting in progress
    SUCCEEDED = "succeeded"   # Closed, quorum met, majority for
    DEFEATED = "defeated"     # Closed, no quorum or no majority
    EXECUTED = "executed"     # Passed and executed


@dataclass
class VoteReceipt:
    """A voter's record on a single proposal"""
    has_voted: bool
    support: bool
    weight: int

    def to_dict(self) -> Dict[str, Any]:
        return {"has_voted": self.has_voted, "support": self.support, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoteReceipt":
        """Rebuild a receipt; only cast votes with positive weight are stored"""
        if not data.get("has_voted", True):
            raise ValidationError("Stored receipt must record a cast vote", {"receipt": data})
        if data["weight"] <= 0:
            raise ValidationError("Stored receipt weight must be positive", {"receipt": data})

        return cls(
            has_voted=True,
            support=bool(data["support"]),
            weight=data["weight"],
        )


@dataclass
class Proposal:
    """A governance proposal"""
    proposal_id: int
    proposer: str
    title: str
    description: str
    start_time: int
    end_time: int

    # Voting
    for_votes: int = 0
    against_votes: int = 0
    voters: Dict[str, VoteReceipt] = field(default_factory=dict)

    # Execution
    executed: bool = False
    executed_at: Optional[int] = None

    @property
    def total_votes(self) -> int:
        return self.for_votes + self.against_votes

    def is_voting_open(self, now: int) -> bool:
        """Check if now falls inside the inclusive voting window"""
        return self.start_time <= now <= self.end_time

    def has_voted(self, voter: str) -> bool:
        receipt = self.voters.get(voter)
        return receipt is not None and receipt.has_voted

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the record without the per-voter map"""
        return {
            "proposal_id": self.proposal_id,
            "proposer": self.proposer,
            "title": self.title,
            "description": self.description,
            "for_votes": self.for_votes,
            "against_votes": self.against_votes,
            "total_votes": self.total_votes,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "executed": self.executed,
            "executed_at": self.executed_at,
            "voter_count": len(self.voters),
        }

    def to_record(self) -> Dict[str, Any]:
        """Full record including voters, for host persistence"""
        data = self.to_dict()
        data["voters"] = {voter: r.to_dict() for voter, r in self.voters.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Proposal":
        """
        Create from a record produced by to_record()

        Raises:
            ValidationError: If the record is not one the store could have produced
        """
        proposal = cls(
            proposal_id=data["proposal_id"],
            proposer=data["proposer"],
            title=data["title"],
            description=data["description"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            for_votes=data.get("for_votes", 0),
            against_votes=data.get("against_votes", 0),
            voters={
                voter: VoteReceipt.from_dict(receipt)
                for voter, receipt in data.get("voters", {}).items()
            },
            executed=data.get("executed", False),
            executed_at=data.get("executed_at"),
        )
        proposal._check_consistency()
        return proposal

    def _check_consistency(self) -> None:
        details = {"proposal_id": self.proposal_id}

        if self.end_time <= self.start_time:
            raise ValidationError(
                f"Proposal {self.proposal_id} ends at {self.end_time}, before it starts",
                {**details, "start_time": self.start_time, "end_time": self.end_time},
            )

        if self.for_votes < 0 or self.against_votes < 0:
            raise ValidationError(f"Proposal {self.proposal_id} has a negative tally", details)

        weight_for = sum(r.weight for r in self.voters.values() if r.support)
        weight_against = sum(r.weight for r in self.voters.values() if not r.support)
        if (self.for_votes, self.against_votes) != (weight_for, weight_against):
            raise ValidationError(
                f"Proposal {self.proposal_id} tallies do not match its receipts",
                {
                    **details,
                    "for_votes": self.for_votes,
                    "against_votes": self.against_votes,
                    "receipt_for": weight_for,
                    "receipt_against": weight_against,
                },
            )


class ProposalStore:
    """
    Owns all proposal records

    Allocates sequential identifiers and retrieves records by id.
    Input validation is the caller's responsibility.
    """

    def __init__(self):
        self._proposals: List[Proposal] = []

    @property
    def count(self) -> int:
        """Number of proposals, which is also the next id to be allocated"""
        return len(self._proposals)

    def __len__(self) -> int:
        return len(self._proposals)

    def __contains__(self, proposal_id: object) -> bool:
        return (
            isinstance(proposal_id, int)
            and not isinstance(proposal_id, bool)
            and 0 <= proposal_id < len(self._proposals)
        )

    def allocate(
        self,
        proposer: str,
        title: str,
        description: str,
        start_time: int,
        end_time: int,
    ) -> int:
        """Store a new proposal and return its id"""
        proposal_id = len(self._proposals)
        self._proposals.append(Proposal(
            proposal_id=proposal_id,
            proposer=proposer,
            title=title,
            description=description,
            start_time=start_time,
            end_time=end_time,
        ))
        logger.debug(f"Allocated proposal {proposal_id} for {proposer}")
        return proposal_id

    def get(self, proposal_id: int) -> Proposal:
        """Get a proposal by id"""
        if proposal_id not in self:
            raise ProposalNotFoundError(proposal_id)
        return self._proposals[proposal_id]

    def list_proposals(
        self,
        proposer: Optional[str] = None,
        executed: Optional[bool] = None,
        limit: int = 100,
    ) -> List[Proposal]:
        """List proposals newest first, with optional filters"""
        proposals = list(reversed(self._proposals))

        if proposer is not None:
            proposals = [p for p in proposals if p.proposer == proposer]

        if executed is not None:
            proposals = [p for p in proposals if p.executed == executed]

        return proposals[:limit]

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics"""
        voters = set()
        executed = 0
        for proposal in self._proposals:
            voters.update(proposal.voters)
            if proposal.executed:
                executed += 1

        return {
            "total_proposals": len(self._proposals),
            "executed_proposals": executed,
            "unique_voters": len(voters),
            "total_votes_cast": sum(len(p.voters) for p in self._proposals),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of every record, for the host to persist"""
        return {"proposals": [p.to_record() for p in self._proposals]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProposalStore":
        """Rebuild a store from a snapshot produced by to_dict()"""
        store = cls()
        for index, record in enumerate(data.get("proposals", [])):
            proposal = Proposal.from_dict(record)
            if proposal.proposal_id != index:
                raise ValidationError(
                    f"Proposal ids must be dense: expected {index}, got {proposal.proposal_id}",
                    {"expected": index, "proposal_id": proposal.proposal_id},
                )
            store._proposals.append(proposal)

        logger.info(f"Loaded {len(store._proposals)} proposals")
        return store
