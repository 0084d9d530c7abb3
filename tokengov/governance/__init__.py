"""
Token Governance

Balance-weighted proposals, voting and execution.
Voting weight is the voter's token balance at the moment of casting.
"""

from .proposals import (
    Proposal,
    ProposalState,
    ProposalStore,
    VoteReceipt,
)
from .params import (
    GovernanceParameters,
    ParameterRegistry,
)
from .voting import (
    VotingManager,
    required_quorum,
)
from .execution import (
    ExecutionRecord,
    ProposalExecutor,
)
from .engine import GovernanceEngine

__all__ = [
    # Proposals
    "Proposal",
    "ProposalState",
    "ProposalStore",
    "VoteReceipt",
    # Parameters
    "GovernanceParameters",
    "ParameterRegistry",
    # Voting
    "VotingManager",
    "required_quorum",
    # Execution
    "ExecutionRecord",
    "ProposalExecutor",
    # Engine
    "GovernanceEngine",
]
