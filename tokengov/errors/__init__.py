"""
Error handling and exception classes.

Every governance failure is raised as a subclass of GovernanceError. The
family classes (NotFoundError, ValidationError, UnauthorizedError,
StateConflictError, StakeError) let callers handle a whole category at once:

    from tokengov.errors import StateConflictError

    try:
        engine.vote(voter, proposal_id, True, now)
    except StateConflictError as e:
        print(e.code, e.message)
"""

from tokengov.errors.exceptions import (
    GovernanceError, NotFoundError, ValidationError, UnauthorizedError,
    StateConflictError, StakeError, ConfigurationError,
    ProposalNotFoundError, NotVotedError,
    EmptyTitleError, EmptyDescriptionError, InvalidDurationError,
    InvalidThresholdError, InvalidPercentageError,
    VotingNotStartedError, VotingEndedError, AlreadyVotedError,
    VotingStillActiveError, AlreadyExecutedError, QuorumNotReachedError,
    ProposalRejectedError,
    InsufficientBalanceError, NoVotingPowerError,
)

__all__ = [
    "GovernanceError", "NotFoundError", "ValidationError", "UnauthorizedError",
    "StateConflictError", "StakeError", "ConfigurationError",
    "ProposalNotFoundError", "NotVotedError",
    "EmptyTitleError", "EmptyDescriptionError", "InvalidDurationError",
    "InvalidThresholdError", "InvalidPercentageError",
    "VotingNotStartedError", "VotingEndedError", "AlreadyVotedError",
    "VotingStillActiveError", "AlreadyExecutedError", "QuorumNotReachedError",
    "ProposalRejectedError",
    "InsufficientBalanceError", "NoVotingPowerError",
]
