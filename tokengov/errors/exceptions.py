"""Governance exception hierarchy."""
from typing import Optional, Dict, Any


class GovernanceError(Exception):
    """Base exception for all governance errors."""
    code: str = "GOV_001"
    status_code: int = 500

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


# =============================================================================
# Families
# =============================================================================

class NotFoundError(GovernanceError):
    """Referenced record does not exist."""
    code = "NF_001"
    status_code = 404


class ValidationError(GovernanceError):
    """Input validation failed."""
    code = "VAL_001"
    status_code = 400


class UnauthorizedError(GovernanceError):
    """Caller is not allowed to perform this action."""
    code = "AUTHZ_001"
    status_code = 403

    def __init__(self, message: str, caller: str = None):
        super().__init__(message, {"caller": caller})
        self.caller = caller


class StateConflictError(GovernanceError):
    """Operation conflicts with the proposal's current state."""
    code = "STATE_001"
    status_code = 409


class StakeError(GovernanceError):
    """Caller lacks the balance the operation requires."""
    code = "STAKE_001"
    status_code = 402

    def __init__(self, message: str, account: str = None, balance: int = 0, required: Optional[int] = None):
        super().__init__(message, {"account": account, "balance": balance, "required": required})
        self.account = account
        self.balance = balance
        self.required = required


class ConfigurationError(GovernanceError):
    """Configuration error."""
    code = "CFG_001"
    status_code = 500


# =============================================================================
# Not found
# =============================================================================

class ProposalNotFoundError(NotFoundError):
    code = "NF_002"

    def __init__(self, proposal_id: Any):
        super().__init__(f"Proposal {proposal_id} not found", {"proposal_id": proposal_id})
        self.proposal_id = proposal_id


class NotVotedError(NotFoundError):
    code = "NF_003"

    def __init__(self, proposal_id: int, voter: str):
        super().__init__(
            f"{voter} has not voted on proposal {proposal_id}",
            {"proposal_id": proposal_id, "voter": voter},
        )


# =============================================================================
# Validation
# =============================================================================

class EmptyTitleError(ValidationError):
    code = "VAL_002"


class EmptyDescriptionError(ValidationError):
    code = "VAL_003"


class InvalidDurationError(ValidationError):
    code = "VAL_004"


class InvalidThresholdError(ValidationError):
    code = "VAL_005"


class InvalidPercentageError(ValidationError):
    code = "VAL_006"


# =============================================================================
# State conflicts
# =============================================================================

class VotingNotStartedError(StateConflictError):
    code = "STATE_002"


class VotingEndedError(StateConflictError):
    code = "STATE_003"


class AlreadyVotedError(StateConflictError):
    code = "STATE_004"


class VotingStillActiveError(StateConflictError):
    code = "STATE_005"


class AlreadyExecutedError(StateConflictError):
    code = "STATE_006"


class QuorumNotReachedError(StateConflictError):
    code = "STATE_007"


class ProposalRejectedError(StateConflictError):
    code = "STATE_008"


# =============================================================================
# Stake
# =============================================================================

class InsufficientBalanceError(StakeError):
    code = "STAKE_002"


class NoVotingPowerError(StakeError):
    code = "STAKE_003"
