"""
tokengov

Balance-weighted proposal and vote ledger over an external token ledger.
"""

from tokengov.config import DAY, GovernanceSettings, load_settings
from tokengov.events import Event, EventBus, EventType
from tokengov.governance import GovernanceEngine, ProposalState
from tokengov.ledger import (
    AccessGate,
    BalanceOracle,
    InMemoryTokenLedger,
    OwnerAccessGate,
    SupplyMinter,
)

__version__ = "0.1.0"

__all__ = [
    "DAY",
    "GovernanceSettings",
    "load_settings",
    "Event",
    "EventBus",
    "EventType",
    "GovernanceEngine",
    "ProposalState",
    "AccessGate",
    "BalanceOracle",
    "InMemoryTokenLedger",
    "OwnerAccessGate",
    "SupplyMinter",
]
