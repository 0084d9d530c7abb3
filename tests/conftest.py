"""
tokengov Test Configuration

Shared fixtures for the governance test suites. The default ledger has a
total supply of 1,000,000 with the admin holding the remainder.
"""

import logging
import os
import sys
from typing import Callable, Dict, List

# Add project root to path FIRST
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from tokengov.events import Event, EventBus
from tokengov.governance import GovernanceEngine
from tokengov.ledger import InMemoryTokenLedger, OwnerAccessGate

ADMIN = "admin"
ALICE = "alice"   # proposer, exactly at threshold
BOB = "bob"
CAROL = "carol"
DAVE = "dave"
TOTAL_SUPPLY = 1_000_000


def make_ledger(balances: Dict[str, int], total_supply: int = TOTAL_SUPPLY) -> InMemoryTokenLedger:
    """Ledger with the given balances; the admin holds whatever is left of total_supply."""
    remainder = total_supply - sum(balances.values())
    allocation = dict(balances)
    if remainder > 0:
        allocation[ADMIN] = allocation.get(ADMIN, 0) + remainder
    return InMemoryTokenLedger(allocation)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def events(event_bus) -> List[Event]:
    """Every event published on the shared bus, in order."""
    received: List[Event] = []
    event_bus.add_handler(received.append, "*", name="recorder")
    return received


@pytest.fixture
def ledger():
    return make_ledger({ALICE: 1_000, BOB: 150_000})


@pytest.fixture
def gate():
    return OwnerAccessGate(ADMIN)


@pytest.fixture
def engine(ledger, gate, event_bus):
    return GovernanceEngine(ledger, gate, event_bus=event_bus)


@pytest.fixture
def build_engine(gate, event_bus) -> Callable[..., GovernanceEngine]:
    """Factory for engines over a custom ledger."""
    def _build(balances: Dict[str, int], total_supply: int = TOTAL_SUPPLY, **kwargs) -> GovernanceEngine:
        return GovernanceEngine(make_ledger(balances, total_supply), gate, event_bus=event_bus, **kwargs)

    return _build


@pytest.fixture
def proposal_id(engine) -> int:
    """An open proposal created by alice at t=0 with the default 7 day window."""
    return engine.create_proposal(ALICE, "Fund grants", "Allocate the grants budget", now=0)


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
