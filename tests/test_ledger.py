"""
Tests for tokengov/ledger.py

Tests cover:
- In-memory token ledger supply accounting
- Owner access gate
"""

import pytest

from tokengov.errors import StakeError, UnauthorizedError, ValidationError
from tokengov.ledger import (
    AccessGate,
    BalanceOracle,
    InMemoryTokenLedger,
    OwnerAccessGate,
    SupplyMinter,
)


class TestInMemoryTokenLedger:
    """Test balances and total supply."""

    def test_initial_balances(self):
        ledger = InMemoryTokenLedger({"alice": 10, "bob": 5})
        assert ledger.balance_of("alice") == 10
        assert ledger.balance_of("carol") == 0
        assert ledger.total_supply() == 15

    def test_zero_opening_balance(self):
        ledger = InMemoryTokenLedger({"alice": 10, "bob": 0})
        assert ledger.balance_of("bob") == 0
        assert ledger.total_supply() == 10

    def test_negative_opening_balance(self):
        with pytest.raises(ValidationError):
            InMemoryTokenLedger({"alice": -1})

    def test_opening_balances_are_copied(self):
        balances = {"alice": 10}
        ledger = InMemoryTokenLedger(balances)
        ledger.mint("alice", 5)
        assert balances == {"alice": 10}

    def test_implements_interfaces(self):
        ledger = InMemoryTokenLedger()
        assert isinstance(ledger, BalanceOracle)
        assert isinstance(ledger, SupplyMinter)
        assert ledger.total_supply() == 0

    def test_mint_and_burn(self):
        ledger = InMemoryTokenLedger({"alice": 10})
        ledger.mint("bob", 7)
        ledger.burn("alice", 4)
        assert ledger.balance_of("bob") == 7
        assert ledger.balance_of("alice") == 6
        assert ledger.total_supply() == 13

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amounts(self, amount):
        ledger = InMemoryTokenLedger({"alice": 10})
        with pytest.raises(ValidationError):
            ledger.mint("alice", amount)
        with pytest.raises(ValidationError):
            ledger.burn("alice", amount)
        with pytest.raises(ValidationError):
            ledger.transfer("alice", "bob", amount)
        assert ledger.total_supply() == 10

    def test_burn_more_than_balance(self):
        ledger = InMemoryTokenLedger({"alice": 10})
        with pytest.raises(StakeError) as excinfo:
            ledger.burn("alice", 11)
        assert excinfo.value.balance == 10
        assert excinfo.value.required == 11
        assert ledger.total_supply() == 10

    def test_transfer_keeps_supply(self):
        ledger = InMemoryTokenLedger({"alice": 10})
        ledger.transfer("alice", "bob", 4)
        assert ledger.balance_of("alice") == 6
        assert ledger.balance_of("bob") == 4
        assert ledger.total_supply() == 10

    def test_transfer_insufficient(self):
        ledger = InMemoryTokenLedger({"alice": 10})
        with pytest.raises(StakeError):
            ledger.transfer("alice", "bob", 20)
        assert ledger.balance_of("bob") == 0

    def test_transfer_after_vote_does_not_change_weight(self, engine, ledger, proposal_id):
        engine.vote("bob", proposal_id, True, now=1)
        ledger.transfer("bob", "carol", 150_000)
        engine.vote("carol", proposal_id, True, now=2)
        assert engine.get_proposal(proposal_id)["for_votes"] == 300_000


class TestOwnerAccessGate:
    """Test single-owner administration."""

    def test_is_admin(self):
        gate = OwnerAccessGate("admin")
        assert isinstance(gate, AccessGate)
        assert gate.is_admin("admin") is True
        assert gate.is_admin("alice") is False

    def test_transfer_ownership(self):
        gate = OwnerAccessGate("admin")
        gate.transfer_ownership("admin", "alice")
        assert gate.is_admin("alice") is True
        assert gate.is_admin("admin") is False

    def test_transfer_requires_owner(self):
        gate = OwnerAccessGate("admin")
        with pytest.raises(UnauthorizedError):
            gate.transfer_ownership("alice", "alice")
        assert gate.owner == "admin"

    def test_transfer_to_empty_identity(self):
        gate = OwnerAccessGate("admin")
        with pytest.raises(ValidationError):
            gate.transfer_ownership("admin", "")

    def test_new_owner_controls_parameters(self, engine, gate):
        gate.transfer_ownership("admin", "alice")
        engine.update_quorum_threshold("alice", 20)
        with pytest.raises(UnauthorizedError):
            engine.update_quorum_threshold("admin", 30)
        assert engine.get_governance_params()["quorum_threshold"] == 20
