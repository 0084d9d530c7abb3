"""
Ledger Collaborators

Interfaces the governance engine consumes from the token ledger and the
access-control layer, plus in-memory reference implementations used by the
demo and the test suite.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from tokengov.errors import StakeError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)


class BalanceOracle(ABC):
    """Read-only view of token balances."""

    @abstractmethod
    def balance_of(self, account: str) -> int:
        """Current balance of account."""

    @abstractmethod
    def total_supply(self) -> int:
        """Current total supply."""


class SupplyMinter(ABC):
    """Issuance capability of the token ledger."""

    @abstractmethod
    def mint(self, to: str, amount: int) -> None:
        """Create amount new tokens for to."""


class AccessGate(ABC):
    """Administrator check for privileged operations."""

    @abstractmethod
    def is_admin(self, caller: str) -> bool:
        """True if caller may change parameters and mint."""


class InMemoryTokenLedger(BalanceOracle, SupplyMinter):
    """
    Dict-backed fungible token ledger

    Balances are non-negative integers; total supply is the sum of all
    balances and changes only through mint and burn.
    """

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        balances = dict(balances or {})
        for account, amount in balances.items():
            if amount < 0:
                raise ValidationError(
                    f"Opening balance of {account} must not be negative",
                    {"account": account, "amount": amount},
                )

        self._balances: Dict[str, int] = balances
        self._total_supply = sum(balances.values())

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def mint(self, to: str, amount: int) -> None:
        if amount <= 0:
            raise ValidationError("Mint amount must be positive", {"amount": amount})
        self._balances[to] = self._balances.get(to, 0) + amount
        self._total_supply += amount
        logger.debug(f"Minted {amount} to {to}")

    def burn(self, account: str, amount: int) -> None:
        if amount <= 0:
            raise ValidationError("Burn amount must be positive", {"amount": amount})
        balance = self.balance_of(account)
        if balance < amount:
            raise StakeError(
                f"Cannot burn {amount} from {account}",
                account=account, balance=balance, required=amount,
            )
        self._balances[account] = balance - amount
        self._total_supply -= amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if amount <= 0:
            raise ValidationError("Transfer amount must be positive", {"amount": amount})
        balance = self.balance_of(sender)
        if balance < amount:
            raise StakeError(
                f"{sender} cannot transfer {amount}",
                account=sender, balance=balance, required=amount,
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount


class OwnerAccessGate(AccessGate):
    """Single-owner access gate."""

    def __init__(self, owner: str):
        self.owner = owner

    def is_admin(self, caller: str) -> bool:
        return caller == self.owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        if not self.is_admin(caller):
            raise UnauthorizedError("Only the owner can transfer ownership", caller=caller)
        if not new_owner:
            raise ValidationError("New owner must be a non-empty identity")
        logger.info(f"Ownership transferred from {self.owner} to {new_owner}")
        self.owner = new_owner
