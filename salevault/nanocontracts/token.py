# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Fungible token collaborator.

The vault never moves token balances itself. It talks to the token through `TokenCollaborator`, a two-method
interface bound to the vault's own account. `FungibleToken` is the in-memory ledger used by the runner; it can be
told to refuse transfers touching an account so callers can exercise the failure path.
"""

from __future__ import annotations

import logging
from typing import Protocol

from salevault.nanocontracts.types import TokenUid

logger = logging.getLogger(__name__)


class TokenCollaborator(Protocol):
    def transfer(self, to: bytes, amount: int) -> bool: ...

    def balance_of(self, account: bytes) -> int: ...


class TokenState:
    __slots__ = ('balances', 'total_supply', 'frozen')

    def __init__(self, balances: dict[bytes, int], total_supply: int, frozen: frozenset[bytes]) -> None:
        self.balances = balances
        self.total_supply = total_supply
        self.frozen = frozen


class FungibleToken:
    """In-memory token ledger."""

    def __init__(self, token_uid: TokenUid, symbol: str = '') -> None:
        self.token_uid = token_uid
        self.symbol = symbol
        self.total_supply = 0
        self._balances: dict[bytes, int] = {}
        self._frozen: set[bytes] = set()

    def mint(self, to: bytes, amount: int) -> None:
        if amount <= 0:
            raise ValueError('mint amount must be positive')
        self._balances[to] = self._balances.get(to, 0) + amount
        self.total_supply += amount

    def balance_of(self, account: bytes) -> int:
        return self._balances.get(account, 0)

    def freeze(self, account: bytes) -> None:
        """Make every transfer from or to `account` fail."""
        self._frozen.add(account)

    def unfreeze(self, account: bytes) -> None:
        self._frozen.discard(account)

    def transfer_from_account(self, sender: bytes, to: bytes, amount: int) -> bool:
        """Move `amount` from `sender` to `to`. Return False instead of raising when the transfer can't happen."""
        if amount < 0:
            return False
        if sender in self._frozen or to in self._frozen:
            logger.debug('token %s: transfer refused, frozen account involved', self.token_uid.hex())
            return False
        balance = self._balances.get(sender, 0)
        if balance < amount:
            logger.debug('token %s: transfer refused, balance %d < %d', self.token_uid.hex(), balance, amount)
            return False
        if amount == 0:
            return True
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount
        return True

    def bind(self, sender: bytes) -> 'BoundToken':
        """Return the collaborator interface as seen by `sender`."""
        return BoundToken(self, sender)

    def snapshot(self) -> TokenState:
        return TokenState(dict(self._balances), self.total_supply, frozenset(self._frozen))

    def restore(self, state: TokenState) -> None:
        self._balances = dict(state.balances)
        self.total_supply = state.total_supply
        self._frozen = set(state.frozen)


class BoundToken:
    """`TokenCollaborator` whose transfers are sent from a fixed account."""

    __slots__ = ('_token', '_sender')

    def __init__(self, token: FungibleToken, sender: bytes) -> None:
        self._token = token
        self._sender = sender

    @property
    def token_uid(self) -> TokenUid:
        return self._token.token_uid

    def transfer(self, to: bytes, amount: int) -> bool:
        return self._token.transfer_from_account(self._sender, to, amount)

    def balance_of(self, account: bytes) -> int:
        return self._token.balance_of(account)
