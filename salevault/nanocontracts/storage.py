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

from __future__ import annotations

import copy
from typing import Any, NamedTuple

from salevault.nanocontracts.exception import NCFail
from salevault.nanocontracts.types import TokenUid


class Balance(NamedTuple):
    value: int


class StorageState(NamedTuple):
    fields: dict[str, Any]
    balances: dict[TokenUid, int]


class NCContractStorage:
    """Fields and token balances of a single contract."""

    def __init__(self, *, read_only: bool = False) -> None:
        self._fields: dict[str, Any] = {}
        self._balances: dict[TokenUid, int] = {}
        self.read_only = read_only

    def get(self, name: str) -> Any:
        return self._fields[name]

    def put(self, name: str, value: Any) -> None:
        if self.read_only:
            raise NCFail(f'cannot write field {name} on read-only storage')
        self._fields[name] = value

    def has(self, name: str) -> bool:
        return name in self._fields

    def get_balance(self, token_uid: TokenUid) -> Balance:
        return Balance(self._balances.get(token_uid, 0))

    def add_balance(self, token_uid: TokenUid, amount: int) -> None:
        new_value = self._balances.get(token_uid, 0) + amount
        if new_value < 0:
            raise NCFail(f'negative balance for token {token_uid.hex()}')
        self._balances[token_uid] = new_value

    def snapshot(self) -> StorageState:
        return StorageState(copy.deepcopy(self._fields), dict(self._balances))

    def restore(self, state: StorageState) -> None:
        self._fields = copy.deepcopy(state.fields)
        self._balances = dict(state.balances)

    def read_only_copy(self) -> 'NCContractStorage':
        clone = NCContractStorage(read_only=True)
        clone._fields = copy.deepcopy(self._fields)
        clone._balances = dict(self._balances)
        return clone
