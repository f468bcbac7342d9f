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

from typing import TYPE_CHECKING, Any, Optional

from salevault.nanocontracts.token import TokenCollaborator
from salevault.nanocontracts.types import ContractId, TokenUid

if TYPE_CHECKING:
    from salevault.nanocontracts.runner import Runner


class BlueprintEnvironment:
    """What a running blueprint can ask of the outside world.

    Exposed to blueprint code as `self.syscall`.
    """

    __slots__ = ('_runner', '_contract_id', '_timestamp')

    def __init__(self, runner: 'Runner', contract_id: ContractId, timestamp: Optional[int]) -> None:
        self._runner = runner
        self._contract_id = contract_id
        self._timestamp = timestamp

    def get_contract_id(self) -> ContractId:
        return self._contract_id

    def get_current_timestamp(self) -> int:
        """Timestamp of the running call, or the runner clock when serving a view."""
        if self._timestamp is not None:
            return self._timestamp
        return int(self._runner.clock.seconds())

    def get_native_token_uid(self) -> TokenUid:
        """Uid of the token contributions and native transfers are made in."""
        return self._runner.native_token_uid

    def get_current_balance(self, token_uid: Optional[TokenUid] = None) -> int:
        """Balance held by this contract, in the native token unless `token_uid` is given."""
        if token_uid is None:
            token_uid = self._runner.native_token_uid
        return self._runner.get_storage(self._contract_id).get_balance(token_uid).value

    def send_value(self, to: bytes, amount: int) -> bool:
        """Send native value held by this contract. Return False when the transfer fails."""
        return self._runner.send_value(self._contract_id, to, amount)

    def get_token(self, token_uid: TokenUid) -> TokenCollaborator:
        """Return the token collaborator acting on behalf of this contract."""
        return self._runner.get_token(token_uid).bind(self._contract_id)

    def emit_event(self, name: str, **data: Any) -> None:
        self._runner.emit_event(self._contract_id, name, data)
