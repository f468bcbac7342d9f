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

from typing import Sequence

from salevault.nanocontracts.exception import NCInvalidAction
from salevault.nanocontracts.types import CallerId, NCDepositAction, Timestamp, TokenUid


class Context:
    """Everything a public method knows about the call: who called, what was sent and when."""

    __slots__ = ('caller_id', 'actions', 'timestamp')

    def __init__(self, caller_id: CallerId, actions: Sequence[NCDepositAction], timestamp: int) -> None:
        seen: set[TokenUid] = set()
        for action in actions:
            if action.token_uid in seen:
                raise NCInvalidAction(f'duplicate action for token {action.token_uid.hex()}')
            if action.amount <= 0:
                raise NCInvalidAction(f'action amount must be positive, got {action.amount}')
            seen.add(action.token_uid)

        self.caller_id = caller_id
        self.actions: tuple[NCDepositAction, ...] = tuple(actions)
        self.timestamp = Timestamp(int(timestamp))

    def get_single_action(self, token_uid: TokenUid) -> NCDepositAction:
        """Return the only action of the call, which must be for `token_uid`."""
        if len(self.actions) != 1:
            raise NCInvalidAction(f'expected exactly 1 action, got {len(self.actions)}')
        action = self.actions[0]
        if action.token_uid != token_uid:
            raise NCInvalidAction(f'expected action for token {token_uid.hex()}')
        return action

    def __repr__(self) -> str:
        return f'Context(caller_id={self.caller_id.hex()}, actions={list(self.actions)}, timestamp={self.timestamp})'
