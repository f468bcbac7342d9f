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

import hashlib
import logging
from typing import Any, NamedTuple, Optional, Sequence

from salevault.conf.get_settings import get_global_settings
from salevault.conf.settings import VaultSettings
from salevault.nanocontracts.blueprint import Blueprint
from salevault.nanocontracts.blueprint_env import BlueprintEnvironment
from salevault.nanocontracts.clock import Clock, SystemClock
from salevault.nanocontracts.context import Context
from salevault.nanocontracts.exception import (
    NCContractAlreadyExists,
    NCContractDoesNotExist,
    NCFail,
    NCInvalidAction,
    NCMethodNotFound,
)
from salevault.nanocontracts.storage import NCContractStorage, StorageState
from salevault.nanocontracts.token import FungibleToken, TokenState
from salevault.nanocontracts.types import (
    BlueprintId,
    CallerId,
    ContractId,
    NCDepositAction,
    NCEvent,
    TokenUid,
    allows_deposit,
    is_exported,
    is_public,
    is_view,
)

logger = logging.getLogger(__name__)

INITIALIZE_METHOD = 'initialize'


class _Snapshot(NamedTuple):
    storage: StorageState
    tokens: dict[TokenUid, TokenState]
    payouts: dict[bytes, int]
    events_len: int


class Runner:
    """Executes blueprint methods one at a time, each as an all-or-nothing transaction.

    Before a public call the runner records the contract storage, the contract balances, every registered token
    ledger, the native value paid out to accounts and the event log. If the call raises, all of it is restored, so a
    failed call leaves no trace. Non-NCFail exceptions are rolled back as well and re-raised as NCFail.
    """

    def __init__(self, clock: Optional[Clock] = None, settings: Optional[VaultSettings] = None) -> None:
        self.settings = settings or get_global_settings()
        self.clock: Clock = clock or SystemClock()
        self.events: list[NCEvent] = []
        self._blueprints: dict[BlueprintId, type[Blueprint]] = {}
        self._contracts: dict[ContractId, tuple[BlueprintId, NCContractStorage]] = {}
        self._tokens: dict[TokenUid, FungibleToken] = {}
        self._payouts: dict[bytes, int] = {}
        self._rejecting: set[bytes] = set()
        self._running: Optional[ContractId] = None

    @property
    def native_token_uid(self) -> TokenUid:
        return TokenUid(self.settings.NATIVE_TOKEN_UID)

    # Registration

    def register_blueprint_class(self, blueprint_class: type[Blueprint],
                                 blueprint_id: Optional[BlueprintId] = None) -> BlueprintId:
        if not is_exported(blueprint_class):
            raise NCFail(f'{blueprint_class.__name__} is not marked with @export')
        if blueprint_id is None:
            qualname = f'{blueprint_class.__module__}.{blueprint_class.__qualname__}'
            blueprint_id = BlueprintId(hashlib.sha256(qualname.encode('utf-8')).digest())
        self._blueprints[blueprint_id] = blueprint_class
        return blueprint_id

    def register_token(self, token: FungibleToken) -> None:
        if token.token_uid == self.native_token_uid:
            raise ValueError('the native token is handled by the runner itself')
        self._tokens[token.token_uid] = token

    def get_token(self, token_uid: TokenUid) -> FungibleToken:
        token = self._tokens.get(token_uid)
        if token is None:
            raise NCFail(f'unknown token {token_uid.hex()}')
        return token

    def has_contract(self, contract_id: ContractId) -> bool:
        return contract_id in self._contracts

    # Contexts

    def create_context(self, caller_id: CallerId, actions: Sequence[NCDepositAction] = (),
                       timestamp: Optional[int] = None) -> Context:
        """Build a call context, stamped with the runner clock unless `timestamp` is given."""
        if timestamp is None:
            timestamp = int(self.clock.seconds())
        return Context(caller_id=caller_id, actions=actions, timestamp=timestamp)

    # Calls

    def create_contract(self, contract_id: ContractId, blueprint_id: BlueprintId, ctx: Context,
                        *args: Any, **kwargs: Any) -> Any:
        """Create a contract and run its `initialize` method. Nothing is kept if initialization fails."""
        if contract_id in self._contracts:
            raise NCContractAlreadyExists(f'contract {contract_id.hex()} already exists')
        if blueprint_id not in self._blueprints:
            raise NCFail(f'unknown blueprint {blueprint_id.hex()}')

        self._contracts[contract_id] = (blueprint_id, NCContractStorage())
        try:
            return self._execute(contract_id, INITIALIZE_METHOD, ctx, args, kwargs)
        except NCFail:
            del self._contracts[contract_id]
            raise

    def call_public_method(self, contract_id: ContractId, method_name: str, ctx: Context,
                           *args: Any, **kwargs: Any) -> Any:
        if method_name == INITIALIZE_METHOD:
            raise NCMethodNotFound('initialize can only be called through create_contract')
        return self._execute(contract_id, method_name, ctx, args, kwargs)

    def call_view_method(self, contract_id: ContractId, method_name: str, *args: Any, **kwargs: Any) -> Any:
        """Run a view method against a read-only copy of the contract storage."""
        blueprint_class, storage = self._get_contract(contract_id)
        method = getattr(blueprint_class, method_name, None)
        if method is None or not is_view(method):
            raise NCMethodNotFound(f'{blueprint_class.__name__}.{method_name} is not a view method')
        env = BlueprintEnvironment(self, contract_id, timestamp=None)
        blueprint = blueprint_class(storage.read_only_copy(), env)
        return method(blueprint, *args, **kwargs)

    def get_readonly_contract(self, contract_id: ContractId) -> Blueprint:
        """Return an instance of the contract whose fields can be inspected but not changed."""
        blueprint_class, storage = self._get_contract(contract_id)
        env = BlueprintEnvironment(self, contract_id, timestamp=None)
        return blueprint_class(storage.read_only_copy(), env)

    def get_storage(self, contract_id: ContractId) -> NCContractStorage:
        return self._get_contract(contract_id)[1]

    # Native value and events, used through BlueprintEnvironment

    def send_value(self, contract_id: ContractId, to: bytes, amount: int) -> bool:
        storage = self.get_storage(contract_id)
        native_uid = self.native_token_uid
        if amount < 0 or to in self._rejecting:
            return False
        if storage.get_balance(native_uid).value < amount:
            return False
        storage.add_balance(native_uid, -amount)
        self._payouts[to] = self._payouts.get(to, 0) + amount
        return True

    def emit_event(self, contract_id: ContractId, name: str, data: dict[str, Any]) -> None:
        self.events.append(NCEvent(contract_id, name, dict(data)))

    def get_events(self, contract_id: Optional[ContractId] = None, name: Optional[str] = None) -> list[NCEvent]:
        return [
            event for event in self.events
            if (contract_id is None or event.contract_id == contract_id) and (name is None or event.name == name)
        ]

    def get_account_balance(self, address: bytes) -> int:
        """Native value paid out to `address` by contracts."""
        return self._payouts.get(address, 0)

    def reject_value_to(self, address: bytes) -> None:
        """Make every native value transfer to `address` fail."""
        self._rejecting.add(address)

    def accept_value_to(self, address: bytes) -> None:
        self._rejecting.discard(address)

    # Internals

    def _get_contract(self, contract_id: ContractId) -> tuple[type[Blueprint], NCContractStorage]:
        entry = self._contracts.get(contract_id)
        if entry is None:
            raise NCContractDoesNotExist(f'contract {contract_id.hex()} does not exist')
        blueprint_id, storage = entry
        return self._blueprints[blueprint_id], storage

    def _snapshot(self, storage: NCContractStorage) -> _Snapshot:
        return _Snapshot(
            storage=storage.snapshot(),
            tokens={uid: token.snapshot() for uid, token in self._tokens.items()},
            payouts=dict(self._payouts),
            events_len=len(self.events),
        )

    def _restore(self, storage: NCContractStorage, snapshot: _Snapshot) -> None:
        storage.restore(snapshot.storage)
        for uid, state in snapshot.tokens.items():
            self._tokens[uid].restore(state)
        self._payouts = snapshot.payouts
        del self.events[snapshot.events_len:]

    def _execute(self, contract_id: ContractId, method_name: str, ctx: Context,
                 args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        blueprint_class, storage = self._get_contract(contract_id)
        method = getattr(blueprint_class, method_name, None)
        if method is None or not is_public(method):
            raise NCMethodNotFound(f'{blueprint_class.__name__}.{method_name} is not a public method')
        if ctx.actions and not allows_deposit(method):
            raise NCInvalidAction(f'{method_name} does not accept deposits')
        if self._running is not None:
            raise NCFail(f'reentrant call to {method_name} while {self._running.hex()} is running')

        snapshot = self._snapshot(storage)
        self._running = contract_id
        logger.debug('call %s.%s caller=%s ts=%d', blueprint_class.__name__, method_name, ctx.caller_id.hex(),
                     ctx.timestamp)
        try:
            for action in ctx.actions:
                storage.add_balance(action.token_uid, action.amount)
            env = BlueprintEnvironment(self, contract_id, ctx.timestamp)
            blueprint = blueprint_class(storage, env)
            return method(blueprint, ctx, *args, **kwargs)
        except NCFail as e:
            self._restore(storage, snapshot)
            logger.info('call %s.%s failed and was rolled back: %s', blueprint_class.__name__, method_name, e)
            raise
        except Exception as e:
            self._restore(storage, snapshot)
            logger.info('call %s.%s raised %r and was rolled back', blueprint_class.__name__, method_name, e)
            raise NCFail(f'unhandled error in {method_name}: {e!r}') from e
        finally:
            self._running = None
