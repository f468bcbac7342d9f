import os
import unittest
from typing import Any, Optional, Sequence

from twisted.internet.task import Clock

from salevault.conf import settings
from salevault.nanocontracts.blueprint import Blueprint
from salevault.nanocontracts.context import Context
from salevault.nanocontracts.runner import Runner
from salevault.nanocontracts.token import FungibleToken
from salevault.nanocontracts.types import (
    Address,
    BlueprintId,
    ContractId,
    NCDepositAction,
    TokenUid,
)

START_TIMESTAMP = 1_700_000_000


class BlueprintTestCase(unittest.TestCase):
    """Base class for blueprint tests.

    Every test gets a fresh runner driven by a twisted `Clock` set to `START_TIMESTAMP`, so contexts and views see a
    deterministic time that tests move with `self.clock.advance(...)`.
    """

    def setUp(self) -> None:
        super().setUp()
        self.clock = Clock()
        self.clock.advance(START_TIMESTAMP)
        self.runner = Runner(clock=self.clock, settings=settings)
        self.native_token_uid = self.runner.native_token_uid

    def gen_random_address(self) -> Address:
        return Address(b'\x28' + os.urandom(24))

    def gen_random_contract_id(self) -> ContractId:
        return ContractId(os.urandom(32))

    def gen_random_blueprint_id(self) -> BlueprintId:
        return BlueprintId(os.urandom(32))

    def gen_random_token_uid(self) -> TokenUid:
        return TokenUid(os.urandom(32))

    def _register_blueprint_class(self, blueprint_class: type[Blueprint]) -> BlueprintId:
        return self.runner.register_blueprint_class(blueprint_class, self.gen_random_blueprint_id())

    def create_token(self, symbol: str = 'TKN', token_uid: Optional[TokenUid] = None) -> FungibleToken:
        token = FungibleToken(token_uid or self.gen_random_token_uid(), symbol)
        self.runner.register_token(token)
        return token

    def create_context(
        self,
        caller_id: Optional[bytes] = None,
        actions: Sequence[NCDepositAction] = (),
        timestamp: Optional[int] = None,
    ) -> Context:
        if caller_id is None:
            caller_id = self.gen_random_address()
        return self.runner.create_context(caller_id, actions, timestamp)

    def get_readonly_contract(self, contract_id: ContractId) -> Any:
        return self.runner.get_readonly_contract(contract_id)

    def now(self) -> int:
        return int(self.clock.seconds())
