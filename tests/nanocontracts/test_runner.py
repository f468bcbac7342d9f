from salevault import Blueprint, Context, NCDepositAction, export, public, view
from salevault.nanocontracts.exception import (
    CollaboratorFailure,
    NCContractAlreadyExists,
    NCContractDoesNotExist,
    NCFail,
    NCInvalidAction,
    NCMethodNotFound,
    NCUnknownField,
)
from salevault.nanocontracts.token import FungibleToken
from salevault.nanocontracts.types import TokenUid
from tests.nanocontracts.blueprints.unittest import BlueprintTestCase


@export
class Counter(Blueprint):
    count: int
    token_uid: TokenUid

    @public
    def initialize(self, ctx: Context, token_uid: TokenUid) -> None:
        self.count = 0
        self.token_uid = token_uid

    @public
    def increment(self, ctx: Context, fail: bool = False) -> int:
        self.count += 1
        self.syscall.emit_event("incremented", count=self.count)
        if fail:
            raise NCFail("boom")
        return self.count

    @public
    def crash(self, ctx: Context) -> None:
        self.count += 1
        raise ZeroDivisionError("crash")

    @public
    def set_unknown(self, ctx: Context) -> None:
        self.unknown = 1

    @public(allow_deposit=True)
    def deposit(self, ctx: Context) -> int:
        return self.syscall.get_current_balance()

    @public
    def pay(self, ctx: Context, to: bytes, amount: int) -> None:
        self.count += 1
        if not self.syscall.send_value(to, amount):
            raise CollaboratorFailure("send failed")

    @public
    def give(self, ctx: Context, to: bytes, amount: int) -> None:
        token = self.syscall.get_token(self.token_uid)
        if not token.transfer(to, amount):
            raise CollaboratorFailure("transfer failed")

    @view
    def get_count(self) -> int:
        return self.count

    @view
    def now(self) -> int:
        return self.syscall.get_current_timestamp()


class ReentrantToken(FungibleToken):
    """Token that calls back into a contract while transferring."""

    def __init__(self, token_uid, runner, contract_id):
        super().__init__(token_uid)
        self.runner = runner
        self.contract_id = contract_id

    def transfer_from_account(self, sender, to, amount):
        ctx = self.runner.create_context(to)
        self.runner.call_public_method(self.contract_id, "increment", ctx)
        return super().transfer_from_account(sender, to, amount)


class RunnerTestCase(BlueprintTestCase):
    def setUp(self):
        super().setUp()
        self.contract_id = self.gen_random_contract_id()
        self.blueprint_id = self._register_blueprint_class(Counter)
        self.token = self.create_token()
        self.runner.create_contract(
            self.contract_id, self.blueprint_id, self.create_context(), self.token.token_uid
        )

    def test_public_and_view_calls(self):
        self.assertEqual(self.runner.call_public_method(self.contract_id, "increment", self.create_context()), 1)
        self.assertEqual(self.runner.call_view_method(self.contract_id, "get_count"), 1)
        self.assertEqual(self.get_readonly_contract(self.contract_id).count, 1)

    def test_failed_call_rolls_back(self):
        with self.assertRaises(NCFail):
            self.runner.call_public_method(self.contract_id, "increment", self.create_context(), True)
        self.assertEqual(self.get_readonly_contract(self.contract_id).count, 0)
        self.assertEqual(self.runner.get_events(self.contract_id), [])

    def test_unhandled_exception_becomes_ncfail(self):
        with self.assertRaises(NCFail) as cm:
            self.runner.call_public_method(self.contract_id, "crash", self.create_context())
        self.assertIsInstance(cm.exception.__cause__, ZeroDivisionError)
        self.assertEqual(self.get_readonly_contract(self.contract_id).count, 0)

    def test_unknown_field(self):
        with self.assertRaises(NCUnknownField):
            self.runner.call_public_method(self.contract_id, "set_unknown", self.create_context())

    def test_method_checks(self):
        with self.assertRaises(NCMethodNotFound):
            self.runner.call_public_method(self.contract_id, "get_count", self.create_context())
        with self.assertRaises(NCMethodNotFound):
            self.runner.call_public_method(self.contract_id, "initialize", self.create_context())
        with self.assertRaises(NCMethodNotFound):
            self.runner.call_view_method(self.contract_id, "increment")
        with self.assertRaises(NCContractDoesNotExist):
            self.runner.call_view_method(self.gen_random_contract_id(), "get_count")
        with self.assertRaises(NCContractAlreadyExists):
            self.runner.create_contract(
                self.contract_id, self.blueprint_id, self.create_context(), self.token.token_uid
            )

    def test_deposits(self):
        action = NCDepositAction(token_uid=self.native_token_uid, amount=25)
        ctx = self.create_context(actions=[action])
        self.assertEqual(self.runner.call_public_method(self.contract_id, "deposit", ctx), 25)

        with self.assertRaises(NCInvalidAction):
            self.runner.call_public_method(self.contract_id, "increment", self.create_context(actions=[action]))
        with self.assertRaises(NCInvalidAction):
            self.create_context(actions=[action, action])
        with self.assertRaises(NCInvalidAction):
            self.create_context(actions=[NCDepositAction(token_uid=self.native_token_uid, amount=0)])

    def test_send_value(self):
        action = NCDepositAction(token_uid=self.native_token_uid, amount=25)
        self.runner.call_public_method(self.contract_id, "deposit", self.create_context(actions=[action]))
        address = self.gen_random_address()

        self.runner.call_public_method(self.contract_id, "pay", self.create_context(), address, 10)
        self.assertEqual(self.runner.get_account_balance(address), 10)

        # Not enough balance
        with self.assertRaises(CollaboratorFailure):
            self.runner.call_public_method(self.contract_id, "pay", self.create_context(), address, 100)

        self.runner.reject_value_to(address)
        with self.assertRaises(CollaboratorFailure):
            self.runner.call_public_method(self.contract_id, "pay", self.create_context(), address, 5)
        self.assertEqual(self.runner.get_account_balance(address), 10)
        self.assertEqual(self.get_readonly_contract(self.contract_id).count, 1)

    def test_token_transfer_rolls_back(self):
        self.token.mint(self.contract_id, 100)
        address = self.gen_random_address()

        self.runner.call_public_method(self.contract_id, "give", self.create_context(), address, 40)
        self.assertEqual(self.token.balance_of(address), 40)

        with self.assertRaises(CollaboratorFailure):
            self.runner.call_public_method(self.contract_id, "give", self.create_context(), address, 100)
        self.assertEqual(self.token.balance_of(self.contract_id), 60)

    def test_reentrant_call_rejected(self):
        token = ReentrantToken(self.gen_random_token_uid(), self.runner, self.contract_id)
        self.runner.register_token(token)
        contract_id = self.gen_random_contract_id()
        self.runner.create_contract(contract_id, self.blueprint_id, self.create_context(), token.token_uid)
        token.mint(contract_id, 10)

        with self.assertRaises(NCFail):
            self.runner.call_public_method(contract_id, "give", self.create_context(), self.gen_random_address(), 5)
        self.assertEqual(token.balance_of(contract_id), 10)
        self.assertEqual(self.get_readonly_contract(self.contract_id).count, 0)

    def test_failed_initialize_leaves_no_contract(self):
        contract_id = self.gen_random_contract_id()
        with self.assertRaises(NCFail):
            self.runner.create_contract(contract_id, self.blueprint_id, self.create_context())
        self.assertFalse(self.runner.has_contract(contract_id))

    def test_views_follow_clock(self):
        self.assertEqual(self.runner.call_view_method(self.contract_id, "now"), self.now())
        self.clock.advance(60)
        self.assertEqual(self.runner.call_view_method(self.contract_id, "now"), self.now())
        self.assertEqual(self.create_context().timestamp, self.now())

    def test_register_native_token(self):
        with self.assertRaises(ValueError):
            self.runner.register_token(FungibleToken(self.native_token_uid))
        with self.assertRaises(NCFail):
            self.runner.get_token(self.gen_random_token_uid())

    def test_register_requires_export(self):
        class Unmarked(Counter):
            pass

        with self.assertRaises(NCFail):
            self._register_blueprint_class(Unmarked)
        self.assertTrue(self._register_blueprint_class(export(Unmarked)))
