import logging
from typing import NamedTuple, Optional

from salevault import (
    Address,
    Amount,
    Blueprint,
    Context,
    NCFail,
    Timestamp,
    TokenUid,
    export,
    public,
    view,
)
from salevault.nanocontracts.exception import CollaboratorFailure
from salevault.nanocontracts.token import TokenCollaborator
from salevault.utils.safe_math import u256_add, u256_mul, u256_sub

logger = logging.getLogger(__name__)


class VaultState:
    """Lifecycle states of the vault"""

    ACTIVE = 0  # Accepting contributions, value held in custody
    REFUNDING = 1  # Sale failed, contributors withdraw their deposits
    COMPLETED = 2  # Sale succeeded, value forwarded to the beneficiary


STATE_NAMES = {
    VaultState.ACTIVE: "Active",
    VaultState.REFUNDING: "Refunding",
    VaultState.COMPLETED: "Completed",
}


class PhaseInfo(NamedTuple):
    """A single sale phase. `cap` is the remaining cap, None when uncapped."""

    index: int
    expire_at: int
    cap: Optional[int]
    rate: int
    locked: bool
    is_valid: bool


class VaultInfo(NamedTuple):
    """General vault information."""

    token_uid: str
    state: str
    admin: str
    beneficiary: str
    goal: int
    refunding_start: int
    min_contribution: int
    max_per_account: int
    held_balance: int
    total_raised: int
    total_sold: int
    total_booked: int
    participants: int
    phase_count: int
    current_phase: int
    decommissioned: bool


class ParticipantInfo(NamedTuple):
    """Participant-specific information."""

    deposited: int
    booked: int
    unbounded: bool


class PhasedVaultErrors:
    """Common error messages"""

    UNAUTHORIZED = "Unauthorized action"
    DECOMMISSIONED = "Vault has been decommissioned"
    NOT_ACTIVE = "Vault is not active"
    REFUNDING = "Vault is refunding"
    NOT_REFUNDING = "Vault is not refunding"
    NOT_COMPLETED = "Vault is not completed"
    BELOW_MIN = "Amount below minimum contribution"
    ABOVE_MAX = "Contribution exceeds per-account cap"
    NO_VALID_PHASE = "No valid phase available"
    ZERO_TOKENS = "Contribution converts to zero tokens"
    INSUFFICIENT_TOKENS = "Not enough unbooked tokens in the vault"
    NOTHING_TO_REFUND = "Nothing to refund"
    GOAL_NOT_MET = "Goal not met"
    GOAL_MET = "Goal already met"
    REFUNDING_NOT_STARTED = "Refunding period has not started"
    PHASE_STILL_VALID = "A phase is still valid"
    PHASE_LOCKED = "Current phase is locked"
    INVALID_PHASE = "Invalid phase index"
    TOKEN_TRANSFER_FAILED = "Token transfer failed"
    VALUE_TRANSFER_FAILED = "Value transfer failed"


class Unauthorized(NCFail):
    pass


class InvalidState(NCFail):
    pass


class Decommissioned(InvalidState):
    pass


class RefundingNotStarted(InvalidState):
    pass


class NothingToRefund(InvalidState):
    pass


class BelowMinimum(NCFail):
    pass


class CapExceeded(NCFail):
    pass


class NoValidAllocation(NCFail):
    pass


class InsufficientTokens(NoValidAllocation):
    pass


class GoalNotMet(NCFail):
    pass


class GoalMet(NCFail):
    pass


class PhaseStillValid(NCFail):
    pass


class PhaseLocked(NCFail):
    pass


class InvalidParameters(NCFail):
    pass


@export
class PhasedVault(Blueprint):
    """Phased token sale escrow.

    Contributions are converted into tokens at the rate of the current phase, spilling over into the following
    phases when a capped phase runs out. While the vault is Active the tokens are booked for the contributor and the
    contributed value stays in custody. The sale then resolves either to Completed (value forwarded to the
    beneficiary, booked tokens released) or to Refunding (every contributor takes back their deposit).

    State Variables:
        token_uid: Token being sold, held by the vault through the token collaborator
        admin: Privileged account
        beneficiary: Receives the raised value and, on decommission, the unbooked tokens
        goal: Funding goal in native value
        refunding_start: Earliest time anyone may switch an underfunded vault to Refunding
        min_contribution: Smallest accepted contribution
        max_per_account: Cumulative contribution cap per account, unless unbounded
        state: One of VaultState
        decommissioned: Set once by `decommission`, blocks every later public call

        Phase registry (per index 0..phase_count-1):
        phase_expire_at: Phase is valid strictly before this time
        phase_capped: Whether the phase has a cap
        phase_cap: Remaining value the phase can still absorb
        phase_rate: Tokens per unit of native value
        phase_locked: Locked phases block `reset_phases` while current
        last_active_phase: Cursor where the phase scan starts, never moves backwards

        Ledgers:
        held_balance: Native value held in custody
        deposits: Raw value contributed per account
        booked: Tokens owed per account
        total_booked: Sum of `booked`
        unbounded: Accounts exempt from `max_per_account`

    Phases are not required to be sorted. `add_phase` logs a warning for a phase expiring before its predecessor and
    `get_phase_ordering_issues` lists such phases.
    """

    # Sale configuration
    token_uid: TokenUid
    beneficiary: Address
    goal: Amount
    refunding_start: Timestamp
    min_contribution: Amount
    max_per_account: Amount

    # Access control
    admin: Address

    # Lifecycle
    state: int
    decommissioned: bool

    # Phase registry
    phase_count: int
    last_active_phase: int
    phase_expire_at: dict[int, Timestamp]
    phase_capped: dict[int, bool]
    phase_cap: dict[int, Amount]
    phase_rate: dict[int, Amount]
    phase_locked: dict[int, bool]

    # Ledgers
    held_balance: Amount
    deposits: dict[Address, Amount]
    booked: dict[Address, Amount]
    total_booked: Amount
    unbounded: dict[Address, bool]

    # Statistics
    total_raised: Amount
    total_sold: Amount
    participants_count: int

    @public
    def initialize(
        self,
        ctx: Context,
        token_uid: TokenUid,
        beneficiary: Address,
        goal: Amount,
        refunding_start: Timestamp,
        min_contribution: Amount,
        max_per_account: Amount,
        expire_at: Timestamp,
        rate: Amount,
        cap: Optional[Amount] = None,
        locked: bool = False,
    ) -> None:
        """Initialize the vault with its sale parameters and first phase."""
        if token_uid == self.syscall.get_native_token_uid():
            raise InvalidParameters("Sold token must differ from the native token")
        if goal <= 0:
            raise InvalidParameters("Goal must be positive")
        if min_contribution <= 0:
            raise InvalidParameters("Minimum contribution must be positive")
        if max_per_account < min_contribution:
            raise InvalidParameters("Per-account cap below minimum contribution")

        # Fails for unregistered tokens
        self.syscall.get_token(token_uid)

        self.token_uid = token_uid
        self.beneficiary = beneficiary
        self.goal = goal
        self.refunding_start = refunding_start
        self.min_contribution = min_contribution
        self.max_per_account = max_per_account

        self.admin = Address(ctx.caller_id)
        self.state = VaultState.ACTIVE
        self.decommissioned = False

        self._clear_phases()
        self._append_phase(expire_at, rate, cap, locked)

        self.held_balance = Amount(0)
        self.deposits = {}
        self.booked = {}
        self.total_booked = Amount(0)
        self.unbounded = {}

        self.total_raised = Amount(0)
        self.total_sold = Amount(0)
        self.participants_count = 0

        self.syscall.emit_event(
            "sale_started",
            token_uid=token_uid.hex(),
            beneficiary=beneficiary.hex(),
            goal=goal,
        )

    # Phase registry

    def _clear_phases(self) -> None:
        self.phase_count = 0
        self.last_active_phase = 0
        self.phase_expire_at = {}
        self.phase_capped = {}
        self.phase_cap = {}
        self.phase_rate = {}
        self.phase_locked = {}

    def _append_phase(
        self, expire_at: Timestamp, rate: Amount, cap: Optional[Amount], locked: bool
    ) -> int:
        if rate <= 0:
            raise InvalidParameters("Phase rate must be positive")
        if cap is not None and cap <= 0:
            raise InvalidParameters("Phase cap must be positive")

        index = self.phase_count
        if index > 0 and expire_at < self.phase_expire_at[index - 1]:
            logger.warning(
                "phase %d expires at %d, before phase %d (%d)",
                index,
                expire_at,
                index - 1,
                self.phase_expire_at[index - 1],
            )

        self.phase_expire_at[index] = Timestamp(expire_at)
        self.phase_capped[index] = cap is not None
        self.phase_cap[index] = Amount(cap if cap is not None else 0)
        self.phase_rate[index] = Amount(rate)
        self.phase_locked[index] = locked
        self.phase_count = index + 1
        return index

    def _is_phase_valid(self, index: int, now: int) -> bool:
        if index < 0 or index >= self.phase_count:
            return False
        if now >= self.phase_expire_at[index]:
            return False
        if self.phase_capped[index] and self.phase_cap[index] <= self.min_contribution:
            return False
        return True

    def _current_phase_id(self, now: int, start: Optional[int] = None) -> int:
        """First valid phase from `start` (the stored cursor by default), or the last phase if none is valid."""
        index = self.last_active_phase if start is None else start
        last = self.phase_count - 1
        while index < last and not self._is_phase_valid(index, now):
            index += 1
        return index

    @public
    def add_phase(
        self,
        ctx: Context,
        expire_at: Timestamp,
        rate: Amount,
        cap: Optional[Amount] = None,
        locked: bool = False,
    ) -> int:
        """Append a phase to the registry (admin only)."""
        self._require_operational()
        self._only_admin(ctx)
        index = self._append_phase(expire_at, rate, cap, locked)
        self.syscall.emit_event(
            "phase_added", index=index, expire_at=expire_at, rate=rate, cap=cap, locked=locked
        )
        return index

    @public
    def reset_phases(
        self,
        ctx: Context,
        expire_at: Timestamp,
        rate: Amount,
        cap: Optional[Amount] = None,
        locked: bool = False,
    ) -> None:
        """Replace the whole registry by a single phase (admin only).

        Not allowed while the current phase is locked.
        """
        self._require_operational()
        self._only_admin(ctx)
        current = self._current_phase_id(ctx.timestamp)
        if self.phase_locked[current]:
            raise PhaseLocked(PhasedVaultErrors.PHASE_LOCKED)

        self._clear_phases()
        self._append_phase(expire_at, rate, cap, locked)
        self.syscall.emit_event("phases_reset", expire_at=expire_at, rate=rate, cap=cap, locked=locked)

    # Contribution

    @public
    def set_unbounded_limit(self, ctx: Context, account: Address, unbounded: bool) -> None:
        """Exempt an account from the per-account cap, or remove the exemption (admin only)."""
        self._require_operational()
        self._only_admin(ctx)
        if unbounded:
            self.unbounded[account] = True
        else:
            self.unbounded.pop(account, None)
        self.syscall.emit_event("unbounded_limit_set", account=account.hex(), unbounded=unbounded)

    def _admit(self, caller: Address, value: Amount) -> None:
        """Record the contribution in the deposit ledger and check the gate bounds."""
        if value < self.min_contribution:
            raise BelowMinimum(PhasedVaultErrors.BELOW_MIN)

        if caller not in self.deposits:
            self.participants_count += 1
        deposited = Amount(u256_add(self.deposits.get(caller, Amount(0)), value))
        self.deposits[caller] = deposited

        if not self.unbounded.get(caller, False) and deposited > self.max_per_account:
            raise CapExceeded(PhasedVaultErrors.ABOVE_MAX)

    def _allocate(self, caller: Address, value: Amount, now: int) -> tuple[int, int]:
        """Convert `value` into tokens walking the phase registry.

        Returns the token quantity and the surplus that no phase could absorb. The surplus is already taken out of
        the caller's deposit entry; sending it back is up to the caller.
        """
        phase_id = self._current_phase_id(now)
        if not self._is_phase_valid(phase_id, now):
            raise NoValidAllocation(PhasedVaultErrors.NO_VALID_PHASE)

        to_buy = int(value)
        to_transfer = 0
        surplus = 0
        while to_buy > 0:
            if not self._is_phase_valid(phase_id, now):
                if to_transfer == 0:
                    raise NoValidAllocation(PhasedVaultErrors.NO_VALID_PHASE)
                surplus = to_buy
                self.deposits[caller] = Amount(u256_sub(self.deposits[caller], surplus))
                to_buy = 0
            elif self.phase_capped[phase_id]:
                cap = self.phase_cap[phase_id]
                rate = self.phase_rate[phase_id]
                if cap >= to_buy:
                    to_transfer = u256_add(to_transfer, u256_mul(to_buy, rate))
                    self.phase_cap[phase_id] = Amount(u256_sub(cap, to_buy))
                    to_buy = 0
                else:
                    to_transfer = u256_add(to_transfer, u256_mul(cap, rate))
                    to_buy = u256_sub(to_buy, cap)
                    self.phase_cap[phase_id] = Amount(0)
                    phase_id = self._current_phase_id(now, start=phase_id)
            else:
                # Uncapped phases absorb the whole remainder at once.
                to_transfer = u256_add(to_transfer, u256_mul(to_buy, self.phase_rate[phase_id]))
                to_buy = 0

        if to_transfer == 0:
            raise NoValidAllocation(PhasedVaultErrors.ZERO_TOKENS)

        self.last_active_phase = phase_id
        return to_transfer, surplus

    @public(allow_deposit=True)
    def contribute(self, ctx: Context) -> int:
        """Buy tokens with the native value deposited in this call.

        Returns the number of tokens bought. They are booked while the vault is Active and transferred right away
        once it is Completed. Value no phase can absorb is sent back to the caller.
        """
        self._require_operational()
        if self.state == VaultState.REFUNDING:
            raise InvalidState(PhasedVaultErrors.REFUNDING)

        action = ctx.get_single_action(self.syscall.get_native_token_uid())
        caller = Address(ctx.caller_id)
        value = Amount(action.amount)

        self._admit(caller, value)
        to_transfer, surplus = self._allocate(caller, value, ctx.timestamp)

        token = self.syscall.get_token(self.token_uid)
        if to_transfer > self._unbooked_tokens(token):
            raise InsufficientTokens(PhasedVaultErrors.INSUFFICIENT_TOKENS)

        accepted = Amount(u256_sub(value, surplus))
        completed = self.state == VaultState.COMPLETED
        if not completed:
            self.booked[caller] = Amount(u256_add(self.booked.get(caller, Amount(0)), to_transfer))
            self.total_booked = Amount(u256_add(self.total_booked, to_transfer))
            self.held_balance = Amount(u256_add(self.held_balance, accepted))

        self.total_raised = Amount(u256_add(self.total_raised, accepted))
        self.total_sold = Amount(u256_add(self.total_sold, to_transfer))

        self.syscall.emit_event(
            "tokens_purchased",
            account=caller.hex(),
            value=value,
            tokens=to_transfer,
            refunded=surplus,
            booked=not completed,
        )

        if surplus > 0:
            self._send_value(caller, surplus)
        if completed:
            self._transfer_tokens(token, caller, to_transfer)
            self._send_value(self.beneficiary, accepted)

        return to_transfer

    # Booking ledger

    @public
    def release_booked_tokens_to(self, ctx: Context, accounts: list[Address]) -> None:
        """Transfer booked tokens to each account.

        The admin can release at any time, anyone else only once the vault is Completed. If any transfer fails,
        nothing is released.
        """
        self._require_operational()
        if not self._is_admin(ctx) and self.state != VaultState.COMPLETED:
            raise Unauthorized(PhasedVaultErrors.UNAUTHORIZED)

        releases: list[tuple[Address, int]] = []
        for account in accounts:
            amount = self.booked.get(account, Amount(0))
            if amount == 0:
                continue
            self.booked[account] = Amount(0)
            self.total_booked = Amount(u256_sub(self.total_booked, amount))
            releases.append((account, amount))

        token = self.syscall.get_token(self.token_uid)
        for account, amount in releases:
            self.syscall.emit_event("tokens_released", account=account.hex(), amount=amount)
            self._transfer_tokens(token, account, amount)

    # Lifecycle

    @public
    def complete(self, ctx: Context) -> None:
        """Close the sale and forward the held value to the beneficiary.

        The admin can do it at any time while Active; anyone can once the held balance reaches the goal.
        """
        self._require_operational()
        if self.state != VaultState.ACTIVE:
            raise InvalidState(PhasedVaultErrors.NOT_ACTIVE)
        if not self._is_admin(ctx) and self.held_balance < self.goal:
            raise GoalNotMet(PhasedVaultErrors.GOAL_NOT_MET)

        amount = self.held_balance
        self.held_balance = Amount(0)
        self.state = VaultState.COMPLETED
        self.syscall.emit_event("sale_closed", beneficiary=self.beneficiary.hex(), amount=amount)
        logger.info("vault %s completed, forwarding %d", self.syscall.get_contract_id().hex(), amount)

        if amount > 0:
            self._send_value(self.beneficiary, amount)

    @public
    def start_refunding(self, ctx: Context) -> None:
        """Switch an underfunded vault to Refunding once the refunding period has started (anyone)."""
        self._require_operational()
        if self.state != VaultState.ACTIVE:
            raise InvalidState(PhasedVaultErrors.NOT_ACTIVE)
        if ctx.timestamp < self.refunding_start:
            raise RefundingNotStarted(PhasedVaultErrors.REFUNDING_NOT_STARTED)
        if self.held_balance >= self.goal:
            raise GoalMet(PhasedVaultErrors.GOAL_MET)

        self._enable_refunding(forced=False)

    @public
    def force_refunding(self, ctx: Context) -> None:
        """Switch to Refunding regardless of time and goal (admin only)."""
        self._require_operational()
        self._only_admin(ctx)
        if self.state != VaultState.ACTIVE:
            raise InvalidState(PhasedVaultErrors.NOT_ACTIVE)

        self._enable_refunding(forced=True)

    def _enable_refunding(self, forced: bool) -> None:
        self.state = VaultState.REFUNDING
        self.syscall.emit_event("refunding_enabled", forced=forced)
        logger.info(
            "vault %s refunding (forced=%s, held=%d)",
            self.syscall.get_contract_id().hex(),
            forced,
            self.held_balance,
        )

    @public
    def refund(self, ctx: Context, account: Address) -> None:
        """Send an account its whole deposit back and cancel its booked tokens.

        Anyone can trigger it for any account.
        """
        self._require_operational()
        if self.state != VaultState.REFUNDING:
            raise InvalidState(PhasedVaultErrors.NOT_REFUNDING)

        amount = self.deposits.get(account, Amount(0))
        if amount == 0:
            raise NothingToRefund(PhasedVaultErrors.NOTHING_TO_REFUND)

        self.deposits[account] = Amount(0)
        self.held_balance = Amount(u256_sub(self.held_balance, amount))
        booked = self.booked.get(account, Amount(0))
        if booked > 0:
            self.booked[account] = Amount(0)
            self.total_booked = Amount(u256_sub(self.total_booked, booked))
        self.syscall.emit_event("refunded", account=account.hex(), amount=amount, cancelled_tokens=booked)

        self._send_value(account, amount)

    @public
    def decommission(self, ctx: Context) -> None:
        """End the vault for good, sending the unbooked tokens to the beneficiary (admin only).

        Requires a Completed vault that reached its goal and has no valid phase left.
        """
        self._require_operational()
        self._only_admin(ctx)
        if self.state != VaultState.COMPLETED:
            raise InvalidState(PhasedVaultErrors.NOT_COMPLETED)
        now = ctx.timestamp
        if self._is_phase_valid(self._current_phase_id(now), now):
            raise PhaseStillValid(PhasedVaultErrors.PHASE_STILL_VALID)
        if self.total_raised < self.goal:
            raise GoalNotMet(PhasedVaultErrors.GOAL_NOT_MET)

        token = self.syscall.get_token(self.token_uid)
        leftover = self._unbooked_tokens(token)
        self.decommissioned = True
        self.syscall.emit_event(
            "vault_decommissioned", beneficiary=self.beneficiary.hex(), tokens=leftover
        )
        logger.info(
            "vault %s decommissioned, %d tokens to beneficiary",
            self.syscall.get_contract_id().hex(),
            leftover,
        )

        if leftover > 0:
            self._transfer_tokens(token, self.beneficiary, leftover)

    # Access control

    @public
    def transfer_admin(self, ctx: Context, new_admin: Address) -> None:
        """Hand the admin privilege over to another account (admin only)."""
        self._require_operational()
        self._only_admin(ctx)
        previous = self.admin
        self.admin = new_admin
        self.syscall.emit_event(
            "ownership_transferred", previous=previous.hex(), new=new_admin.hex()
        )

    def _is_admin(self, ctx: Context) -> bool:
        return ctx.caller_id == self.admin

    def _only_admin(self, ctx: Context) -> None:
        if not self._is_admin(ctx):
            raise Unauthorized(PhasedVaultErrors.UNAUTHORIZED)

    def _require_operational(self) -> None:
        if self.decommissioned:
            raise Decommissioned(PhasedVaultErrors.DECOMMISSIONED)

    # External transfers

    def _unbooked_tokens(self, token: TokenCollaborator) -> int:
        balance = token.balance_of(self.syscall.get_contract_id())
        return u256_sub(balance, self.total_booked)

    def _transfer_tokens(self, token: TokenCollaborator, to: Address, amount: int) -> None:
        if not token.transfer(to, amount):
            raise CollaboratorFailure(PhasedVaultErrors.TOKEN_TRANSFER_FAILED)

    def _send_value(self, to: Address, amount: int) -> None:
        if not self.syscall.send_value(to, amount):
            raise CollaboratorFailure(PhasedVaultErrors.VALUE_TRANSFER_FAILED)

    # Views

    def _now(self) -> int:
        return self.syscall.get_current_timestamp()

    @view
    def get_state_name(self) -> str:
        return STATE_NAMES[self.state]

    @view
    def get_phase_count(self) -> int:
        return self.phase_count

    @view
    def get_phase_info(self, index: int) -> PhaseInfo:
        """Get the fields of a phase."""
        if index < 0 or index >= self.phase_count:
            raise InvalidParameters(PhasedVaultErrors.INVALID_PHASE)
        capped = self.phase_capped[index]
        return PhaseInfo(
            index=index,
            expire_at=self.phase_expire_at[index],
            cap=self.phase_cap[index] if capped else None,
            rate=self.phase_rate[index],
            locked=self.phase_locked[index],
            is_valid=self._is_phase_valid(index, self._now()),
        )

    @view
    def is_phase_valid(self, index: int) -> bool:
        return self._is_phase_valid(index, self._now())

    @view
    def get_current_phase_id(self) -> int:
        return self._current_phase_id(self._now())

    @view
    def get_deposited(self, account: Address) -> int:
        return self.deposits.get(account, Amount(0))

    @view
    def get_booked(self, account: Address) -> int:
        return self.booked.get(account, Amount(0))

    @view
    def get_total_booked(self) -> int:
        return self.total_booked

    @view
    def is_unbounded(self, account: Address) -> bool:
        return self.unbounded.get(account, False)

    @view
    def is_goal_reached(self) -> bool:
        return self.total_raised >= self.goal

    @view
    def get_tokens_available(self) -> int:
        """Tokens that can still be sold.

        The unbooked token balance, bounded by what the remaining valid phases can absorb when all of them are
        capped.
        """
        token = self.syscall.get_token(self.token_uid)
        unbooked = self._unbooked_tokens(token)
        now = self._now()
        capacity = 0
        for index in range(self._current_phase_id(now), self.phase_count):
            if not self._is_phase_valid(index, now):
                continue
            if not self.phase_capped[index]:
                return unbooked
            capacity += self.phase_cap[index] * self.phase_rate[index]
        return min(unbooked, capacity)

    @view
    def get_phase_ordering_issues(self) -> list[int]:
        """Indices of phases that expire before the phase preceding them."""
        return [
            index
            for index in range(1, self.phase_count)
            if self.phase_expire_at[index] < self.phase_expire_at[index - 1]
        ]

    @view
    def get_vault_info(self) -> VaultInfo:
        """Get general vault information."""
        return VaultInfo(
            token_uid=self.token_uid.hex(),
            state=STATE_NAMES[self.state],
            admin=self.admin.hex(),
            beneficiary=self.beneficiary.hex(),
            goal=self.goal,
            refunding_start=self.refunding_start,
            min_contribution=self.min_contribution,
            max_per_account=self.max_per_account,
            held_balance=self.held_balance,
            total_raised=self.total_raised,
            total_sold=self.total_sold,
            total_booked=self.total_booked,
            participants=self.participants_count,
            phase_count=self.phase_count,
            current_phase=self._current_phase_id(self._now()),
            decommissioned=self.decommissioned,
        )

    @view
    def get_participant_info(self, account: Address) -> ParticipantInfo:
        """Get participant-specific information."""
        return ParticipantInfo(
            deposited=self.deposits.get(account, Amount(0)),
            booked=self.booked.get(account, Amount(0)),
            unbounded=self.unbounded.get(account, False),
        )
