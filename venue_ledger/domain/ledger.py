"""Single-account ledger - atomic balance primitives with invariant checks"""

import threading
from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterator, Optional

from venue_ledger.domain.exceptions import LedgerInvariantError
from venue_ledger.domain.models import Account, Balances, LedgerLimits, OperationResult, Outcome
from venue_ledger.utils.money_utils import is_whole_amount


class Ledger:
    """
    Owns the mutable state of one Account.

    Every primitive takes the ledger lock for its whole check-then-mutate
    sequence and mutates only after all checks pass. The lock is re-entrant
    so the rules engine can hold it across several primitives.

    Args:
        account: Account loaded by the persistence layer
        limits: Deposit ceilings and multiplier factor
        today: Clock returning the venue's local date (drives the midnight reset)
    """

    def __init__(
        self,
        account: Account,
        limits: LedgerLimits,
        today: Callable[[], date] = date.today,
    ):
        self.account = account
        self.limits = limits
        self._today = today
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator["Ledger"]:
        """Hold the ledger lock for a multi-step read/decide/mutate sequence"""
        with self._lock:
            yield self

    @contextmanager
    def transaction(self) -> Iterator["Ledger"]:
        """
        Apply a sequence of primitives all-or-nothing.

        Snapshots the balances on entry and restores them if the block raises.
        """
        with self._lock:
            snapshot = (
                self.account.deposited_balance,
                self.account.promotional_balance,
                self.account.deposited_today,
                self.account.deposited_on,
            )
            try:
                yield self
            except BaseException:
                (
                    self.account.deposited_balance,
                    self.account.promotional_balance,
                    self.account.deposited_today,
                    self.account.deposited_on,
                ) = snapshot
                raise

    def balances(self) -> Balances:
        with self._lock:
            return Balances(
                deposited=self.account.deposited_balance,
                promotional=self.account.promotional_balance,
                multiplier_factor=self.limits.multiplier_factor,
            )

    def deposited_today(self) -> int:
        """Deposits made on the current local day; 0 once midnight has passed"""
        with self._lock:
            if self.account.deposited_on != self._today():
                return 0
            return self.account.deposited_today

    def deposit(self, amount: int) -> OperationResult:
        invalid = validate_amount(amount)
        if invalid:
            return invalid

        with self._lock:
            today = self._today()
            deposited_today = self.account.deposited_today if self.account.deposited_on == today else 0

            if amount + deposited_today > self.limits.daily_deposit_limit:
                return OperationResult.failure(
                    Outcome.MAX_DEPOSIT_PER_DAY_EXCEEDED,
                    f"{deposited_today} already deposited today, limit {self.limits.daily_deposit_limit}",
                )
            if amount + self.account.deposited_balance > self.limits.max_deposited_balance:
                return OperationResult.failure(
                    Outcome.MAX_DEPOSITED_AMOUNT_EXCEEDED,
                    f"account may hold at most {self.limits.max_deposited_balance}",
                )

            self.account.deposited_balance += amount
            self.account.deposited_today = deposited_today + amount
            self.account.deposited_on = today
            return OperationResult(Outcome.SUCCESS, balances=self.balances())

    def withdraw(self, amount: int) -> OperationResult:
        invalid = validate_amount(amount)
        if invalid:
            return invalid

        with self._lock:
            if amount > self.account.deposited_balance:
                return OperationResult.failure(Outcome.NOT_ENOUGH_MONEY)
            self.account.deposited_balance -= amount
            return OperationResult(Outcome.SUCCESS, balances=self.balances())

    def credit_promotion(self, amount: int, message: Optional[str] = None) -> OperationResult:
        """Grant promotional money; message is recorded by the caller, not here"""
        invalid = validate_amount(amount)
        if invalid:
            return invalid

        with self._lock:
            self.account.promotional_balance += amount
            return OperationResult(Outcome.SUCCESS, balances=self.balances())

    def debit_promotion(self, amount: int) -> OperationResult:
        """Payment primitive; zero is a valid debit"""
        return self._debit("promotional_balance", amount)

    def debit_deposit(self, amount: int) -> OperationResult:
        """Payment primitive; zero is a valid debit (a multiplied draw may round to 0)"""
        return self._debit("deposited_balance", amount)

    def _debit(self, attribute: str, amount: int) -> OperationResult:
        if not is_whole_amount(amount):
            return OperationResult.failure(Outcome.AMOUNT_NOT_INTEGER)
        if amount < 0:
            raise LedgerInvariantError(f"negative debit of {amount} from {attribute}")

        with self._lock:
            current = getattr(self.account, attribute)
            if amount > current:
                return OperationResult.failure(Outcome.NOT_ENOUGH_MONEY)
            setattr(self.account, attribute, current - amount)
            return OperationResult(Outcome.SUCCESS, balances=self.balances())


def validate_amount(amount: int) -> Optional[OperationResult]:
    """Reject non-integer and non-positive amounts before any mutation"""
    if not is_whole_amount(amount):
        return OperationResult.failure(Outcome.AMOUNT_NOT_INTEGER)
    if amount <= 0:
        return OperationResult.failure(Outcome.AMOUNT_NOT_POSITIVE)
    return None
