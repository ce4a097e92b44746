"""Rules engine - core business logic for venue account operations"""

import logging
from datetime import date
from typing import Callable, Optional

from venue_ledger.domain.exceptions import LedgerInvariantError
from venue_ledger.domain.ledger import Ledger, validate_amount
from venue_ledger.domain.models import (
    Account,
    Balances,
    LedgerLimits,
    OperationResult,
    Outcome,
    PaymentDraw,
    PaymentRequest,
)
from venue_ledger.utils.money_utils import divide_round_half_up

logger = logging.getLogger(__name__)


def plan_payment_draw(
    request: PaymentRequest,
    promotional_balance: int,
    deposited_balance: int,
    multiplier_factor: int,
) -> Optional[PaymentDraw]:
    """
    Decide how much of each balance a payment request consumes.

    Rules:
    - Multiplier raises the spending power of the deposited balance only;
      promotional money is never multiplied
    - Promotional money is always spent before deposited money
    - A multiplied deposit draw is the remainder divided by the factor,
      rounded half-up to a whole minor unit

    Returns:
        PaymentDraw, or None when both balances together cannot cover the request

    Example:
        promotional=0, deposited=1000, factor=3, amount=3000 multiplied
        → draw 0 promotional, 1000 deposited
    """
    amount = request.amount
    multiplied = request.multiplier_allowed
    spending_power = deposited_balance * multiplier_factor if multiplied else deposited_balance

    if amount > promotional_balance + spending_power:
        return None

    from_promotional = min(amount, promotional_balance)
    remainder = amount - from_promotional

    if remainder == 0:
        from_deposited = 0
    elif multiplied:
        from_deposited = divide_round_half_up(remainder, multiplier_factor)
    else:
        from_deposited = remainder

    return PaymentDraw(
        requested=amount,
        from_promotional=from_promotional,
        from_deposited=from_deposited,
        multiplied=multiplied,
    )


class RulesEngine:
    """
    Stateless decision logic applied to a Ledger.

    Input validation runs here before any Ledger call, so callers can tell bad
    input (AmountNotInteger, AmountNotPositive) apart from rule violations.
    Unexpected faults become Unknown and are logged; they never mutate state.
    """

    def __init__(self, limits: LedgerLimits, today: Callable[[], date] = date.today):
        self.limits = limits
        self.today = today

    def open_ledger(self, account: Account) -> Ledger:
        """Wrap a loaded account in a Ledger bound to this engine's limits and clock"""
        return Ledger(account, self.limits, today=self.today)

    def balances(self, ledger: Ledger) -> Balances:
        return ledger.balances()

    def deposit(self, ledger: Ledger, amount: int) -> OperationResult:
        invalid = validate_amount(amount)
        if invalid:
            return invalid
        return self._guarded("deposit", ledger, lambda: ledger.deposit(amount))

    def withdraw(self, ledger: Ledger, amount: int) -> OperationResult:
        invalid = validate_amount(amount)
        if invalid:
            return invalid
        return self._guarded("withdraw", ledger, lambda: ledger.withdraw(amount))

    def grant_promotion(self, ledger: Ledger, amount: int, message: Optional[str] = None) -> OperationResult:
        invalid = validate_amount(amount)
        if invalid:
            return invalid
        return self._guarded("grant_promotion", ledger, lambda: ledger.credit_promotion(amount, message))

    def authorize_payment(self, ledger: Ledger, request: PaymentRequest) -> OperationResult:
        """
        Draw a payment from promotional money first, then deposited money.

        Both debits run in one ledger transaction: if the second one fails the
        first is rolled back and nothing posts.
        """
        invalid = validate_amount(request.amount)
        if invalid:
            return invalid
        return self._guarded("authorize_payment", ledger, lambda: self._authorize(ledger, request))

    def _authorize(self, ledger: Ledger, request: PaymentRequest) -> OperationResult:
        with ledger.locked():
            snapshot = ledger.balances()
            draw = plan_payment_draw(
                request,
                promotional_balance=snapshot.promotional,
                deposited_balance=snapshot.deposited,
                multiplier_factor=snapshot.multiplier_factor,
            )
            if draw is None:
                return OperationResult.failure(Outcome.NOT_ENOUGH_MONEY)

            try:
                with ledger.transaction():
                    for debit, amount in (
                        (ledger.debit_promotion, draw.from_promotional),
                        (ledger.debit_deposit, draw.from_deposited),
                    ):
                        if amount == 0:
                            continue
                        result = debit(amount)
                        if not result.ok:
                            raise _DebitRejected(result)
            except _DebitRejected as rejected:
                logger.warning(
                    "Payment debit rejected after planning, rolled back",
                    extra={"account_id": ledger.account.account_id, "outcome": rejected.result.outcome.value},
                )
                return rejected.result

            return OperationResult(Outcome.SUCCESS, balances=ledger.balances(), draw=draw)

    def _guarded(self, operation: str, ledger: Ledger, action) -> OperationResult:
        try:
            return action()
        except LedgerInvariantError as e:
            logger.exception(
                f"Ledger invariant violated during {operation}: {e}",
                extra={"account_id": ledger.account.account_id, "operation": operation},
            )
            return OperationResult.failure(Outcome.UNKNOWN, str(e))
        except Exception as e:
            logger.exception(
                f"Unexpected error during {operation}: {e}",
                extra={"account_id": ledger.account.account_id, "operation": operation},
            )
            return OperationResult.failure(Outcome.UNKNOWN, "internal error")


class _DebitRejected(Exception):
    def __init__(self, result: OperationResult):
        super().__init__(result.outcome.value)
        self.result = result
