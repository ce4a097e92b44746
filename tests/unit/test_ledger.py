"""Unit tests for ledger balance primitives"""

import pytest
from datetime import timedelta
from venue_ledger.domain.models import Outcome


def test_deposit_increments_balance_and_daily_total(make_ledger):
    """Test successful deposit moves both counters by the amount"""
    ledger = make_ledger(deposited=2000, deposited_today=1000)

    result = ledger.deposit(3000)

    assert result.outcome is Outcome.SUCCESS
    assert ledger.account.deposited_balance == 5000
    assert ledger.account.deposited_today == 4000
    assert result.balances.deposited == 5000


def test_deposit_exactly_at_daily_limit(make_ledger):
    """Test daily limit is inclusive"""
    ledger = make_ledger(deposited_today=4000)

    result = ledger.deposit(6000)

    assert result.ok
    assert ledger.account.deposited_today == 10_000


def test_deposit_over_daily_limit_leaves_state_untouched(make_ledger):
    """Test daily limit violation reports its code with zero mutation"""
    ledger = make_ledger(deposited=1000, deposited_today=9000)

    result = ledger.deposit(1001)

    assert result.outcome is Outcome.MAX_DEPOSIT_PER_DAY_EXCEEDED
    assert result.balances is None
    assert ledger.account.deposited_balance == 1000
    assert ledger.account.deposited_today == 9000


def test_deposit_over_max_balance_leaves_state_untouched(make_ledger):
    """Test balance ceiling violation reports its code with zero mutation"""
    ledger = make_ledger(deposited=45_000, deposited_today=0)

    result = ledger.deposit(5001)

    assert result.outcome is Outcome.MAX_DEPOSITED_AMOUNT_EXCEEDED
    assert ledger.account.deposited_balance == 45_000
    assert ledger.account.deposited_today == 0


def test_deposit_daily_limit_checked_before_balance_ceiling(make_ledger):
    """Test a deposit breaking both rules reports the daily limit"""
    ledger = make_ledger(deposited=49_000, deposited_today=9_500)

    assert ledger.deposit(1000).outcome is Outcome.MAX_DEPOSIT_PER_DAY_EXCEEDED


def test_daily_total_resets_after_midnight(make_ledger, clock):
    """Test yesterday's deposits do not count against today's limit"""
    ledger = make_ledger(deposited=10_000, deposited_today=10_000)
    assert ledger.deposit(1).outcome is Outcome.MAX_DEPOSIT_PER_DAY_EXCEEDED

    clock.today = clock.today + timedelta(days=1)

    assert ledger.deposited_today() == 0
    result = ledger.deposit(10_000)
    assert result.ok
    assert ledger.account.deposited_today == 10_000
    assert ledger.account.deposited_on == clock.today
    assert ledger.account.deposited_balance == 20_000


@pytest.mark.parametrize("amount", [10.5, 100.0, "100", None, True])
def test_non_integer_amounts_rejected(make_ledger, amount):
    """Test non-int amounts are rejected by every primitive"""
    ledger = make_ledger(deposited=5000, promotional=5000)

    assert ledger.deposit(amount).outcome is Outcome.AMOUNT_NOT_INTEGER
    assert ledger.withdraw(amount).outcome is Outcome.AMOUNT_NOT_INTEGER
    assert ledger.credit_promotion(amount).outcome is Outcome.AMOUNT_NOT_INTEGER
    assert ledger.debit_deposit(amount).outcome is Outcome.AMOUNT_NOT_INTEGER
    assert ledger.account.deposited_balance == 5000
    assert ledger.account.promotional_balance == 5000


@pytest.mark.parametrize("amount", [0, -1, -5000])
def test_non_positive_amounts_rejected(make_ledger, amount):
    ledger = make_ledger(deposited=5000)

    assert ledger.deposit(amount).outcome is Outcome.AMOUNT_NOT_POSITIVE
    assert ledger.withdraw(amount).outcome is Outcome.AMOUNT_NOT_POSITIVE
    assert ledger.credit_promotion(amount).outcome is Outcome.AMOUNT_NOT_POSITIVE
    assert ledger.account.deposited_balance == 5000


def test_withdraw_decrements_deposited_balance(make_ledger):
    ledger = make_ledger(deposited=5000, promotional=700)

    result = ledger.withdraw(5000)

    assert result.ok
    assert ledger.account.deposited_balance == 0
    assert ledger.account.promotional_balance == 700


def test_withdraw_more_than_deposited_fails(make_ledger):
    """Test promotional money cannot be withdrawn"""
    ledger = make_ledger(deposited=5000, promotional=10_000)

    result = ledger.withdraw(5001)

    assert result.outcome is Outcome.NOT_ENOUGH_MONEY
    assert ledger.account.deposited_balance == 5000


def test_credit_promotion_is_not_bounded_by_deposit_limits(make_ledger):
    ledger = make_ledger(deposited=50_000, deposited_today=10_000)

    result = ledger.credit_promotion(25_000, "Opening night")

    assert result.ok
    assert ledger.account.promotional_balance == 25_000
    assert ledger.account.deposited_today == 10_000


def test_debit_primitives_refuse_to_go_negative(make_ledger):
    ledger = make_ledger(deposited=100, promotional=50)

    assert ledger.debit_promotion(51).outcome is Outcome.NOT_ENOUGH_MONEY
    assert ledger.debit_deposit(101).outcome is Outcome.NOT_ENOUGH_MONEY
    assert ledger.debit_promotion(50).ok
    assert ledger.debit_deposit(0).ok
    assert ledger.account.promotional_balance == 0
    assert ledger.account.deposited_balance == 100


def test_transaction_restores_balances_when_block_raises(make_ledger):
    """Test all-or-nothing application of several primitives"""
    ledger = make_ledger(deposited=1000, promotional=500)

    with pytest.raises(RuntimeError):
        with ledger.transaction():
            ledger.debit_promotion(500)
            ledger.debit_deposit(200)
            raise RuntimeError("abort")

    assert ledger.account.promotional_balance == 500
    assert ledger.account.deposited_balance == 1000


def test_balances_report_multiplied_spending_power(make_ledger):
    ledger = make_ledger(deposited=1000, promotional=250)

    balances = ledger.balances()

    assert balances.deposited == 1000
    assert balances.multiplied == 3000
    assert balances.promotional == 250
