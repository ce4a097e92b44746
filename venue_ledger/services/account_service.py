"""Account service - load, apply a ledger operation, save, record entries"""

import logging
import time
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from venue_ledger.domain.exceptions import AccountNotFoundError
from venue_ledger.domain.ledger import Ledger
from venue_ledger.domain.models import (
    Balances,
    LedgerEntry,
    OperationResult,
    Outcome,
    PaymentRequest,
)
from venue_ledger.domain.rules import RulesEngine
from venue_ledger.infrastructure.database.models import LedgerEntryRecord
from venue_ledger.infrastructure.database.repositories import AccountRepository, EntryRepository
from venue_ledger.infrastructure.observability.logging import log_operation
from venue_ledger.infrastructure.observability.metrics import record_operation
from venue_ledger.services.locks import AccountLockRegistry

logger = logging.getLogger(__name__)


class AccountService:
    """
    Runs each ledger operation for one account as a single unit of work.

    Flow:
    1. Take the account's lock
    2. Load the account (missing → InvalidAccount)
    3. Apply the rules engine to a Ledger over the loaded state
    4. On success save balances and ledger entries and commit; otherwise roll back
    5. Record metrics and a structured log line
    """

    def __init__(
        self,
        db: Session,
        engine: RulesEngine,
        locks: AccountLockRegistry,
        request_id: str = "unknown",
    ):
        self.db = db
        self.engine = engine
        self.locks = locks
        self.request_id = request_id
        self.accounts = AccountRepository(db)
        self.entries = EntryRepository(db)

    def balances(self, account_id: str) -> Balances:
        """
        Raises:
            AccountNotFoundError: No account with this ID
        """
        with self.locks.for_account(account_id):
            account = self.accounts.load(account_id)
            self.db.rollback()  # release the row lock taken by load
            return self.engine.balances(self.engine.open_ledger(account))

    def history(self, account_id: str, limit: int = 20) -> List[LedgerEntryRecord]:
        return self.entries.get_entries_by_account(account_id, limit=limit)

    def deposit(self, account_id: str, amount: int) -> OperationResult:
        return self._run(
            "deposit",
            account_id,
            amount,
            lambda ledger: self.engine.deposit(ledger, amount),
            lambda ledger, result: [_entry(ledger, result, "deposit", amount)],
        )

    def withdraw(self, account_id: str, amount: int) -> OperationResult:
        return self._run(
            "withdraw",
            account_id,
            amount,
            lambda ledger: self.engine.withdraw(ledger, amount),
            lambda ledger, result: [_entry(ledger, result, "withdrawal", amount)],
        )

    def grant_promotion(self, account_id: str, amount: int, message: Optional[str]) -> OperationResult:
        return self._run(
            "promotion",
            account_id,
            amount,
            lambda ledger: self.engine.grant_promotion(ledger, amount, message),
            lambda ledger, result: [_entry(ledger, result, "promotion", amount, message=message)],
        )

    def authorize_payment(self, account_id: str, request: PaymentRequest) -> OperationResult:
        return self._run(
            "payment",
            account_id,
            request.amount,
            lambda ledger: self.engine.authorize_payment(ledger, request),
            lambda ledger, result: _payment_entries(ledger, result, request),
        )

    def _run(
        self,
        operation: str,
        account_id: str,
        amount: int,
        apply: Callable[[Ledger], OperationResult],
        entries_for: Callable[[Ledger, OperationResult], List[LedgerEntry]],
    ) -> OperationResult:
        start_time = time.time()
        with self.locks.for_account(account_id):
            try:
                result = self._apply_and_persist(account_id, apply, entries_for)
            except AccountNotFoundError:
                self.db.rollback()
                result = OperationResult.failure(Outcome.INVALID_ACCOUNT)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception(
                    f"Persistence error during {operation}: {e}",
                    extra={"request_id": self.request_id, "account_id": account_id},
                )
                result = OperationResult.failure(Outcome.UNKNOWN, "persistence error")
            except Exception as e:
                self.db.rollback()
                logger.exception(
                    f"Unexpected error during {operation}: {e}",
                    extra={"request_id": self.request_id, "account_id": account_id},
                )
                result = OperationResult.failure(Outcome.UNKNOWN, "internal error")

        duration_ms = (time.time() - start_time) * 1000
        record_operation(operation, amount, result)
        log_operation(self.request_id, account_id, operation, result.outcome.value, amount, duration_ms)
        return result

    def _apply_and_persist(
        self,
        account_id: str,
        apply: Callable[[Ledger], OperationResult],
        entries_for: Callable[[Ledger, OperationResult], List[LedgerEntry]],
    ) -> OperationResult:
        account = self.accounts.load(account_id)
        ledger = self.engine.open_ledger(account)
        result = apply(ledger)

        if not result.ok:
            self.db.rollback()
            return result

        self.accounts.save(ledger.account)
        self.entries.add_entries(entries_for(ledger, result))
        self.db.commit()
        return result


def _entry(
    ledger: Ledger,
    result: OperationResult,
    kind: str,
    amount: int,
    message: Optional[str] = None,
    reference: Optional[str] = None,
) -> LedgerEntry:
    return LedgerEntry(
        account_id=ledger.account.account_id,
        kind=kind,
        amount=amount,
        deposited_after=result.balances.deposited,
        promotional_after=result.balances.promotional,
        message=message,
        reference=reference,
    )


def _payment_entries(ledger: Ledger, result: OperationResult, request: PaymentRequest) -> List[LedgerEntry]:
    """One entry per balance drawn; the promotional draw posts first"""
    draw = result.draw
    balances = result.balances
    entries = []
    if draw.from_promotional:
        entries.append(
            LedgerEntry(
                account_id=ledger.account.account_id,
                kind="payment_promotional",
                amount=draw.from_promotional,
                deposited_after=balances.deposited + draw.from_deposited,
                promotional_after=balances.promotional,
                message=request.message,
                reference=request.reference,
            )
        )
    if draw.from_deposited:
        entries.append(
            _entry(
                ledger,
                result,
                "payment_deposited",
                draw.from_deposited,
                message=request.message,
                reference=request.reference,
            )
        )
    return entries
