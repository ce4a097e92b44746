"""Data access layer for venue accounts and ledger entries"""

from typing import List, Optional
from sqlalchemy.orm import Session
from venue_ledger.infrastructure.database.models import VenueAccount, LedgerEntryRecord
from venue_ledger.domain.models import Account, LedgerEntry
from venue_ledger.domain.exceptions import AccountNotFoundError


class AccountRepository:
    """Repository for venue accounts"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, username: str, password_hash: str, account_id: Optional[str] = None) -> Account:
        """Open an empty account"""
        record = VenueAccount(username=username, password_hash=password_hash)
        if account_id:
            record.id = account_id
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return _to_domain(record)

    def get_record(self, account_id: str) -> Optional[VenueAccount]:
        return self.db.get(VenueAccount, account_id)

    def load(self, account_id: str) -> Account:
        """
        Fetch account balances, locking the row where the database supports it.

        Raises:
            AccountNotFoundError: No account with this ID
        """
        record = (
            self.db.query(VenueAccount)
            .filter(VenueAccount.id == account_id)
            .with_for_update()
            .first()
        )
        if record is None:
            raise AccountNotFoundError(f"Account {account_id} does not exist")
        return _to_domain(record)

    def save(self, account: Account) -> None:
        """Write back balances mutated by the ledger"""
        record = self.db.get(VenueAccount, account.account_id)
        if record is None:
            raise AccountNotFoundError(f"Account {account.account_id} does not exist")
        record.deposited_balance = account.deposited_balance
        record.promotional_balance = account.promotional_balance
        record.deposited_today = account.deposited_today
        record.deposited_on = account.deposited_on
        self.db.flush()


class EntryRepository:
    """Repository for ledger entries"""

    def __init__(self, db: Session):
        self.db = db

    def add_entries(self, entries: List[LedgerEntry]) -> None:
        for entry in entries:
            self.db.add(
                LedgerEntryRecord(
                    account_id=entry.account_id,
                    kind=entry.kind,
                    amount=entry.amount,
                    deposited_after=entry.deposited_after,
                    promotional_after=entry.promotional_after,
                    message=entry.message,
                    reference=entry.reference,
                )
            )
        self.db.flush()

    def get_entries_by_account(self, account_id: str, limit: int = 20) -> List[LedgerEntryRecord]:
        """Fetch recent entries for an account, newest first"""
        return (
            self.db.query(LedgerEntryRecord)
            .filter(LedgerEntryRecord.account_id == account_id)
            .order_by(LedgerEntryRecord.id.desc())
            .limit(limit)
            .all()
        )


def _to_domain(record: VenueAccount) -> Account:
    return Account(
        account_id=record.id,
        deposited_balance=record.deposited_balance,
        promotional_balance=record.promotional_balance,
        deposited_today=record.deposited_today,
        deposited_on=record.deposited_on,
    )
