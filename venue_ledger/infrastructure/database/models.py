"""SQLAlchemy ORM models for venue accounts and their ledger entries"""

import uuid
from sqlalchemy import Column, String, BigInteger, Integer, Date, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class VenueAccount(Base):
    """Account balances and login credentials"""

    __tablename__ = "venue_account"
    __table_args__ = (
        CheckConstraint("deposited_balance >= 0", name="ck_deposited_non_negative"),
        CheckConstraint("promotional_balance >= 0", name="ck_promotional_non_negative"),
        CheckConstraint("deposited_today >= 0", name="ck_deposited_today_non_negative"),
    )

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    deposited_balance = Column(BigInteger, nullable=False, default=0)
    promotional_balance = Column(BigInteger, nullable=False, default=0)
    deposited_today = Column(BigInteger, nullable=False, default=0)
    deposited_on = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    entries = relationship("LedgerEntryRecord", back_populates="account", cascade="all, delete-orphan")


class LedgerEntryRecord(Base):
    """Append-only record of one balance movement"""

    __tablename__ = "ledger_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(64), ForeignKey("venue_account.id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    deposited_after = Column(BigInteger, nullable=False)
    promotional_after = Column(BigInteger, nullable=False)
    message = Column(Text, nullable=True)
    reference = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    account = relationship("VenueAccount", back_populates="entries")
