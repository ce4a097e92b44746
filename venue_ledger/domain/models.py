"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    """Explicit result codes reported by every ledger operation"""

    SUCCESS = "Success"
    AMOUNT_NOT_INTEGER = "AmountNotInteger"
    AMOUNT_NOT_POSITIVE = "AmountNotPositive"
    NOT_ENOUGH_MONEY = "NotEnoughMoney"
    MAX_DEPOSIT_PER_DAY_EXCEEDED = "MaxDepositPerDayExceeded"
    MAX_DEPOSITED_AMOUNT_EXCEEDED = "MaxDepositedAmountExceeded"
    AUTHORIZATION_FAILURE = "AuthorizationFailure"
    INVALID_ACCOUNT = "InvalidAccount"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class LedgerLimits:
    """Business ceilings and the multiplier, all in minor units"""

    daily_deposit_limit: int = 10_000
    max_deposited_balance: int = 50_000
    multiplier_factor: int = 3

    def __post_init__(self) -> None:
        if self.multiplier_factor <= 0:
            raise ValueError("multiplier_factor must be positive")
        if self.daily_deposit_limit < 0 or self.max_deposited_balance < 0:
            raise ValueError("limits must be non-negative")


@dataclass
class Account:
    """Venue account holding deposited and promotional money"""

    account_id: str
    deposited_balance: int = 0
    promotional_balance: int = 0
    deposited_today: int = 0
    deposited_on: Optional[date] = None  # local day deposited_today refers to


@dataclass(frozen=True)
class PaymentRequest:
    """Venue payment request, consumed once by authorization"""

    amount: int
    multiplier_allowed: bool = False
    message: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class Balances:
    """Snapshot of an account's spendable money"""

    deposited: int
    promotional: int
    multiplier_factor: int

    @property
    def multiplied(self) -> int:
        """Spending power of the deposited balance when the multiplier applies"""
        return self.deposited * self.multiplier_factor


@dataclass(frozen=True)
class PaymentDraw:
    """Exact amounts debited from each balance by one authorization"""

    requested: int
    from_promotional: int
    from_deposited: int
    multiplied: bool


@dataclass(frozen=True)
class OperationResult:
    """Tagged result: one outcome plus its payload on success"""

    outcome: Outcome
    balances: Optional[Balances] = None
    draw: Optional[PaymentDraw] = None
    detail: Optional[str] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @classmethod
    def failure(cls, outcome: Outcome, detail: Optional[str] = None) -> "OperationResult":
        return cls(outcome=outcome, detail=detail)


@dataclass(frozen=True)
class LedgerEntry:
    """One recorded balance movement"""

    account_id: str
    kind: str  # deposit | withdrawal | promotion | payment_promotional | payment_deposited
    amount: int
    deposited_after: int
    promotional_after: int
    message: Optional[str] = None
    reference: Optional[str] = None
