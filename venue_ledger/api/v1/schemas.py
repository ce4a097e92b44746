"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, StrictInt
from typing import List, Optional, Union

from venue_ledger.domain.models import Balances, OperationResult, PaymentDraw

# Floats are accepted at the schema level so the ledger can answer AmountNotInteger
Amount = Union[StrictInt, float]


class SessionRequest(BaseModel):
    """Request body for POST /v1/sessions"""

    account_id: str = Field(..., min_length=1, description="Account identifier")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminSessionRequest(BaseModel):
    """Request body for POST /v1/admin/sessions"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class OpenAccountRequest(BaseModel):
    """Request body for POST /v1/admin/accounts"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)


class OpenAccountResponse(BaseModel):
    account_id: str


class AmountRequest(BaseModel):
    """Request body for deposits and withdrawals"""

    amount: Amount = Field(..., description="Amount in minor units")


class PaymentRequestSchema(BaseModel):
    """Request body for POST /v1/accounts/me/payments"""

    amount: Amount = Field(..., description="Requested amount in minor units")
    multiplier_allowed: bool = Field(False, description="Venue decides whether the multiplier applies")
    message: Optional[str] = None
    reference: Optional[str] = None


class PromotionRequest(BaseModel):
    """Request body for POST /v1/promotions"""

    account_id: str = Field(..., min_length=1)
    amount: Amount = Field(..., description="Promotional amount in minor units")
    message: Optional[str] = None


class BalancesSchema(BaseModel):
    deposited: int
    multiplied: int
    promotional: int

    @classmethod
    def from_domain(cls, balances: Balances) -> "BalancesSchema":
        return cls(
            deposited=balances.deposited,
            multiplied=balances.multiplied,
            promotional=balances.promotional,
        )


class DrawSchema(BaseModel):
    requested: int
    from_promotional: int
    from_deposited: int
    multiplied: bool

    @classmethod
    def from_domain(cls, draw: PaymentDraw) -> "DrawSchema":
        return cls(
            requested=draw.requested,
            from_promotional=draw.from_promotional,
            from_deposited=draw.from_deposited,
            multiplied=draw.multiplied,
        )


class OperationResponse(BaseModel):
    """Outcome of a ledger operation"""

    outcome: str
    balances: Optional[BalancesSchema] = None
    draw: Optional[DrawSchema] = None
    detail: Optional[str] = None

    @classmethod
    def from_result(cls, result: OperationResult) -> "OperationResponse":
        return cls(
            outcome=result.outcome.value,
            balances=BalancesSchema.from_domain(result.balances) if result.balances else None,
            draw=DrawSchema.from_domain(result.draw) if result.draw else None,
            detail=result.detail,
        )


class HistoryItem(BaseModel):
    """Single ledger entry in history"""

    kind: str
    amount: int
    deposited_after: int
    promotional_after: int
    message: Optional[str] = None
    reference: Optional[str] = None
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/accounts/me/history"""

    account_id: str
    entries: List[HistoryItem]
