"""Ledger operations on the authenticated account"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from venue_ledger.api.v1.outcomes import to_response
from venue_ledger.api.v1.schemas import (
    AmountRequest,
    BalancesSchema,
    HistoryItem,
    HistoryResponse,
    OperationResponse,
    PaymentRequestSchema,
)
from venue_ledger.api.dependencies import get_account_service, get_current_account_id, get_payout_client
from venue_ledger.config import settings
from venue_ledger.domain.exceptions import AccountNotFoundError
from venue_ledger.domain.models import PaymentRequest
from venue_ledger.infrastructure.clients.payout import PayoutClient
from venue_ledger.services.account_service import AccountService

router = APIRouter()


@router.get("/accounts/me/balances", response_model=BalancesSchema)
def get_balances(
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """Deposited, multiplied (deposited x factor) and promotional balances"""
    try:
        balances = service.balances(account_id)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail="InvalidAccount")
    return BalancesSchema.from_domain(balances)


@router.post("/accounts/me/deposits", response_model=OperationResponse)
def deposit(
    request_body: AmountRequest,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    return to_response(service.deposit(account_id, request_body.amount))


@router.post("/accounts/me/withdrawals", response_model=OperationResponse)
def withdraw(
    request_body: AmountRequest,
    background_tasks: BackgroundTasks,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
    payout_client: PayoutClient = Depends(get_payout_client),
):
    """
    Debit the deposited balance.

    The payout service is notified only after the debit commits.
    """
    result = service.withdraw(account_id, request_body.amount)
    response = to_response(result)

    if result.ok:
        background_tasks.add_task(
            payout_client.send_withdrawal_event,
            {
                "event": "WITHDRAWAL_APPROVED",
                "account_id": account_id,
                "amount": request_body.amount,
                "request_id": service.request_id,
            },
        )
    return response


@router.post("/accounts/me/payments", response_model=OperationResponse)
def authorize_payment(
    request_body: PaymentRequestSchema,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """
    Authorize a venue payment request.

    Promotional money is spent first; the multiplier, when the venue allows
    it, only stretches the deposited balance.
    """
    payment = PaymentRequest(
        amount=request_body.amount,
        multiplier_allowed=request_body.multiplier_allowed,
        message=request_body.message,
        reference=request_body.reference,
    )
    return to_response(service.authorize_payment(account_id, payment))


@router.get("/accounts/me/history", response_model=HistoryResponse)
def get_history(
    limit: int = Query(settings.history_limit, ge=1, le=100),
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """Recent ledger entries, newest first"""
    entries = service.history(account_id, limit=limit)
    return HistoryResponse(
        account_id=account_id,
        entries=[
            HistoryItem(
                kind=e.kind,
                amount=e.amount,
                deposited_after=e.deposited_after,
                promotional_after=e.promotional_after,
                message=e.message,
                reference=e.reference,
                created_at=e.created_at.isoformat(),
            )
            for e in entries
        ],
    )
