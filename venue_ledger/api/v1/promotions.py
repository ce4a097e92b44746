"""POST /v1/promotions - grant promotional money (admin only)"""

from fastapi import APIRouter, Depends

from venue_ledger.api.v1.outcomes import to_response
from venue_ledger.api.v1.schemas import OperationResponse, PromotionRequest
from venue_ledger.api.dependencies import get_account_service, require_admin
from venue_ledger.infrastructure.security import SessionClaims
from venue_ledger.services.account_service import AccountService

router = APIRouter()


@router.post("/promotions", response_model=OperationResponse)
def grant_promotion(
    request_body: PromotionRequest,
    admin: SessionClaims = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
):
    """
    Credit promotional money to any account.

    Returns 404 InvalidAccount when the account does not exist.
    """
    result = service.grant_promotion(request_body.account_id, request_body.amount, request_body.message)
    return to_response(result)
