"""POST /v1/sessions - exchange credentials for a session token"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from venue_ledger.api.v1.schemas import (
    AdminSessionRequest,
    OpenAccountRequest,
    OpenAccountResponse,
    SessionRequest,
    SessionResponse,
)
from venue_ledger.api.dependencies import get_auth_service, require_admin
from venue_ledger.domain.exceptions import AccountAlreadyExistsError, AccountNotFoundError, AuthorizationError
from venue_ledger.infrastructure.security import SessionClaims
from venue_ledger.services.auth_service import AuthService

router = APIRouter()


@router.post("/sessions", response_model=SessionResponse)
def create_session(
    request_body: SessionRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Authenticate against an account.

    Returns:
        Bearer token required by every /v1/accounts/me endpoint
    """
    try:
        token = auth.authenticate(request_body.account_id, request_body.username, request_body.password)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail="InvalidAccount")
    except AuthorizationError:
        raise HTTPException(status_code=401, detail="AuthorizationFailure")
    return SessionResponse(access_token=token)


@router.post("/admin/sessions", response_model=SessionResponse)
def create_admin_session(
    request_body: AdminSessionRequest,
    auth: AuthService = Depends(get_auth_service),
):
    try:
        token = auth.authenticate_admin(request_body.username, request_body.password)
    except AuthorizationError:
        raise HTTPException(status_code=401, detail="AuthorizationFailure")
    return SessionResponse(access_token=token)


@router.post("/admin/accounts", response_model=OpenAccountResponse, status_code=201)
def open_account(
    request_body: OpenAccountRequest,
    admin: SessionClaims = Depends(require_admin),
    auth: AuthService = Depends(get_auth_service),
):
    try:
        account = auth.open_account(request_body.username, request_body.password)
    except AccountAlreadyExistsError as e:
        logging.warning(f"Open account rejected: {e}", extra={"admin": admin.subject})
        raise HTTPException(status_code=409, detail=str(e))
    return OpenAccountResponse(account_id=account.account_id)
