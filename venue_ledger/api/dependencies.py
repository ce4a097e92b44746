"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from venue_ledger.config import settings
from venue_ledger.domain.exceptions import AuthorizationError
from venue_ledger.domain.rules import RulesEngine
from venue_ledger.infrastructure.clients.payout import PayoutClient
from venue_ledger.infrastructure.database.session import get_db
from venue_ledger.infrastructure.security import ROLE_ACCOUNT, ROLE_ADMIN, SessionClaims, decode_access_token
from venue_ledger.services.account_service import AccountService
from venue_ledger.services.auth_service import AuthService
from venue_ledger.services.locks import AccountLockRegistry
from venue_ledger.utils.date_utils import local_clock

bearer = HTTPBearer(auto_error=False)

# Shared across requests: limits come from settings, locks must outlive a request
rules_engine = RulesEngine(settings.ledger_limits(), today=local_clock(settings.timezone))
account_locks = AccountLockRegistry()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rules_engine() -> RulesEngine:
    return rules_engine


def get_account_locks() -> AccountLockRegistry:
    return account_locks


def get_account_service(
    request: Request,
    db: Session = Depends(get_db),
    engine: RulesEngine = Depends(get_rules_engine),
    locks: AccountLockRegistry = Depends(get_account_locks),
) -> AccountService:
    return AccountService(db, engine, locks, request_id=get_request_id(request))


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_payout_client() -> PayoutClient:
    """Provide payout webhook client instance"""
    return PayoutClient()


def get_session_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> SessionClaims:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AuthorizationFailure")
    try:
        return decode_access_token(credentials.credentials)
    except AuthorizationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AuthorizationFailure")


def get_current_account_id(claims: SessionClaims = Depends(get_session_claims)) -> str:
    if claims.role != ROLE_ACCOUNT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account session required")
    return claims.subject


def require_admin(claims: SessionClaims = Depends(get_session_claims)) -> SessionClaims:
    if claims.role != ROLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin session required")
    return claims
