"""Authentication - exchange credentials for a session token"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from venue_ledger.config import settings
from venue_ledger.domain.exceptions import AccountAlreadyExistsError, AccountNotFoundError, AuthorizationError
from venue_ledger.domain.models import Account
from venue_ledger.infrastructure.database.repositories import AccountRepository
from venue_ledger.infrastructure.security import (
    ROLE_ACCOUNT,
    ROLE_ADMIN,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies credentials; ledger operations only ever see the resulting token"""

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountRepository(db)

    def authenticate(self, account_id: str, username: str, password: str) -> str:
        """
        Raises:
            AccountNotFoundError: Unknown account ID
            AuthorizationError: Username or password does not match the account
        """
        record = self.accounts.get_record(account_id)
        if record is None:
            raise AccountNotFoundError(f"Account {account_id} does not exist")

        if record.username != username or not verify_password(password, record.password_hash):
            logger.warning("Login rejected", extra={"account_id": account_id})
            raise AuthorizationError("Credentials do not match the account")

        return create_access_token(account_id, ROLE_ACCOUNT)

    def authenticate_admin(self, username: str, password: str) -> str:
        """
        Raises:
            AuthorizationError: Admin login disabled or credentials wrong
        """
        if not settings.admin_password_hash:
            raise AuthorizationError("Admin login is disabled")
        if username != settings.admin_username or not verify_password(password, settings.admin_password_hash):
            logger.warning("Admin login rejected", extra={"username": username})
            raise AuthorizationError("Invalid admin credentials")
        return create_access_token(username, ROLE_ADMIN)

    def open_account(self, username: str, password: str) -> Account:
        """
        Create an empty account with login credentials.

        Raises:
            AccountAlreadyExistsError: Username already in use
        """
        try:
            account = self.accounts.create(username=username, password_hash=hash_password(password))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AccountAlreadyExistsError(f"Username {username} is taken") from e
        logger.info("Account opened", extra={"account_id": account.account_id})
        return account
