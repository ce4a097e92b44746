"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AccountNotFoundError(DomainException):
    """No account exists with the given identifier"""

    pass


class AuthorizationError(DomainException):
    """Credentials or session token do not grant access to the account"""

    pass


class LedgerInvariantError(DomainException):
    """A ledger invariant was violated mid-transaction"""

    pass


class PayoutNotificationError(DomainException):
    """Payout service rejected or never acknowledged a withdrawal event"""

    pass


class AccountAlreadyExistsError(DomainException):
    """Username is already taken by another account"""

    pass
