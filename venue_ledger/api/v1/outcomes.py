"""Map ledger outcomes to HTTP responses"""

from fastapi import HTTPException, status

from venue_ledger.api.v1.schemas import OperationResponse
from venue_ledger.domain.models import OperationResult, Outcome


def http_status_for(outcome: Outcome) -> int:
    """Business outcomes are 200 with the code in the body; access and internal faults are not"""
    match outcome:
        case (
            Outcome.SUCCESS
            | Outcome.AMOUNT_NOT_INTEGER
            | Outcome.AMOUNT_NOT_POSITIVE
            | Outcome.NOT_ENOUGH_MONEY
            | Outcome.MAX_DEPOSIT_PER_DAY_EXCEEDED
            | Outcome.MAX_DEPOSITED_AMOUNT_EXCEEDED
        ):
            return status.HTTP_200_OK
        case Outcome.AUTHORIZATION_FAILURE:
            return status.HTTP_401_UNAUTHORIZED
        case Outcome.INVALID_ACCOUNT:
            return status.HTTP_404_NOT_FOUND
        case Outcome.UNKNOWN:
            return status.HTTP_500_INTERNAL_SERVER_ERROR
    raise ValueError(f"Unmapped outcome: {outcome!r}")


def to_response(result: OperationResult) -> OperationResponse:
    status_code = http_status_for(result.outcome)
    if status_code != status.HTTP_200_OK:
        raise HTTPException(status_code=status_code, detail=result.outcome.value)
    return OperationResponse.from_result(result)
