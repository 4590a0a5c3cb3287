"""HTTP error rendering

Routes raise ClientError with the failed Result's Error; the app-level
handler renders it as {"error": {...}}.
"""

from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error

ERROR_STATUS_CODES = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_AMOUNT": status.HTTP_400_BAD_REQUEST,
    "ACCOUNT_INACTIVE": status.HTTP_409_CONFLICT,
    "INSUFFICIENT_BALANCE": status.HTTP_402_PAYMENT_REQUIRED,
    "POLICY_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
}


def status_for(code: str) -> int:
    return ERROR_STATUS_CODES.get(code, status.HTTP_400_BAD_REQUEST)


class ClientError(Exception):
    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error.code)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    headers = {"Retry-After": "1"} if exc.error.retryable else None
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.error.code,
                "message": exc.error.message,
                "reason": exc.error.reason,
                "details": exc.error.details,
            }
        },
        headers=headers,
    )
