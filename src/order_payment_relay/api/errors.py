from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    AUTHENTICATION_FAILED = "authentication_failed"
    TRANSPORT = "transport"
    ORDER_CREATE_FAILED = "order_create_failed"
    INVALID_REQUEST = "invalid_request"
    INVALID_RESPONSE = "invalid_response"


class ProcessorError(RuntimeError):
    """Base class for failures talking to the payment processor.

    Each subclass pins a `kind` and carries the structured fields that
    describe it; `str(err)` stays human readable for the log.
    """

    kind: ErrorKind


class MissingCredentials(ProcessorError):
    kind = ErrorKind.MISSING_CREDENTIALS

    def __init__(self) -> None:
        super().__init__("MISSING_API_CREDENTIALS")


class AuthenticationFailed(ProcessorError):
    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, status: int, description: Optional[str]) -> None:
        self.status = status
        self.description = description
        super().__init__(
            f"Failed to generate Access Token: {description} (status={status})")


class TransportError(ProcessorError):
    kind = ErrorKind.TRANSPORT

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Transport failure for {url}: {cause}")


class OrderCreateFailed(ProcessorError):
    kind = ErrorKind.ORDER_CREATE_FAILED

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"Request failed with status {status}: {body}")


class InvalidOrderRequest(ProcessorError):
    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid order request: {detail}")


class InvalidResponse(ProcessorError):
    kind = ErrorKind.INVALID_RESPONSE

    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self.body = body
        super().__init__(
            f"Processor returned a non-JSON body (status={status}): {body!r}")


__all__ = [
    "ErrorKind",
    "ProcessorError",
    "MissingCredentials",
    "AuthenticationFailed",
    "TransportError",
    "OrderCreateFailed",
    "InvalidOrderRequest",
    "InvalidResponse",
]
