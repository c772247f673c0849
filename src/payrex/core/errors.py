"""
Error taxonomy shared by every PayRex operation.

Transport failures become :class:`NetworkError`; responses that arrive but
cannot be parsed become :class:`DecodingError`; every non-2xx response becomes
one of the :class:`ApiError` subclasses, chosen from the HTTP status first and
refined with whatever the provider put in the body.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Type

__all__ = [
    "ApiError",
    "AuthenticationError",
    "ConfigError",
    "ConfigurationError",
    "DecodingError",
    "ErrorDetail",
    "NetworkError",
    "NetworkErrorKind",
    "NotFoundError",
    "PayrexError",
    "RateLimitError",
    "ServerError",
    "UnknownApiError",
    "ValidationError",
    "error_from_response",
]


class PayrexError(Exception):
    """Base class for every error raised or returned by the client."""

    retryable = False

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
    ) -> None:
        if not message or not str(message).strip():
            raise ValueError(f"{type(self).__name__} requires a message")
        super().__init__(message)
        self.message = str(message)
        self.code = code
        self.status_code = status_code
        self.request_id = request_id

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.code:
            parts.append(f"code={self.code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        if len(parts) == 1:
            return self.message
        return f"{parts[0]} ({', '.join(parts[1:])})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r}, request_id={self.request_id!r})"
        )


class ConfigurationError(PayrexError):
    """Raised when the client configuration is invalid. No request is sent."""

    def __init__(self, message: str, *, fields: Sequence[str] = ()) -> None:
        super().__init__(message, code="configuration_error")
        self.fields: Tuple[str, ...] = tuple(fields)


ConfigError = ConfigurationError


class NetworkErrorKind(str, enum.Enum):
    TIMEOUT = "timeout"
    CONNECTION_FAILED = "connection_failed"
    TLS_FAILED = "tls_failed"


class NetworkError(PayrexError):
    """The request never produced an HTTP response."""

    retryable = True

    def __init__(self, kind: NetworkErrorKind, message: str) -> None:
        super().__init__(message, code=NetworkErrorKind(kind).value)
        self.kind = NetworkErrorKind(kind)


class DecodingError(PayrexError):
    """A successful response did not match the expected schema."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
        body: str = "",
    ) -> None:
        super().__init__(
            message,
            code="decoding_error",
            status_code=status_code,
            request_id=request_id,
        )
        self.body = body[:512]


@dataclass(frozen=True)
class ErrorDetail:
    """One error entry reported by the provider."""

    code: Optional[str] = None
    detail: Optional[str] = None
    parameter: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ErrorDetail":
        return cls(
            code=_as_text(payload.get("code")),
            detail=_as_text(payload.get("detail") or payload.get("message")),
            parameter=_as_text(payload.get("parameter") or payload.get("param")),
        )


class ApiError(PayrexError):
    """The provider answered with a non-2xx status."""

    default_message = "PayRex API request failed"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: Optional[str] = None,
        request_id: Optional[str] = None,
        errors: Sequence[ErrorDetail] = (),
    ) -> None:
        super().__init__(
            message, code=code, status_code=status_code, request_id=request_id
        )
        self.errors: Tuple[ErrorDetail, ...] = tuple(errors)


class AuthenticationError(ApiError):
    """401/403: the credential is missing, invalid, expired or not allowed."""

    default_message = "Authentication with the PayRex API failed"


class ValidationError(ApiError):
    """400/422: the provider rejected the request parameters."""

    default_message = "The request was rejected as invalid"

    @property
    def field_errors(self) -> Dict[str, str]:
        """Map each offending parameter to the provider's explanation."""
        return {
            item.parameter: item.detail or item.code or ""
            for item in self.errors
            if item.parameter
        }


class NotFoundError(ApiError):
    default_message = "The requested resource does not exist"


class RateLimitError(ApiError):
    """429: throttled. ``retry_after`` carries the provider hint in seconds."""

    retryable = True
    default_message = "Too many requests"

    def __init__(self, message: str, *, retry_after: Optional[float] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ApiError):
    retryable = True
    default_message = "The PayRex API reported an internal error"


class UnknownApiError(ApiError):
    default_message = "The PayRex API returned an unexpected response"


_STATUS_TO_ERROR: Dict[int, Type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
}


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _error_class_for(status_code: int) -> Type[ApiError]:
    if status_code in _STATUS_TO_ERROR:
        return _STATUS_TO_ERROR[status_code]
    if 500 <= status_code <= 599:
        return ServerError
    return UnknownApiError


def _parse_error_body(body: str) -> Tuple[Optional[str], Optional[str], Tuple[ErrorDetail, ...]]:
    """Return ``(code, message, details)`` from a provider error body.

    Understands ``{"errors": [...]}``, ``{"error": {...}}`` and a flat
    ``{"code": ..., "message": ...}`` object. Anything else yields nothing.
    """
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        return None, None, ()
    if not isinstance(payload, dict):
        return None, None, ()

    details: Tuple[ErrorDetail, ...] = ()
    raw_errors = payload.get("errors")
    if isinstance(raw_errors, list):
        details = tuple(
            ErrorDetail.from_response(item) for item in raw_errors if isinstance(item, dict)
        )

    nested = payload.get("error")
    source: Mapping[str, Any] = nested if isinstance(nested, dict) else payload
    code = _as_text(source.get("code"))
    message = _as_text(source.get("message") or source.get("detail"))
    if isinstance(nested, str) and message is None:
        message = _as_text(nested)

    if details:
        first = details[0]
        code = code or first.code
        message = message or "; ".join(
            item.detail for item in details if item.detail
        ) or None
    return code, message, details


def error_from_response(
    status_code: int,
    body: str,
    *,
    request_id: Optional[str] = None,
    retry_after: Optional[float] = None,
) -> ApiError:
    """Classify a non-2xx response into the matching :class:`ApiError`."""
    error_cls = _error_class_for(status_code)
    code, message, details = _parse_error_body(body)
    message = message or f"{error_cls.default_message} (HTTP {status_code})"
    kwargs: Dict[str, Any] = {
        "status_code": status_code,
        "code": code,
        "request_id": request_id,
        "errors": details,
    }
    if error_cls is RateLimitError:
        return RateLimitError(message, retry_after=retry_after, **kwargs)
    return error_cls(message, **kwargs)
