"""
Core primitives: configuration, errors, transport and request dispatch.
"""

from .config import (
    API_BASE_URL,
    VERSION,
    ClientParameters,
    Config,
    ConfigBuilder,
    ConfigError,
    Environment,
    load_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    DecodingError,
    ErrorDetail,
    NetworkError,
    NetworkErrorKind,
    NotFoundError,
    PayrexError,
    RateLimitError,
    ServerError,
    UnknownApiError,
    ValidationError,
)
from .outcome import Failure, Outcome, Success
from .transport import HttpxTransport, RawResponse, RequestsTransport, Transport
from .dispatcher import Dispatcher, RequestDescriptor
from .facade import ResourceFacade
from .client import Client

__all__ = [
    "API_BASE_URL",
    "VERSION",
    "ApiError",
    "AuthenticationError",
    "Client",
    "ClientEnvironment",
    "ClientParameters",
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "ConfigurationError",
    "DecodingError",
    "Dispatcher",
    "Environment",
    "ErrorDetail",
    "Failure",
    "HttpxTransport",
    "NetworkError",
    "NetworkErrorKind",
    "NotFoundError",
    "Outcome",
    "PayrexError",
    "RateLimitError",
    "RawResponse",
    "RequestDescriptor",
    "RequestsTransport",
    "ResourceFacade",
    "ServerError",
    "Success",
    "Transport",
    "UnknownApiError",
    "ValidationError",
    "build_environment",
    "load_config",
    "load_env_file",
]
