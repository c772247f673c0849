"""
Configuration objects and helpers for the PayRex client.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "API_BASE_URL",
    "MAX_RETRIES_LIMIT",
    "VERSION",
    "ClientParameters",
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "Environment",
    "load_config",
]

VERSION = "0.1.0"
API_BASE_URL = "https://api.payrexhq.com"
MAX_RETRIES_LIMIT = 10

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 0.5
DEFAULT_MAX_RETRY_DELAY_SECONDS = 30.0
DEFAULT_USER_AGENT = f"payrex-python/{VERSION}"

_PARAMETER_TO_ENV_KEY = {
    "api_key": "PAYREX_API_KEY",
    "api_base_url": "PAYREX_API_BASE_URL",
    "timeout": "PAYREX_TIMEOUT_SECONDS",
    "max_retries": "PAYREX_MAX_RETRIES",
    "retry_delay": "PAYREX_RETRY_DELAY_SECONDS",
    "max_retry_delay": "PAYREX_MAX_RETRY_DELAY_SECONDS",
    "environment": "PAYREX_ENVIRONMENT",
    "user_agent": "PAYREX_USER_AGENT",
}


class Environment(str, enum.Enum):
    LIVE = "live"
    TEST = "test"

    @classmethod
    def parse(cls, value: "Environment | str") -> "Environment":
        if isinstance(value, Environment):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ConfigError(
                f"environment must be 'live' or 'test', got '{value}'",
                fields=("environment",),
            ) from exc


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Environment):
        return value.value
    return str(value)


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "****"
    return f"{secret[:7]}...{secret[-4:]}"


@dataclass(frozen=True)
class Config:
    """Validated, immutable client settings. Build one with :class:`ConfigBuilder`."""

    api_key: str = field(repr=False)
    api_base_url: str = API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS
    max_retry_delay: float = DEFAULT_MAX_RETRY_DELAY_SECONDS
    environment: Environment = Environment.LIVE
    user_agent: str = DEFAULT_USER_AGENT

    def __repr__(self) -> str:
        return (
            f"Config(api_key='{_mask(self.api_key)}', api_base_url={self.api_base_url!r}, "
            f"timeout={self.timeout!r}, max_retries={self.max_retries!r}, "
            f"retry_delay={self.retry_delay!r}, max_retry_delay={self.max_retry_delay!r}, "
            f"environment={self.environment.value!r})"
        )

    @property
    def is_test_mode(self) -> bool:
        return self.environment is Environment.TEST

    @staticmethod
    def builder() -> "ConfigBuilder":
        return ConfigBuilder()

    @classmethod
    def new(cls, api_key: str) -> "Config":
        """Default configuration for ``api_key``."""
        return ConfigBuilder().api_key(api_key).build()

    def url_for(self, path: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "Config":
        """Build a configuration from ``PAYREX_*`` variables."""
        builder = ConfigBuilder().api_key(values.get("PAYREX_API_KEY", ""))

        if "PAYREX_API_BASE_URL" in values:
            builder = builder.api_base_url(values["PAYREX_API_BASE_URL"])
        if "PAYREX_TIMEOUT_SECONDS" in values:
            builder = builder.timeout(_parse_number(values, "PAYREX_TIMEOUT_SECONDS", float))
        if "PAYREX_MAX_RETRIES" in values:
            builder = builder.max_retries(_parse_number(values, "PAYREX_MAX_RETRIES", int))
        if "PAYREX_RETRY_DELAY_SECONDS" in values:
            builder = builder.retry_delay(
                _parse_number(values, "PAYREX_RETRY_DELAY_SECONDS", float)
            )
        if "PAYREX_MAX_RETRY_DELAY_SECONDS" in values:
            builder = builder.max_retry_delay(
                _parse_number(values, "PAYREX_MAX_RETRY_DELAY_SECONDS", float)
            )
        if "PAYREX_ENVIRONMENT" in values:
            builder = builder.environment(values["PAYREX_ENVIRONMENT"])
        if "PAYREX_USER_AGENT" in values:
            builder = builder.user_agent(values["PAYREX_USER_AGENT"])
        return builder.build()

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional["ClientParameters"] = None,
        **explicit: Any,
    ) -> "Config":
        parameter_overrides = _collect_parameter_overrides(parameters, explicit)
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def _parse_number(values: Mapping[str, str], key: str, kind: type) -> Any:
    raw = values[key]
    try:
        return kind(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"{key} must be a valid {kind.__name__}, got '{raw}'",
            fields=(key,),
        ) from exc


@dataclass(frozen=True)
class ConfigBuilder:
    """
    Fluent, immutable builder for :class:`Config`.

    Every setter returns a new builder; nothing is validated until
    :meth:`build`, which reports all invalid fields at once.
    """

    _api_key: Optional[str] = field(default=None, repr=False)
    _api_base_url: str = API_BASE_URL
    _timeout: float = DEFAULT_TIMEOUT_SECONDS
    _max_retries: int = DEFAULT_MAX_RETRIES
    _retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS
    _max_retry_delay: float = DEFAULT_MAX_RETRY_DELAY_SECONDS
    _environment: "Environment | str" = Environment.LIVE
    _user_agent: str = DEFAULT_USER_AGENT

    def api_key(self, api_key: str) -> "ConfigBuilder":
        return replace(self, _api_key=api_key)

    def api_base_url(self, url: str) -> "ConfigBuilder":
        return replace(self, _api_base_url=url)

    def timeout(self, seconds: float) -> "ConfigBuilder":
        return replace(self, _timeout=seconds)

    def max_retries(self, count: int) -> "ConfigBuilder":
        return replace(self, _max_retries=count)

    def retry_delay(self, seconds: float) -> "ConfigBuilder":
        return replace(self, _retry_delay=seconds)

    def max_retry_delay(self, seconds: float) -> "ConfigBuilder":
        return replace(self, _max_retry_delay=seconds)

    def environment(self, environment: "Environment | str") -> "ConfigBuilder":
        return replace(self, _environment=environment)

    def test_mode(self, enabled: bool = True) -> "ConfigBuilder":
        return replace(self, _environment=Environment.TEST if enabled else Environment.LIVE)

    def user_agent(self, user_agent: str) -> "ConfigBuilder":
        return replace(self, _user_agent=user_agent)

    def build(self) -> Config:
        problems: List[str] = []
        invalid: List[str] = []

        def reject(name: str, reason: str) -> None:
            invalid.append(name)
            problems.append(f"{name} {reason}")

        api_key = (self._api_key or "").strip()
        if not api_key:
            reject("api_key", "must not be empty")

        base_url = (self._api_base_url or "").strip().rstrip("/")
        if not base_url.startswith(("https://", "http://")):
            reject("api_base_url", "must be an http(s) URL")

        if not _is_number(self._timeout) or self._timeout <= 0:
            reject("timeout", "must be greater than zero")

        if (
            isinstance(self._max_retries, bool)
            or not isinstance(self._max_retries, int)
            or not 0 <= self._max_retries <= MAX_RETRIES_LIMIT
        ):
            reject("max_retries", f"must be an integer between 0 and {MAX_RETRIES_LIMIT}")

        delay_ok = _is_number(self._retry_delay) and self._retry_delay >= 0
        if not delay_ok:
            reject("retry_delay", "must not be negative")
        if not _is_number(self._max_retry_delay) or (
            delay_ok and self._max_retry_delay < self._retry_delay
        ):
            reject("max_retry_delay", "must be at least retry_delay")

        environment: Optional[Environment] = None
        try:
            environment = Environment.parse(self._environment)
        except ConfigError:
            reject("environment", "must be 'live' or 'test'")

        if not (self._user_agent or "").strip():
            reject("user_agent", "must not be empty")

        if invalid or environment is None:
            raise ConfigError("Invalid configuration: " + "; ".join(problems), fields=invalid)

        return Config(
            api_key=api_key,
            api_base_url=base_url,
            timeout=float(self._timeout),
            max_retries=self._max_retries,
            retry_delay=float(self._retry_delay),
            max_retry_delay=float(self._max_retry_delay),
            environment=environment,
            user_agent=self._user_agent.strip(),
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for :func:`load_config`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly.
    """

    api_key: Optional[str] = None
    api_base_url: Optional[str] = None
    timeout: Optional[float | str] = None
    max_retries: Optional[int | str] = None
    retry_delay: Optional[float | str] = None
    max_retry_delay: Optional[float | str] = None
    environment: Optional[Environment | str] = None
    user_agent: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def load_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    **explicit: Any,
) -> Config:
    """
    Convenience wrapper that mirrors :meth:`Config.from_env`.

    The configuration can come from environment variables, a ``.env`` file,
    keyword arguments (``api_key=...``, ``timeout=...``), or any combination.
    """
    return Config.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        **explicit,
    )
