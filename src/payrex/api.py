"""
Public, high-level helpers for building a PayRex client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import Client
from .core.config import (
    ClientParameters,
    Config,
    ConfigError,
    Environment,
    load_config,
)
from .core.environment import ClientEnvironment, build_environment, load_env_file
from .core.transport import Transport

__all__ = [
    "Client",
    "ClientEnvironment",
    "ClientParameters",
    "Config",
    "ConfigError",
    "Environment",
    "build_environment",
    "create_client",
    "load_config",
    "load_env_file",
]


def create_client(
    *,
    config: Optional[Config] = None,
    session: Optional[requests.Session] = None,
    transport: Optional[Transport] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    api_base_url: Optional[str] = None,
    timeout: Optional[float | str] = None,
    max_retries: Optional[int | str] = None,
    retry_delay: Optional[float | str] = None,
    max_retry_delay: Optional[float | str] = None,
    environment: Optional[Environment | str] = None,
    user_agent: Optional[str] = None,
) -> Client:
    """
    Construct a :class:`Client`.

    Callers can either supply a ready-made :class:`Config` or let the helper
    assemble one from ``PAYREX_*`` environment data, a ``.env`` file and
    keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            api_base_url,
            timeout,
            max_retries,
            retry_delay,
            max_retry_delay,
            environment,
            user_agent,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError("Provide either a pre-built Config or individual parameters, not both.")
        cfg = config
    else:
        cfg = load_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            api_key=api_key,
            api_base_url=api_base_url,
            timeout=timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
            max_retry_delay=max_retry_delay,
            environment=environment,
            user_agent=user_agent,
        )
    return Client(cfg, transport=transport, session=session)
