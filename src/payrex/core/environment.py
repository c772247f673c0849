"""
Resolution of the ``PAYREX_*`` settings.

A deployment usually keeps ``PAYREX_API_KEY`` (and optionally
``PAYREX_API_BASE_URL``, ``PAYREX_TIMEOUT_SECONDS``, ``PAYREX_MAX_RETRIES``
or ``PAYREX_ENVIRONMENT``) in the process environment or in a ``.env`` file
next to the application. The ``payrex`` CLI adds ``--set KEY=VALUE``
overrides on top. Overrides win over the process environment, which wins over the
``.env`` file. Unrelated variables pass through untouched and are ignored
by :meth:`payrex.core.config.Config.from_mapping`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

__all__ = [
    "ClientEnvironment",
    "build_environment",
    "load_env_file",
]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the ``KEY=VALUE`` lines of a ``.env`` file into ``environ``.

    Lines may start with ``export`` and values may be quoted. A key that is
    already set, for instance a ``PAYREX_API_KEY`` exported by the shell, keeps
    its value. A missing file is not an error.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    """Variables after layering, read by ``Config.from_mapping``."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Layer the process environment, a ``.env`` file and explicit overrides.

    ``base`` replaces :data:`os.environ`. With ``env_file=None`` no file is
    read.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return ClientEnvironment(variables=merged)
