"""Key-value stores standing in for the process environment.

The loader and the workflow only ever talk to an `EnvStore`. Production code
uses `OsEnvStore`; tests and batch runs can inject a `MemoryEnvStore` so the
real environment is left untouched.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol


class EnvStore(Protocol):
    """Minimal get/set/list interface over an environment table."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def items(self) -> list[tuple[str, str]]: ...

    def __contains__(self, key: object) -> bool: ...


class OsEnvStore:
    """Store backed by `os.environ`."""

    def get(self, key: str) -> str | None:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def items(self) -> list[tuple[str, str]]:
        return sorted(os.environ.items())

    def __contains__(self, key: object) -> bool:
        return key in os.environ


class MemoryEnvStore:
    """Dict-backed store, optionally seeded from a mapping."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def items(self) -> list[tuple[str, str]]:
        return sorted(self._values.items())

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"MemoryEnvStore({self._values!r})"
