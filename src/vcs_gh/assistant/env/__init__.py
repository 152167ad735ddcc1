"""Dotenv loading and environment access."""

from vcs_gh.assistant.env.accessor import get_delimited, split_delimited
from vcs_gh.assistant.env.loader import DotenvLoader, LoadError, LoadOutcome, load_dotenv
from vcs_gh.assistant.env.store import EnvStore, MemoryEnvStore, OsEnvStore

__all__ = [
    "DotenvLoader",
    "EnvStore",
    "LoadError",
    "LoadOutcome",
    "MemoryEnvStore",
    "OsEnvStore",
    "get_delimited",
    "load_dotenv",
    "split_delimited",
]
