from __future__ import annotations

from vcs_gh.assistant.env.store import EnvStore, OsEnvStore


def split_delimited(value: str, delimiter: str | None = None) -> list[str]:
    """Split `value` on any character of `delimiter`, trimming and dropping empties.

    Example: `"  a ; b ,c  "` with `";"` -> `["a", "b ,c"]`.
    """

    if not delimiter:
        stripped = value.strip()
        return [stripped] if stripped else []

    first = delimiter[0]
    normalized = value.translate({ord(ch): first for ch in delimiter})
    return [token.strip() for token in normalized.split(first) if token.strip()]


def get_delimited(
    key: str,
    delimiter: str | None = None,
    store: EnvStore | None = None,
) -> list[str] | None:
    """Read `key` from the store as a trimmed list.

    Returns None when the variable is unset, empty, or has no non-blank tokens;
    a returned list is never empty.
    """

    env = store if store is not None else OsEnvStore()
    raw = env.get(key)
    if not raw:
        return None
    return split_delimited(raw, delimiter) or None
