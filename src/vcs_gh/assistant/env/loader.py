"""Dotenv loader.

Reads `KEY=VALUE` lines into an `EnvStore`:

- blank lines and lines starting with `#` are ignored
- a leading `export ` is dropped
- values may be single/double quoted (backslash escapes the next character,
  `#` is kept) or bare (cut at the first unescaped `#`, trimmed)
- `${NAME}` is expanded once against the store as it is at that moment;
  unknown names become the empty string, an unclosed `${` stays literal
- later lines win over earlier ones
- an unreadable file is treated as missing

When nothing could be loaded and a human is at the terminal, the loader
offers to collect entries interactively and appends them to the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from vcs_gh.assistant.console import Console
from vcs_gh.assistant.env.store import EnvStore, OsEnvStore

logger = logging.getLogger(__name__)

_EXPORT_PREFIX = "export "
_QUOTES = ('"', "'")


class LoadError(OSError):
    """The dotenv file could not be written during interactive entry."""


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    path: Path
    file_found: bool
    entries_set: int
    skipped: int = 0
    interactive_added: int = 0
    keys: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_set(self) -> int:
        return self.entries_set + self.interactive_added


@dataclass(frozen=True, slots=True)
class ParsedLine:
    key: str
    raw_value: str


def parse_line(line: str) -> ParsedLine | None:
    """Split one dotenv line into key and unparsed value.

    Returns None for blank lines, comments, and malformed lines.
    """

    s = line.strip()
    if not s or s.startswith("#"):
        return None
    if s.startswith(_EXPORT_PREFIX):
        s = s[len(_EXPORT_PREFIX) :]

    key, sep, raw_value = s.partition("=")
    if not sep:
        return None
    key = key.strip()
    if not key:
        return None
    return ParsedLine(key=key, raw_value=raw_value)


def parse_value(raw: str) -> str:
    """Apply quoting and inline-comment rules to a raw value."""

    s = raw.lstrip()
    if not s:
        return ""

    if s[0] in _QUOTES:
        quote = s[0]
        out: list[str] = []
        i = 1
        while i < len(s) and s[i] != quote:
            if s[i] == "\\" and i + 1 < len(s):
                i += 1
            out.append(s[i])
            i += 1
        return "".join(out)

    out = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == "#":
            break
        if ch == "\\" and s[i + 1 : i + 2] == "#":
            out.append("#")
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out).strip()


def expand_vars(value: str, store: EnvStore) -> str:
    """Replace `${NAME}` references with their current values (single pass)."""

    out: list[str] = []
    i = 0
    while i < len(value):
        if value.startswith("${", i):
            end = value.find("}", i + 2)
            if end != -1:
                name = value[i + 2 : end]
                out.append(store.get(name) or "")
                i = end + 1
                continue
        out.append(value[i])
        i += 1
    return "".join(out)


def _read_lines(path: Path) -> list[str] | None:
    """Return the file's lines, or None when it cannot be opened.

    Bytes that are not valid UTF-8 are replaced rather than rejected.
    """

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(
            "Dotenv file could not be read; treating it as missing",
            extra={"path": str(path), "error": str(e)},
        )
        return None
    return text.splitlines()


class DotenvLoader:
    """Load a dotenv file into a store, with an optional interactive fallback."""

    def __init__(self, store: EnvStore | None = None, console: Console | None = None) -> None:
        self._store: EnvStore = store if store is not None else OsEnvStore()
        self._console = console

    @property
    def store(self) -> EnvStore:
        return self._store

    def load(self, path: Path | str) -> LoadOutcome:
        path = Path(path)
        lines = _read_lines(path) if path.is_file() else None
        file_found = lines is not None
        keys: list[str] = []
        skipped = 0

        for lineno, line in enumerate(lines or [], start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            parsed = parse_line(line)
            if parsed is None:
                skipped += 1
                logger.debug(
                    "Skipping malformed dotenv line",
                    extra={"path": str(path), "line_number": lineno},
                )
                continue
            value = expand_vars(parse_value(parsed.raw_value), self._store)
            self._store.set(parsed.key, value)
            keys.append(parsed.key)

        outcome = LoadOutcome(
            path=path,
            file_found=file_found,
            entries_set=len(keys),
            skipped=skipped,
            keys=tuple(keys),
        )
        logger.info(
            "Dotenv loaded",
            extra={
                "path": str(path),
                "file_found": file_found,
                "entries_set": outcome.entries_set,
                "skipped": skipped,
            },
        )

        if outcome.entries_set == 0 and self._console is not None and self._console.interactive:
            added = self._offer_interactive_entry(path, file_found=file_found)
            outcome = LoadOutcome(
                path=path,
                file_found=file_found,
                entries_set=0,
                skipped=skipped,
                interactive_added=added,
                keys=tuple(keys),
            )
        return outcome

    def _offer_interactive_entry(self, path: Path, *, file_found: bool) -> int:
        console = self._console
        assert console is not None

        if file_found:
            console.write(f"No environment variables were set from '{path}'.")
        else:
            console.write(f"No .env file found at '{path}'.")
        answer = console.prompt(f"Would you like to create/append entries to '{path}' now? (y/N): ")
        if not answer.strip().lower().startswith("y"):
            return 0

        added = self.append_interactively(path)
        if added == 0:
            console.write("No entries added.")
        else:
            console.write(f"Added {added} env entries to {path} and set them in the process.")
        return added

    def append_interactively(self, path: Path) -> int:
        """Read `KEY=VALUE` lines until a blank one, appending and setting each.

        Raises:
            LoadError: if the file cannot be opened or written.
        """

        console = self._console
        if console is None:
            return 0

        try:
            fh = path.open("a", encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Cannot open {path} for appending: {e}") from e

        added = 0
        with fh:
            console.write("Enter KEY=VALUE pairs (one per line). Empty line finishes.")
            while True:
                entry = console.prompt("> ").strip()
                if not entry:
                    break

                key, sep, value = entry.partition("=")
                if not sep:
                    console.write("Invalid format (missing '='). Use KEY=VALUE.")
                    continue
                key = key.strip()
                if not key:
                    console.write("Key is empty.")
                    continue

                try:
                    fh.write(entry + "\n")
                    fh.flush()
                except OSError as e:
                    raise LoadError(f"Cannot write to {path}: {e}") from e

                self._store.set(key, value)
                added += 1
                logger.info("Dotenv entry added", extra={"path": str(path), "key": key})
        return added


def load_dotenv(
    path: Path | str = ".env",
    *,
    store: EnvStore | None = None,
    console: Console | None = None,
) -> LoadOutcome:
    """Convenience wrapper around `DotenvLoader(store, console).load(path)`."""

    return DotenvLoader(store=store, console=console).load(path)
