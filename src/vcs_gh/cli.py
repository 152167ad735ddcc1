"""Console-script entrypoint.

The CLI itself lives in `vcs_gh.assistant.main`.
"""

from __future__ import annotations

from vcs_gh.assistant.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
