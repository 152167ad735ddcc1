"""vcs-gh.

A terminal assistant for everyday git/GitHub chores:
- git identity selection from a `.env` file
- cloning a configured set of repositories
- a menu for branch + semantic commit + pull request, fetch-and-reset,
  quick commits and remote branch deletion
"""

__version__ = "1.2.4"

from vcs_gh.assistant.config import AssistantSettings

__all__ = ["__version__", "AssistantSettings"]
