"""git and gh command wrappers."""

from vcs_gh.assistant.git.client import GitClient, GitHubCli
from vcs_gh.assistant.git.runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = ["CommandResult", "CommandRunner", "GitClient", "GitHubCli", "SubprocessRunner"]
