"""Semantic commit vocabulary and title formatting."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommitType:
    name: str
    description: str

    @property
    def label(self) -> str:
        return f"{self.name:<9} - {self.description}"


COMMIT_TYPES: tuple[CommitType, ...] = (
    CommitType("feat", "new user-facing feature"),
    CommitType("fix", "bug fix"),
    CommitType("refactor", "no behavior change"),
    CommitType("perf", "performance improvement"),
    CommitType("test", "add or update tests"),
    CommitType("docs", "documentation only"),
    CommitType("chore", "tooling, config, deps"),
    CommitType("build", "build system changes"),
    CommitType("ci", "CI/CD pipeline changes"),
    CommitType("style", "formatting only"),
    CommitType("revert", "revert previous change"),
)

NO_SCOPE = "none"

SCOPES: tuple[str, ...] = ("auth", "api", "ui", "db", "cli", "build", "infra", NO_SCOPE)


def format_title(commit_type: str, scope: str, title: str) -> str:
    """`feat(auth): add login button`; the `none` scope drops the parentheses."""

    if scope == NO_SCOPE:
        return f"{commit_type}: {title}"
    return f"{commit_type}({scope}): {title}"
