"""Settings for the assistant itself.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The workflow data (`USERNAMES`, `EMAILS`, `URLS`, `REPO_NAMES`) is not part of
these settings: it is read by the dotenv loader into the environment and
queried with `get_delimited`, because the workflow may add to it interactively
while running.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantSettings(BaseSettings):
    """Settings for the vcs-gh assistant.

    Environment variables:
    - VCS_GH_ENV_FILE        (optional)
    - LOG_LEVEL              (optional)
    - VCS_GH_LOG_FILE        (optional)
    - VCS_GH_REMOTE          (optional)
    - VCS_GH_CACHE_BRANCH    (optional)
    - VCS_GH_PR_BODY         (optional)
    - VCS_GH_LIST_DELIMITER  (optional)
    - VCS_GH_ADMIN_ACTIONS   (optional)
    - VCS_GH_PROGRESS_DELAY  (optional)

    Notes:
        Tests can skip the `.env` lookup via `AssistantSettings(_env_file=None)`.
    """

    env_file: Path = Field(
        default=Path(".env"),
        validation_alias="VCS_GH_ENV_FILE",
        description="Dotenv file holding USERNAMES/EMAILS/URLS/REPO_NAMES",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_file: Path | None = Field(
        default=None,
        validation_alias="VCS_GH_LOG_FILE",
        description="Write logs to this file instead of stderr",
    )

    remote: str = Field(
        default="origin",
        validation_alias="VCS_GH_REMOTE",
        description="Remote used for push, fetch and branch deletion",
    )
    cache_branch: str = Field(
        default="_cache_",
        validation_alias="VCS_GH_CACHE_BRANCH",
        description="Disposable branch that snapshots work before a fetch reset",
    )
    pr_body: str = Field(
        default="Auto-generated PR by vcs-gh",
        validation_alias="VCS_GH_PR_BODY",
        description="Body used for pull requests opened by the push flow",
    )
    list_delimiter: str = Field(
        default=";",
        validation_alias="VCS_GH_LIST_DELIMITER",
        description="Characters separating items in list-valued variables",
    )
    admin_actions: bool = Field(
        default=True,
        validation_alias="VCS_GH_ADMIN_ACTIONS",
        description="Show the commit/delete entries in the main menu",
    )
    progress_delay: float = Field(
        default=0.45,
        ge=0.0,
        validation_alias="VCS_GH_PROGRESS_DELAY",
        description="Seconds between dots of progress messages",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _validate(self) -> AssistantSettings:
        if not self.list_delimiter:
            raise ValueError("VCS_GH_LIST_DELIMITER must not be empty")
        if not self.remote.strip():
            raise ValueError("VCS_GH_REMOTE must not be empty")
        if not self.cache_branch.strip():
            raise ValueError("VCS_GH_CACHE_BRANCH must not be empty")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level}")
        return self
