#!/usr/bin/env python3
"""Configuration dataclasses and constants for skeleton."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_ORG = "cisagov"
DEFAULT_BRANCH = "develop"
DEFAULT_API_URL = "https://api.github.com"
SKELETON_TOPIC = "skeleton"

FIRST_COMMITS_BRANCH = "first-commits"
FIRST_COMMITS_TITLE = "First commits"
RENAME_COMMIT_MESSAGE = "Rename repository references after clone"
LINEAGE_COMMIT_MESSAGE = "Add lineage configuration"
LINEAGE_PATH = ".github/lineage.yml"
LINEAGE_VERSION = "1"
NO_PUSH_URL = "no_push"
REQUIRED_STATUS_CHECK = "lint"
REQUIRED_APPROVING_REVIEWS = 2


class Command(Enum):
    """Enumeration for the supported sub-commands."""
    LIST = "list"
    CLONE = "clone"


class RemoteOutcome(Enum):
    """Result of reconciling the destination repository with GitHub."""
    EXISTS = "exists"
    CREATED = "created"
    FAILED = "failed"


@dataclass(frozen=True)
class Config:
    """Main configuration, built once from the command line."""
    command: Command
    src_org: str = DEFAULT_ORG
    dest_org: str = DEFAULT_ORG
    default_branch: str = DEFAULT_BRANCH
    parent_repo: Optional[str] = None
    new_repo: Optional[str] = None
    change_dir: str = "."
    api_url: str = DEFAULT_API_URL


def api_url_from_env() -> str:
    """Return the GitHub API URL, honouring GITHUB_API_URL for Enterprise."""
    return os.getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")
