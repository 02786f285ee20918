#!/usr/bin/env python3
"""Discovery of skeleton repositories in a GitHub organization."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List

import github

from config import SKELETON_TOPIC
from logging_utils import Logger

# Exit codes
EXIT_GITHUB_ERROR = 1

NAME_COLUMN_WIDTH = 30


@dataclass(frozen=True)
class Skeleton:
    name: str
    description: str


class SkeletonSource:
    """Search wrapper returning the skeletons an organization offers."""

    def __init__(self, api: github.Github, topic: str = SKELETON_TOPIC) -> None:
        self.api = api
        self.topic = topic

    def query(self, org: str) -> str:
        return f"org:{org} topic:{self.topic} archived:false"

    def list_skeletons(self, org: str) -> List[Skeleton]:
        """Return every non-archived skeleton in org, sorted by name."""
        Logger.debug(f"searching: {self.query(org)}")
        skeletons: List[Skeleton] = []
        try:
            # PaginatedList walks every page of the search results
            for repo in self.api.search_repositories(query=self.query(org)):
                if getattr(repo, "archived", False):
                    continue
                skeletons.append(Skeleton(repo.name, repo.description or ""))
        except github.GithubException as e:
            Logger.error(f"failed to search skeletons in '{org}': {e}")
            sys.exit(EXIT_GITHUB_ERROR)

        return sorted(skeletons, key=lambda skeleton: skeleton.name)


def render_skeletons(skeletons: List[Skeleton]) -> List[str]:
    return [
        f"{skeleton.name:<{NAME_COLUMN_WIDTH}} {skeleton.description}".rstrip()
        for skeleton in skeletons
    ]
