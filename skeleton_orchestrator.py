#!/usr/bin/env python3
"""Main orchestrator for listing skeletons and cloning them into new repositories."""

from __future__ import annotations

import shlex
from typing import Optional

from config import (FIRST_COMMITS_BRANCH, FIRST_COMMITS_TITLE,
                    LINEAGE_COMMIT_MESSAGE, RENAME_COMMIT_MESSAGE, Command,
                    Config, RemoteOutcome)
from github_target import GitHubTarget
from local_repo import LocalRepository, pull_request_command, push_command
from logging_utils import Logger
from skeleton_source import SkeletonSource, render_skeletons
from utils import check_dependencies, rename_pairs

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_REMOTE_CREATION_FAILED = 255


class SkeletonOrchestrator:
    def __init__(self, cfg: Config, gh: Optional[GitHubTarget] = None) -> None:
        self.cfg = cfg
        self.gh = gh or GitHubTarget(cfg.api_url)

    def run(self) -> int:
        try:
            check_dependencies()
            self.gh.connect()
            if self.cfg.command is Command.LIST:
                return self.list_skeletons()
            return self.clone()
        except SystemExit as e:
            return int(e.code) if isinstance(e.code, int) else EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def list_skeletons(self) -> int:
        source = SkeletonSource(self.gh.api)
        for line in render_skeletons(source.list_skeletons(self.cfg.src_org)):
            print(line)
        return EXIT_SUCCESS

    def clone(self) -> int:
        repo = self.prepare_local_repository()
        outcome = self.gh.reconcile(self.cfg.dest_org, self.cfg.new_repo)
        return self.handle_outcome(outcome, repo)

    def prepare_local_repository(self) -> LocalRepository:
        """Clone the skeleton and rebrand it as the new repository, locally only."""
        cfg = self.cfg
        Logger.info(
            f"creating {cfg.dest_org}/{cfg.new_repo} "
            f"from skeleton {cfg.src_org}/{cfg.parent_repo}"
        )
        repo = LocalRepository.clone(
            self.gh.git_url(cfg.src_org, cfg.parent_repo),
            remote_name=cfg.parent_repo,
            branch=cfg.default_branch,
            parent_dir=cfg.change_dir,
            name=cfg.new_repo,
        )
        repo.add_remote("origin", self.gh.git_url(cfg.dest_org, cfg.new_repo))
        # gh uses this to pick the base repository for pr and issue commands
        repo.set_config("remote.origin.gh-resolved", "base")
        repo.disable_push(cfg.parent_repo)

        repo.rename_references(
            rename_pairs(cfg.src_org, cfg.parent_repo, cfg.dest_org, cfg.new_repo)
        )
        repo.commit_all(RENAME_COMMIT_MESSAGE)

        lineage = repo.write_lineage(cfg.src_org, cfg.parent_repo)
        repo.commit_file(lineage, LINEAGE_COMMIT_MESSAGE)

        repo.create_branch(FIRST_COMMITS_BRANCH)
        Logger.ok(f"local repository ready: {repo.path}")
        return repo

    def handle_outcome(self, outcome: RemoteOutcome, repo: LocalRepository) -> int:
        cfg = self.cfg
        if outcome is RemoteOutcome.FAILED:
            self.print_recovery_instructions(repo)
            return EXIT_REMOTE_CREATION_FAILED
        elif outcome is RemoteOutcome.CREATED:
            if not self.gh.wait_repo_available(cfg.dest_org, cfg.new_repo):
                Logger.error(
                    f"repository {cfg.dest_org}/{cfg.new_repo} was created but is "
                    "not visible yet; not pushing"
                )
                self.print_manual_commands(repo)
                return EXIT_EXECUTION_ERROR
        elif outcome is RemoteOutcome.EXISTS:
            Logger.warn(f"using existing remote {cfg.dest_org}/{cfg.new_repo}")
        else:
            raise ValueError(f"unhandled remote outcome: {outcome}")

        repo.push("origin", [cfg.default_branch, FIRST_COMMITS_BRANCH])
        repo.open_pull_request(
            FIRST_COMMITS_TITLE, self.gh.login, cfg.default_branch, FIRST_COMMITS_BRANCH
        )
        self.gh.configure(cfg.dest_org, cfg.new_repo, cfg.default_branch)
        Logger.ok(f"{cfg.dest_org}/{cfg.new_repo} is ready")
        return EXIT_SUCCESS

    def print_recovery_instructions(self, repo: LocalRepository) -> None:
        cfg = self.cfg
        Logger.error(
            f"could not create remote repository {cfg.dest_org}/{cfg.new_repo}"
        )
        Logger.warn(
            "the local repository is complete; create the remote repository "
            "manually, then run:"
        )
        self.print_manual_commands(repo)

    def print_manual_commands(self, repo: LocalRepository) -> None:
        cfg = self.cfg
        commands = [
            ["cd", repo.path],
            push_command("origin", [cfg.default_branch, FIRST_COMMITS_BRANCH]),
            pull_request_command(
                FIRST_COMMITS_TITLE, "@me", cfg.default_branch, FIRST_COMMITS_BRANCH
            ),
        ]
        for command in commands:
            print(f"  {shlex.join(command)}")
