#!/usr/bin/env python3
"""Local git operations that turn a skeleton clone into a new repository."""

from __future__ import annotations

import os
from typing import Dict, Iterable, List

import yaml

from config import LINEAGE_PATH, NO_PUSH_URL
from logging_utils import Logger
from utils import Renames, lineage_document, rewrite_tree, run_command


class LocalRepository:
    """A git working copy addressed by explicit path, never by chdir."""

    def __init__(self, path: str) -> None:
        self.path = path

    @classmethod
    def clone(
        cls, url: str, remote_name: str, branch: str, parent_dir: str, name: str
    ) -> "LocalRepository":
        """Clone url into parent_dir/name with the remote called remote_name."""
        Logger.info(f"cloning {url} into {os.path.join(parent_dir, name)}")
        run_command(
            ["git", "clone", "--origin", remote_name, "--branch", branch, url, name],
            cwd=parent_dir,
        )
        return cls(os.path.join(parent_dir, name))

    def git(self, *args: str) -> str:
        return run_command(["git", *args], cwd=self.path)

    def add_remote(self, name: str, url: str) -> None:
        self.git("remote", "add", name, url)

    def set_config(self, key: str, value: str) -> None:
        self.git("config", "--local", key, value)

    def disable_push(self, remote: str) -> None:
        self.git("remote", "set-url", "--push", remote, NO_PUSH_URL)

    def tracked_files(self) -> List[str]:
        output = self.git("ls-files", "-z")
        return [path for path in output.split("\0") if path]

    def read_tree(self, paths: Iterable[str]) -> Dict[str, bytes]:
        """Read regular files; symlinks and submodule entries are skipped."""
        tree: Dict[str, bytes] = {}
        for rel_path in paths:
            full_path = os.path.join(self.path, rel_path)
            if os.path.islink(full_path) or not os.path.isfile(full_path):
                continue
            with open(full_path, "rb") as handle:
                tree[rel_path] = handle.read()
        return tree

    def rename_references(self, renames: Renames) -> int:
        """Rewrite every tracked file in place, returning the number changed."""
        tree = self.read_tree(self.tracked_files())
        rewritten = rewrite_tree(tree, renames)
        changed = 0
        for rel_path, content in rewritten.items():
            if content == tree[rel_path]:
                continue
            with open(os.path.join(self.path, rel_path), "wb") as handle:
                handle.write(content)
            changed += 1
            Logger.debug(f"rewrote: {rel_path}")
        Logger.info(f"renamed references in {changed} file(s)")
        return changed

    def commit_all(self, message: str) -> None:
        self.git("add", "--all")
        self.git("commit", "--allow-empty", "--message", message)
        Logger.ok(f"committed: {message}")

    def write_lineage(self, src_org: str, src_repo: str) -> str:
        """Write the lineage record and return its path relative to the repo."""
        full_path = os.path.join(self.path, LINEAGE_PATH)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(
                lineage_document(src_org, src_repo),
                handle,
                explicit_start=True,
                default_flow_style=False,
                sort_keys=False,
            )
        return LINEAGE_PATH

    def commit_file(self, rel_path: str, message: str) -> None:
        self.git("add", rel_path)
        self.git("commit", "--message", message)
        Logger.ok(f"committed: {message}")

    def create_branch(self, name: str) -> None:
        self.git("checkout", "-b", name)

    def push(self, remote: str, branches: List[str]) -> None:
        Logger.info(f"pushing {', '.join(branches)} to {remote}")
        run_command(push_command(remote, branches), cwd=self.path)

    def open_pull_request(self, title: str, assignee: str, base: str, head: str) -> None:
        """Open the pull request in a browser so a person can finish it."""
        run_command(
            pull_request_command(title, assignee, base, head),
            cwd=self.path,
            interactive=True,
        )


def push_command(remote: str, branches: List[str]) -> List[str]:
    return ["git", "push", "--set-upstream", remote, *branches]


def pull_request_command(title: str, assignee: str, base: str, head: str) -> List[str]:
    return [
        "gh", "pr", "create",
        "--title", title,
        "--assignee", assignee,
        "--base", base,
        "--head", head,
        "--web",
    ]
