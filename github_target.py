#!/usr/bin/env python3
"""GitHub wrapper for creating and configuring the destination repository."""

from __future__ import annotations

import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import github
import requests

from config import DEFAULT_API_URL, RemoteOutcome
from logging_utils import Logger
from repo_policy import AccountType, repository_settings_payload
from utils import run_command

# Exit codes
EXIT_GITHUB_ERROR = 1

PER_PAGE = 100


class GitHubTarget:
    """Wrapper around the GitHub API, authenticated through the gh CLI."""

    def __init__(self, api_url: str = DEFAULT_API_URL, retry_delay_s: float = 2.0) -> None:
        self.api_url = api_url.rstrip("/")
        self.retry_delay_s = retry_delay_s
        self.token: Optional[str] = None
        self.login: Optional[str] = None
        self.api: Optional[github.Github] = None
        self._account_types: Dict[str, AccountType] = {}

    def authenticate(self) -> str:
        """Check the gh CLI session and borrow its token for API calls."""
        hostname = self._git_hostname()
        Logger.info(f"checking gh authentication for {hostname}")
        run_command(["gh", "auth", "status", "--hostname", hostname])
        self.token = run_command(["gh", "auth", "token", "--hostname", hostname]).strip()
        return self.token

    def connect(self) -> None:
        if self.token is None:
            self.authenticate()
        Logger.debug(f"init github API: {self.api_url}")
        try:
            auth = github.Auth.Token(self.token)
            if self.api_url != DEFAULT_API_URL:
                self.api = github.Github(base_url=self.api_url, auth=auth, per_page=PER_PAGE)
            else:
                self.api = github.Github(auth=auth, per_page=PER_PAGE)
            self.login = self.api.get_user().login
            Logger.info(f"authenticated as: {self.login}")
        except github.BadCredentialsException:
            Logger.error("authentication failed (github): token from gh was rejected")
            sys.exit(EXIT_GITHUB_ERROR)
        except github.GithubException as e:
            Logger.error(f"github error: {e}")
            sys.exit(EXIT_GITHUB_ERROR)

    def _require_api(self) -> github.Github:
        if self.api is None:
            Logger.error("github API not initialized")
            sys.exit(EXIT_GITHUB_ERROR)
        return self.api

    def _get_api_headers(self) -> dict:
        """Get standard API headers for GitHub requests."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _git_base_url(self) -> str:
        """Return base URL for Git operations derived from API endpoint."""
        parsed = urlparse(self.api_url)
        if parsed.netloc == "api.github.com":
            return "https://github.com"

        base_path = parsed.path.rstrip("/")
        if base_path.endswith("/api/v3"):
            base_path = base_path[: -len("/api/v3")]
        base = f"{parsed.scheme}://{parsed.netloc}"
        if base_path:
            base += base_path
        return base

    def _git_hostname(self) -> str:
        parsed = urlparse(self.api_url)
        if parsed.netloc == "api.github.com":
            return "github.com"
        return parsed.netloc

    def git_url(self, owner: str, name: str) -> str:
        return f"{self._git_base_url()}/{owner}/{name}.git"

    def _probe_account_type(self, owner: str) -> AccountType:
        if owner not in self._account_types:
            kind = self._require_api().get_user(owner).type
            Logger.debug(f"account '{owner}' is of type {kind}")
            self._account_types[owner] = AccountType.from_api(kind)
        return self._account_types[owner]

    def account_type(self, owner: str) -> AccountType:
        """Resolve whether the owner is an organization or a personal account."""
        try:
            return self._probe_account_type(owner)
        except github.GithubException as e:
            Logger.error(f"failed to look up account '{owner}': {e}")
            sys.exit(EXIT_GITHUB_ERROR)

    def repo_exists(self, owner: str, name: str) -> bool:
        """Probe for the repository; any failure is treated as absence."""
        api = self._require_api()
        try:
            api.get_repo(f"{owner}/{name}")
            return True
        except (github.GithubException, requests.RequestException) as e:
            Logger.debug(f"repository {owner}/{name} not found: {e}")
            return False

    def create_repo(self, owner: str, name: str) -> bool:
        """Create a public repository; report failure instead of exiting."""
        api = self._require_api()
        try:
            if self._probe_account_type(owner) is AccountType.ORGANIZATION:
                api.get_organization(owner).create_repo(name=name, private=False)
            elif owner == self.login:
                api.get_user().create_repo(name=name, private=False)
            else:
                Logger.error(
                    f"cannot create a repository for user '{owner}' "
                    f"while authenticated as '{self.login}'"
                )
                return False
        except github.GithubException as e:
            Logger.error(f"failed to create repo '{owner}/{name}': {e}")
            return False
        Logger.ok(f"created repo: {owner}/{name}")
        return True

    def reconcile(self, owner: str, name: str) -> RemoteOutcome:
        """Make sure the destination exists remotely, creating it if needed."""
        if self.repo_exists(owner, name):
            Logger.info(f"remote repository {owner}/{name} already exists")
            return RemoteOutcome.EXISTS
        Logger.info(f"creating remote repository {owner}/{name}")
        if self.create_repo(owner, name):
            return RemoteOutcome.CREATED
        return RemoteOutcome.FAILED

    def wait_repo_available(self, owner: str, name: str, attempts: int = 10) -> bool:
        """Wait until the repository is visible via REST (eventual consistency).

        Returns True if repository is available, False otherwise.
        """
        url = f"{self.api_url}/repos/{owner}/{name}"
        for i in range(1, attempts + 1):
            try:
                r = requests.get(url, headers=self._get_api_headers(), timeout=15)
                if r.status_code == 200:
                    Logger.debug(f"repository '{owner}/{name}' verified as accessible")
                    return True
                if r.status_code == 404:
                    Logger.debug(
                        f"repository '{owner}/{name}' not yet visible "
                        f"(attempt {i}/{attempts})"
                    )
                else:
                    Logger.warn(
                        f"unexpected status {r.status_code} when checking "
                        f"repository '{owner}/{name}'"
                    )
            except requests.RequestException as e:
                Logger.debug(f"request error checking repository '{owner}/{name}': {e}")
            time.sleep(self.retry_delay_s)

        Logger.warn(f"repository '{owner}/{name}' not visible after {attempts} attempts")
        return False

    def _send(self, method: str, path: str, payload: Dict[str, Any]) -> None:
        url = f"{self.api_url}{path}"
        Logger.debug(f"{method} {url} {payload}")
        try:
            r = requests.request(
                method, url, headers=self._get_api_headers(), json=payload, timeout=30
            )
        except requests.RequestException as e:
            Logger.error(f"failed to contact github api: {e}")
            sys.exit(EXIT_GITHUB_ERROR)
        if r.status_code >= 400:
            Logger.error(f"{method} {path} failed ({r.status_code}): {r.text}")
            sys.exit(EXIT_GITHUB_ERROR)

    def update_settings(self, owner: str, name: str) -> None:
        Logger.info(f"applying merge settings to {owner}/{name}")
        self._send("PATCH", f"/repos/{owner}/{name}", repository_settings_payload())

    def protect_branch(
        self, owner: str, name: str, branch: str, account_type: AccountType
    ) -> None:
        Logger.info(
            f"protecting branch {branch} of {owner}/{name} "
            f"({account_type.value.lower()} rules)"
        )
        self._send(
            "PUT",
            f"/repos/{owner}/{name}/branches/{branch}/protection",
            account_type.protection_payload(),
        )

    def configure(self, owner: str, name: str, branch: str) -> None:
        """Apply merge settings, then branch protection for the owner's account type."""
        self.update_settings(owner, name)
        self.protect_branch(owner, name, branch, self.account_type(owner))
        Logger.ok(f"configured {owner}/{name}")
