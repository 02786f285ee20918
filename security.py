#!/usr/bin/env python3
"""Input validation and log sanitization for skeleton."""

import os
import re


class SecurityValidator:
    """Validation helpers for names and paths taken from the command line."""

    MAX_REPO_NAME_LENGTH = 100
    MAX_ORG_NAME_LENGTH = 39
    MAX_PATH_LENGTH = 500

    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    # GitHub logins: alphanumerics and single hyphens, no leading hyphen
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Validate a repository name; names are never rewritten, only rejected."""
        if not name or not isinstance(name, str):
            raise ValueError("repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        if name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"repository name contains invalid path characters: {name}")

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValueError(f"repository name contains invalid characters: {name}")

        return name

    @classmethod
    def validate_org_name(cls, org: str) -> str:
        if not org or not isinstance(org, str):
            raise ValueError("organization name must be a non-empty string")

        if len(org) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(org):
            raise ValueError(f"organization name contains invalid characters: {org}")

        return org

    @classmethod
    def validate_directory(cls, path: str) -> str:
        """Validate the working directory the clone is created in."""
        if not path or not isinstance(path, str):
            raise ValueError("directory must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"directory exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("directory contains null bytes")

        normalized = os.path.normpath(os.path.expanduser(path))
        if not os.path.isdir(normalized):
            raise ValueError(f"directory does not exist: {path}")

        return normalized

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Redact credentials that may appear in tool output or URLs."""
        if not message:
            return message

        patterns = [
            (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),
            (r"token\s*[=:]\s*\S+", "token=[REDACTED]"),
            (r"password\s*[=:]\s*\S+", "password=[REDACTED]"),
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
