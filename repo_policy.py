#!/usr/bin/env python3
"""Baseline repository settings and branch protection payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from config import REQUIRED_APPROVING_REVIEWS, REQUIRED_STATUS_CHECK


def _empty_allow_list() -> Dict[str, list]:
    return {"apps": [], "teams": [], "users": []}


def repository_settings_payload() -> Dict[str, Any]:
    """Merge settings applied to every new repository."""
    return {
        "allow_auto_merge": False,
        "allow_merge_commit": True,
        "allow_rebase_merge": True,
        "allow_squash_merge": False,
        "delete_branch_on_merge": True,
        "private": False,
    }


class AccountType(Enum):
    """Kind of account owning the destination repository.

    GitHub only accepts dismissal and push restrictions on repositories owned
    by an organization; personal accounts reject them.
    """
    ORGANIZATION = "Organization"
    USER = "User"

    @classmethod
    def from_api(cls, value: str) -> "AccountType":
        return cls.ORGANIZATION if value == cls.ORGANIZATION.value else cls.USER

    def protection_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "enforce_admins": True,
            "required_conversation_resolution": True,
            "required_pull_request_reviews": {
                "require_code_owner_reviews": True,
                "required_approving_review_count": REQUIRED_APPROVING_REVIEWS,
            },
            "required_status_checks": {
                "strict": True,
                "contexts": [REQUIRED_STATUS_CHECK],
            },
        }
        if self is AccountType.ORGANIZATION:
            payload["required_pull_request_reviews"][
                "dismissal_restrictions"
            ] = _empty_allow_list()
            payload["restrictions"] = _empty_allow_list()
        return payload
