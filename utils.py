#!/usr/bin/env python3
"""Utility functions for skeleton."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import LINEAGE_PATH, LINEAGE_VERSION
from logging_utils import Logger

# Exit codes
EXIT_MISSING_DEPENDENCY = 1

REQUIRED_TOOLS = ("git", "gh")

Renames = Sequence[Tuple[str, str]]


def check_dependencies(tools: Iterable[str] = REQUIRED_TOOLS) -> None:
    """Exit if any of the external tools is not on PATH."""
    missing = [tool for tool in tools if shutil.which(tool) is None]
    if missing:
        for tool in missing:
            Logger.error(f"required dependency not found on PATH: {tool}")
        sys.exit(EXIT_MISSING_DEPENDENCY)


def run_command(
    args: List[str], cwd: Optional[str] = None, *, interactive: bool = False
) -> str:
    """Run an external command, exiting with its status if it fails.

    Interactive commands inherit the terminal and return an empty string.
    """
    Logger.debug(f"running: {' '.join(args)}" + (f" (in {cwd})" if cwd else ""))
    try:
        if interactive:
            subprocess.run(args, cwd=cwd, check=True)
            return ""
        result = subprocess.run(
            args, cwd=cwd, check=True, capture_output=True, text=True
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        Logger.error(f"command failed with status {e.returncode}: {' '.join(args)}")
        output = (e.stderr or e.stdout or "").strip()
        if output:
            Logger.error(output)
        sys.exit(e.returncode or 1)


def rename_pairs(
    src_org: str, src_repo: str, dest_org: str, dest_repo: str
) -> List[Tuple[str, str]]:
    """Return the substitutions applied to a cloned tree, most specific first."""
    return [
        (f"{src_org}/{src_repo}", f"{dest_org}/{dest_repo}"),
        (src_repo, dest_repo),
    ]


def rewrite_text(content: bytes, renames: Renames) -> bytes:
    """Replace every occurrence of each old name with its new name.

    Matching is plain substring matching with no notion of word boundaries or
    binary content. Earlier pairs are replaced first; later pairs only apply
    to the text between their matches, so replaced text is never rewritten
    again.
    """
    if not renames:
        return content
    (old, new), rest = renames[0], renames[1:]
    pieces = content.split(old.encode("utf-8"))
    return new.encode("utf-8").join(rewrite_text(piece, rest) for piece in pieces)


def rewrite_tree(
    tree: Mapping[str, bytes],
    renames: Renames,
    protected: Iterable[str] = (LINEAGE_PATH,),
) -> Dict[str, bytes]:
    """Apply rewrite_text to every file of a tree except the protected paths."""
    keep = set(protected)
    return {
        path: content if path in keep else rewrite_text(content, renames)
        for path, content in tree.items()
    }


def lineage_url(src_org: str, src_repo: str) -> str:
    return f"https://{src_org}/{src_repo}.git"


def lineage_document(src_org: str, src_repo: str) -> dict:
    """Build the lineage record pointing back at the originating skeleton."""
    return {
        "lineage": {"skeleton": {"remote-url": lineage_url(src_org, src_repo)}},
        "version": LINEAGE_VERSION,
    }
