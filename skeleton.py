#!/usr/bin/env python3
"""
skeleton - Create new GitHub repositories from skeleton repositories.

`skeleton list` shows the repositories of an organization tagged with the
"skeleton" topic. `skeleton clone` copies one of them into a new local
repository, renames every reference to the skeleton, records its lineage,
creates the repository on GitHub if needed, pushes, opens the first pull
request, and applies the baseline merge and branch protection settings.

Authentication is taken from the gh CLI (`gh auth login`).
"""

from __future__ import annotations

import sys
from typing import List, NoReturn, Optional

from argument_parser import parse_arguments
from skeleton_orchestrator import SkeletonOrchestrator


def main(argv: Optional[List[str]] = None) -> NoReturn:
    cfg = parse_arguments(argv)
    orchestrator = SkeletonOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
