#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import sys
from typing import List, NoReturn, Optional

from config import DEFAULT_BRANCH, DEFAULT_ORG, Command, Config, api_url_from_env
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_USAGE_ERROR = 255


class SkeletonArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with the tool's exit status."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        Logger.error(f"{self.prog}: {message}")
        sys.exit(EXIT_USAGE_ERROR)


def _create_argument_parser() -> SkeletonArgumentParser:
    """Create and configure the argument parser."""
    parser = SkeletonArgumentParser(
        prog="skeleton",
        description="Create new repositories from skeleton repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog=f"""
Examples:
  %(prog)s list
  %(prog)s list --src-org myorg
  %(prog)s clone skeleton-generic my-repo
  %(prog)s clone --change-dir ~/src --dest-org myorg skeleton-python-library my-lib

The default organization is {DEFAULT_ORG} and the default branch is {DEFAULT_BRANCH}.
        """,
    )
    return parser


def _add_list_arguments(subparsers) -> None:
    """Add the list sub-command to parser."""
    parser = subparsers.add_parser(
        Command.LIST.value,
        help="List available skeleton repositories",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--src-org",
        dest="src_org",
        default=DEFAULT_ORG,
        help=f"Organization to search for skeletons (default: {DEFAULT_ORG})",
    )


def _add_clone_arguments(subparsers) -> None:
    """Add the clone sub-command to parser."""
    parser = subparsers.add_parser(
        Command.CLONE.value,
        help="Create a new repository from a skeleton",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--change-dir",
        dest="change_dir",
        default=".",
        help="Directory to create the new repository in (default: current directory)",
    )
    parser.add_argument(
        "--dest-org",
        dest="dest_org",
        default=DEFAULT_ORG,
        help=f"Organization or user owning the new repository (default: {DEFAULT_ORG})",
    )
    parser.add_argument(
        "--src-org",
        dest="src_org",
        default=DEFAULT_ORG,
        help=f"Organization owning the skeleton (default: {DEFAULT_ORG})",
    )
    parser.add_argument("parent_repo", help="Name of the skeleton repository")
    parser.add_argument("new_repo", help="Name of the repository to create")


def _validate_parsed_arguments(args: argparse.Namespace) -> argparse.Namespace:
    """Validate names and paths before anything touches git or GitHub."""
    try:
        args.src_org = SecurityValidator.validate_org_name(args.src_org)
        if args.command == Command.CLONE.value:
            args.dest_org = SecurityValidator.validate_org_name(args.dest_org)
            args.parent_repo = SecurityValidator.validate_repo_name(args.parent_repo)
            args.new_repo = SecurityValidator.validate_repo_name(args.new_repo)
            args.change_dir = SecurityValidator.validate_directory(args.change_dir)
    except ValueError as e:
        Logger.error(f"invalid argument: {e}")
        sys.exit(EXIT_USAGE_ERROR)
    return args


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    _add_list_arguments(subparsers)
    _add_clone_arguments(subparsers)

    args = _validate_parsed_arguments(parser.parse_args(argv))

    command = Command(args.command)
    if command is Command.LIST:
        return Config(command=command, src_org=args.src_org, api_url=api_url_from_env())
    return Config(
        command=command,
        src_org=args.src_org,
        dest_org=args.dest_org,
        default_branch=DEFAULT_BRANCH,
        parent_repo=args.parent_repo,
        new_repo=args.new_repo,
        change_dir=args.change_dir,
        api_url=api_url_from_env(),
    )
