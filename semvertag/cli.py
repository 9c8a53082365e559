"""Command-line interface to create the next semantic version tag."""

import argparse
import logging
import sys

from pathlib import Path
from typing import Optional

from .config import TagOptions
from .errors import SemverTagError
from .git import GitRepository
from .logging import setup_logging
from .prompt import ConsolePrompter
from .tagger import SemverTagger


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command line flags."""
    parser = argparse.ArgumentParser(
        prog="semvertag",
        description="Create the next semantic version tag in a git repository.",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        default=Path.cwd(),
        help="directory to repo. If empty, the current directory will be used",
    )
    parser.add_argument("--prefix", default="", help="Tag prefix")

    parser.add_argument("--patch", action="store_true", help="Upgrade patch version")
    parser.add_argument("--minor", action="store_true", help="Upgrade minor version")
    parser.add_argument("--major", action="store_true", help="Upgrade major version")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Reset lower version fields to zero when bumping major or minor",
    )

    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Do not fetch before creating a new version",
    )
    parser.add_argument("--no-push", action="store_true", help="Do not push the new tag")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not ask before setting (and pushing) the new tag",
    )
    parser.add_argument(
        "--no-select-branch",
        action="store_true",
        help="Do not ask to select a branch to tag if we're NOT on the primary branch",
    )
    parser.add_argument(
        "--always-select-branch",
        action="store_true",
        help="Always select the branch to tag",
    )

    parser.add_argument(
        "--username",
        default="",
        help="Username to create tag with. Try to guess or prompt if not provided",
    )
    parser.add_argument(
        "--email",
        default="",
        help="Email to create tag with. Try to guess or prompt if not provided",
    )
    parser.add_argument(
        "--message",
        default="",
        help="Optional tag message. Will open a prompt if not set, unless --quiet is set",
    )

    parser.add_argument(
        "--print-last", type=int, default=5, help="Print last n tags for information"
    )
    parser.add_argument(
        "--primary-branch",
        default="master",
        help="Branch whose tags carry no branch segment",
    )
    parser.add_argument("--remote", default="origin", help="Remote to push tag to")
    parser.add_argument("--verbose", action="store_true", help="Show debug output")

    return parser


def options_from_args(args: argparse.Namespace) -> TagOptions:
    """Convert the parsed arguments into TagOptions."""
    return TagOptions(
        repo_dir=args.repo,
        prefix=args.prefix,
        major=args.major,
        minor=args.minor,
        patch=args.patch,
        reset=args.reset,
        fetch=not args.no_fetch,
        push=not args.no_push,
        quiet=args.quiet,
        no_select_branch=args.no_select_branch,
        always_select_branch=args.always_select_branch,
        username=args.username,
        email=args.email,
        message=args.message,
        print_last=args.print_last,
        primary_branch=args.primary_branch,
        remote=args.remote,
    )


def main(argv: Optional[list[str]] = None) -> Optional[str]:
    """Parse arguments and run the tagger. Return the new tag name."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    options = options_from_args(args)
    options.validate()

    repo = GitRepository(options.repo_dir)
    repo.verify()

    return SemverTagger(options, repo, ConsolePrompter()).run()


def entrypoint():
    """Main entrypoint for this module."""
    try:
        main()
    except SemverTagError as err:
        logging.getLogger(__name__).error("%s", err)
        sys.exit(1)


if __name__ == "__main__":
    entrypoint()
