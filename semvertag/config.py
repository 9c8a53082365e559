"""Configuration for a tagging run."""

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import UsageError
from .git import GitRepository
from .utils import validate_bump


@dataclass
class AuthorInfo:
    """The identity stamped on a new tag."""

    username: str
    email: str

    @property
    def complete(self) -> bool:
        """Return True if both the name and email are set."""
        return bool(self.username and self.email)


@dataclass
class TagOptions:
    """All of the choices controlling a single tagging run."""

    # pylint: disable=too-many-instance-attributes
    repo_dir: Path
    prefix: str = ""

    major: bool = False
    minor: bool = False
    patch: bool = False
    reset: bool = False

    fetch: bool = True
    push: bool = True
    quiet: bool = False
    no_select_branch: bool = False
    always_select_branch: bool = False

    username: str = ""
    email: str = ""
    message: str = ""

    print_last: int = 5
    primary_branch: str = "master"
    remote: str = "origin"

    def validate(self):
        """Raise a UsageError for conflicting options."""
        validate_bump(self.major, self.minor, self.patch)

        if self.no_select_branch and self.always_select_branch:
            raise UsageError(
                "Can set at most one of --no-select-branch and --always-select-branch"
            )

        if self.always_select_branch and self.quiet:
            raise UsageError(
                "Cannot do --quiet and --always-select-branch at the same time"
            )

    @property
    def bump_type(self) -> str:
        """Return the requested bump type."""
        return validate_bump(self.major, self.minor, self.patch)


def read_author_info(repo: GitRepository) -> Optional[AuthorInfo]:
    """
    Return the user identity from the repository or global git config.

    The repository config wins if it sets either value. Returns None if neither
    scope sets a name or email.
    """
    for scope in ("local", "global"):
        author = AuthorInfo(
            repo.config_value("user.name", scope),
            repo.config_value("user.email", scope),
        )
        if author.username or author.email:
            logging.getLogger(__name__).debug(
                "Read author %s <%s> from %s config",
                author.username,
                author.email,
                scope,
            )
            return author

    return None
