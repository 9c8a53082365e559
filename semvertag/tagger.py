"""Create the next semantic version tag in a repository."""

import datetime
import os

from pathlib import Path
from typing import Optional

import semver

from .config import AuthorInfo, TagOptions, read_author_info
from .errors import CommandError, ResolutionError
from .git import GitRepository, Reference, Signature
from .logging import NOTICE, LoggingMixin
from .prompt import Prompter
from .resolve import current_version, get_sorted_matching_tags, resolve_commit
from .utils import next_version, version_to_tag_str


DATE_FORMAT = "%Y-%m-%d %H:%M:%S%z"


class SemverTagger(LoggingMixin):
    """A class to compute and create the next version tag."""

    def __init__(self, options: TagOptions, repo: GitRepository, prompter: Prompter):
        super().__init__()

        self.options = options
        self.repo = repo
        self.prompter = prompter

    def compute_next_version(self) -> semver.version.Version:
        """Return the version following the most recent matching tag."""
        tags = get_sorted_matching_tags(self.repo, self.options.prefix)

        if self.options.print_last > 0:
            self.logger.info(
                "Last %d tags with matching pattern:", self.options.print_last
            )
            for tag in tags[: self.options.print_last]:
                self.logger.info(
                    "  %s   %s (%s by %s)",
                    tag.name,
                    tag.hash[:6],
                    tag.when.strftime(DATE_FORMAT),
                    tag.tagger.name,
                )

        last_version = current_version(tags)
        new_version = next_version(
            last_version, self.options.bump_type, reset=self.options.reset
        )
        self.logger.info(
            "%s -> %s -> %s", last_version, self.options.bump_type, new_version
        )
        return new_version

    def select_reference(self) -> Reference:
        """Return the branch to tag, asking the user if necessary."""
        head = self.repo.head()

        should_prompt = self.options.always_select_branch or (
            head.short_name != self.options.primary_branch
            and not self.options.no_select_branch
            and not self.options.quiet
        )

        if not should_prompt:
            return head

        branches = self.repo.branches()
        names = [branch.short_name for branch in branches]
        return branches[self.prompter.select("Select Branch", names)]

    def resolve_author(self) -> AuthorInfo:
        """Return the tagger identity from options, git config, or the user."""
        if self.options.username and self.options.email:
            return AuthorInfo(self.options.username, self.options.email)

        author = read_author_info(self.repo)
        if author and author.complete:
            return author

        if self.options.quiet:
            raise ResolutionError(
                "Cannot read username/email from config, and configured to quiet, "
                "and it's not set via command line"
            )

        author = AuthorInfo(
            self.prompter.text("author name"), self.prompter.text("author email")
        )
        if not author.complete:
            raise ResolutionError("Tag author name and email must not be empty")

        return author

    def resolve_message(self) -> str:
        """Return the tag message, asking the user if necessary."""
        if self.options.message or self.options.quiet:
            return self.options.message

        return self.prompter.text("Enter tag message")

    def run(self) -> Optional[str]:
        """Create (and push) the next tag. Return its name, or None if aborted."""
        if self.options.fetch:
            self.repo.fetch_tags()

        new_version = self.compute_next_version()

        ref = self.select_reference()
        commit = resolve_commit(self.repo, ref)
        branch = ref.short_name

        tag_name = version_to_tag_str(
            new_version,
            prefix=self.options.prefix,
            branch=branch,
            primary_branch=self.options.primary_branch,
        )
        self.logger.log(NOTICE, "New version (tag): %s (%s)", new_version, tag_name)

        if self.repo.tag_exists(tag_name):
            raise ResolutionError(f"Tag {tag_name} already exists!")

        author = self.resolve_author()
        message = self.resolve_message()

        if not self.options.quiet and not self.prompter.confirm(
            f"Will create tag {tag_name} on {branch}, "
            f"{author.username}({author.email}) with message '{message}'"
        ):
            self.logger.info("Aborted.")
            return None

        self.repo.create_tag(
            tag_name,
            commit,
            message,
            Signature(
                author.username,
                author.email,
                datetime.datetime.now(datetime.timezone.utc),
            ),
        )
        self.logger.log(NOTICE, "Created tag %s at commit %s", tag_name, commit)

        if self.options.push:
            try:
                self.repo.push_tag(tag_name, self.options.remote)
            except CommandError as err:
                self.logger.warning("Failed to push tag %s: %s", tag_name, err)

        write_outputs(tag_name, new_version)

        self.logger.info("done.")
        return tag_name


def write_outputs(tag_name: str, version: semver.version.Version):
    """Append the new tag to the GitHub Actions output file, if there is one."""
    if not (output_file := os.environ.get("GITHUB_OUTPUT")):
        return

    with Path(output_file).open(mode="a", encoding="utf-8") as outfile:
        outfile.write(f"tag={tag_name}\nversion={version}\n")
