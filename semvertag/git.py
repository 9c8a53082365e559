"""Run git commands and parse their output."""

import datetime
import logging
import os
import subprocess

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import CommandError, ResolutionError
from .logging import LoggingMixin


# Field separator used in `git for-each-ref` formats
FIELD_SEP = "\x1f"

TAG_FORMAT = FIELD_SEP.join((
    "%(refname:strip=2)",
    "%(objectname)",
    "%(objecttype)",
    "%(*objectname)",
    "%(*objecttype)",
    "%(taggername)",
    "%(taggeremail)",
    "%(taggerdate:unix)",
))

BRANCH_FORMAT = FIELD_SEP.join(("%(refname)", "%(objectname)"))


@dataclass(frozen=True)
class Signature:
    """The identity and timestamp recorded on an annotated tag."""

    name: str
    email: str
    when: datetime.datetime


@dataclass(frozen=True)
class TagRecord:
    """An annotated tag as enumerated from the repository."""

    name: str
    hash: str
    target_type: str
    target: str
    tagger: Signature


@dataclass(frozen=True)
class Reference:
    """A named git reference (branch or tag)."""

    name: str
    hash: str

    @property
    def is_tag(self) -> bool:
        """Return True if this reference lives under refs/tags/."""
        return self.name.startswith("refs/tags/")

    @property
    def short_name(self) -> str:
        """Return the reference name without its namespace."""
        for namespace in ("refs/heads/", "refs/tags/", "refs/remotes/"):
            if self.name.startswith(namespace):
                return self.name.removeprefix(namespace)
        return self.name


class CommandRunner(LoggingMixin):
    """Execute external commands within a working directory."""

    def __init__(self, cwd: Path):
        self.cwd = cwd

    def run(
        self,
        args: list[str],
        check: bool = True,
        env: Optional[dict[str, str]] = None,
        log_level: int = logging.DEBUG,
    ) -> subprocess.CompletedProcess:
        """Run the command and return the completed process."""
        self.logger.log(log_level, "Executing `%s`", " ".join(args))

        full_env = None
        if env:
            full_env = {**os.environ, **env}

        try:
            proc = subprocess.run(
                args,
                cwd=self.cwd,
                env=full_env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as err:
            raise CommandError(args, -1, str(err)) from err

        output = proc.stdout.decode("utf-8")
        if check and proc.returncode != 0:
            raise CommandError(args, proc.returncode, output)

        return subprocess.CompletedProcess(args, proc.returncode, output)

    def capture(self, args: list[str], env: Optional[dict[str, str]] = None) -> str:
        """Run the command and return its output."""
        return self.run(args, env=env).stdout

    def execute(self, args: list[str], env: Optional[dict[str, str]] = None):
        """Run the command, discarding its output."""
        self.run(args, env=env, log_level=logging.INFO)
        self.logger.info("...ok")


class GitRepository(LoggingMixin):
    """A git repository accessed through the `git` executable."""

    def __init__(self, repo_dir: Path, runner: Optional[CommandRunner] = None):
        self.repo_dir = repo_dir
        self.runner = runner or CommandRunner(repo_dir)

    def _git(self, *args: str, env: Optional[dict[str, str]] = None) -> str:
        return self.runner.capture(["git", *args], env=env)

    def verify(self):
        """Raise a ResolutionError if this is not a git repository."""
        if not Path(self.repo_dir).is_dir():
            raise ResolutionError(f"Directory {self.repo_dir} does not exist")

        proc = self.runner.run(["git", "rev-parse", "--git-dir"], check=False)
        if proc.returncode != 0:
            raise ResolutionError(
                f"Error opening directory {self.repo_dir} as repository: "
                f"{proc.stdout.strip()}"
            )

    def tags(self) -> list[TagRecord]:
        """Return every annotated tag in the repository."""
        records = []

        output = self._git("for-each-ref", f"--format={TAG_FORMAT}", "refs/tags")
        for line in output.splitlines():
            if not line:
                continue

            (
                name,
                tag_hash,
                object_type,
                target,
                target_type,
                tagger_name,
                tagger_email,
                tagger_date,
            ) = line.split(FIELD_SEP)

            # Lightweight tags point directly at commits and have no tagger
            if object_type != "tag":
                self.logger.debug("Tag `%s` is not annotated", name)
                continue

            when = datetime.datetime.fromtimestamp(
                int(tagger_date or 0), tz=datetime.timezone.utc
            )

            records.append(
                TagRecord(
                    name=name,
                    hash=tag_hash,
                    target_type=target_type,
                    target=target,
                    tagger=Signature(
                        tagger_name, tagger_email.strip().strip("<>"), when
                    ),
                )
            )

        return records

    def branches(self) -> list[Reference]:
        """Return every local branch."""
        output = self._git("for-each-ref", f"--format={BRANCH_FORMAT}", "refs/heads")
        return [
            Reference(*line.split(FIELD_SEP)) for line in output.splitlines() if line
        ]

    def head(self) -> Reference:
        """Return the reference HEAD points to."""
        head_hash = self._git("rev-parse", "HEAD").strip()

        proc = self.runner.run(["git", "symbolic-ref", "--quiet", "HEAD"], check=False)
        if proc.returncode != 0:
            # Detached HEAD
            return Reference("HEAD", head_hash)

        return Reference(proc.stdout.strip(), head_hash)

    def object_type(self, object_hash: str) -> str:
        """Return the kind of the object (commit, tree, blob, or tag)."""
        return self._git("cat-file", "-t", object_hash).strip()

    def read_tag(self, tag_hash: str) -> tuple[str, str]:
        """Return the (target type, target hash) of an annotated tag object."""
        headers = {}
        for line in self._git("cat-file", "tag", tag_hash).splitlines():
            if not line:
                # Headers end at the first blank line
                break
            key, _, value = line.partition(" ")
            headers.setdefault(key, value)

        try:
            return headers["type"], headers["object"]
        except KeyError as err:
            raise ResolutionError(f"Malformed tag object {tag_hash}") from err

    def tag_exists(self, tag: str) -> bool:
        """Return True if the tag exists, False otherwise."""
        proc = self.runner.run(
            ["git", "rev-parse", "--verify", "--quiet", f"refs/tags/{tag}"],
            check=False,
        )
        return proc.returncode == 0

    def config_value(self, key: str, scope: str = "local") -> str:
        """Return a git config value from the given scope, or an empty string."""
        proc = self.runner.run(
            ["git", "config", f"--{scope}", "--get", key], check=False
        )
        if proc.returncode != 0:
            return ""
        return proc.stdout.strip()

    def create_tag(self, name: str, commit: str, message: str, tagger: Signature):
        """Create an annotated tag on the commit."""
        # git records the committer identity as the tagger, and accepts its
        # internal `<unix timestamp> <offset>` date format
        offset = tagger.when.strftime("%z") or "+0000"
        env = {
            "GIT_COMMITTER_NAME": tagger.name,
            "GIT_COMMITTER_EMAIL": tagger.email,
            "GIT_COMMITTER_DATE": f"{int(tagger.when.timestamp())} {offset}",
        }
        self._git(
            "tag",
            "--annotate",
            "--cleanup=verbatim",
            "--message",
            message,
            name,
            commit,
            env=env,
        )

    def fetch_tags(self, remote: Optional[str] = None):
        """Fetch tags from the remote."""
        args = ["git", "fetch", "--tags"]
        if remote:
            args.append(remote)
        self.runner.execute(args)

    def push_tag(self, tag: str, remote: str = "origin"):
        """Push a single tag to the remote."""
        self.runner.execute(["git", "push", remote, tag])
