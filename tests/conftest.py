"""Fixtures replacing the git repository and the user with in-memory fakes."""

import datetime

from pathlib import Path

import pytest

from semvertag.config import TagOptions
from semvertag.git import Reference, Signature, TagRecord


EPOCH = datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc)


def tag_record(name: str, days: int, target: str = "c0ffee", target_type="commit"):
    """Return an annotated TagRecord created `days` after the epoch."""
    return TagRecord(
        name=name,
        hash=f"tag-{name}",
        target_type=target_type,
        target=target,
        tagger=Signature("Tagger", "tagger@example.com", EPOCH + datetime.timedelta(days)),
    )


class FakeRepository:
    """An in-memory stand-in for GitRepository."""

    def __init__(self):
        self.tag_records: list[TagRecord] = []
        self.branch_refs = [
            Reference("refs/heads/master", "aaaa1111"),
            Reference("refs/heads/feature-x", "bbbb2222"),
        ]
        self.head_ref = self.branch_refs[0]
        self.objects: dict[str, str] = {}
        self.tag_objects: dict[str, tuple[str, str]] = {}
        self.config: dict[tuple[str, str], str] = {}

        self.fetched = False
        self.created: list[tuple[str, str, str, Signature]] = []
        self.pushed: list[tuple[str, str]] = []
        self.push_error = None

    def tags(self):
        return list(self.tag_records)

    def branches(self):
        return list(self.branch_refs)

    def head(self):
        return self.head_ref

    def object_type(self, object_hash):
        return self.objects[object_hash]

    def read_tag(self, tag_hash):
        return self.tag_objects[tag_hash]

    def tag_exists(self, tag):
        return tag in {record.name for record in self.tag_records} | {
            created[0] for created in self.created
        }

    def config_value(self, key, scope="local"):
        return self.config.get((scope, key), "")

    def create_tag(self, name, commit, message, tagger):
        self.created.append((name, commit, message, tagger))

    def fetch_tags(self, remote=None):
        self.fetched = True

    def push_tag(self, tag, remote="origin"):
        if self.push_error:
            raise self.push_error
        self.pushed.append((tag, remote))


class FakePrompter:
    """A Prompter replaying canned answers and recording the questions."""

    def __init__(self):
        self.confirm_answer = True
        self.texts: dict[str, str] = {}
        self.selection = 0
        self.questions: list[str] = []

    def confirm(self, message):
        self.questions.append(message)
        return self.confirm_answer

    def text(self, label):
        self.questions.append(label)
        return self.texts.get(label, "")

    def select(self, label, items):
        self.questions.append(label)
        return self.selection


@pytest.fixture(name="repo")
def fake_repository():
    """Fixture providing an empty fake repository."""
    return FakeRepository()


@pytest.fixture(name="prompter")
def fake_prompter():
    """Fixture providing a prompter that accepts everything."""
    return FakePrompter()


@pytest.fixture(name="options")
def default_options(tmp_path):
    """Fixture providing non-interactive patch-bump options."""
    return TagOptions(
        repo_dir=Path(tmp_path),
        patch=True,
        username="Jane Doe",
        email="jane@example.com",
        message="Release",
    )


@pytest.fixture(name="make_tag")
def make_tag_fixture():
    """Fixture exposing the TagRecord factory."""
    return tag_record
