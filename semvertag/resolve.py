"""Find the current version among the repository tags and the commit to tag."""

import datetime
import logging

from dataclasses import dataclass

import semver

from .errors import UnsupportedTargetError
from .git import GitRepository, Reference, Signature, TagRecord
from .utils import tag_to_semver


@dataclass(frozen=True)
class VersionTag:
    """An annotated tag paired with the semantic version it names."""

    name: str
    hash: str
    tagger: Signature
    version: semver.version.Version

    @property
    def when(self) -> datetime.datetime:
        """Return the tag creation timestamp."""
        return self.tagger.when


def filter_version_tags(tags: list[TagRecord], prefix: str) -> list[VersionTag]:
    """
    Return the tags matching the prefix that parse as semantic versions.

    Tags that do not parse are skipped without error, as repositories commonly
    carry unrelated tags.
    """
    logger = logging.getLogger(__name__)

    version_tags = []
    for tag in tags:
        if not tag.name.startswith(prefix):
            continue

        try:
            version = tag_to_semver(tag.name, prefix)
        except ValueError as err:
            logger.debug("Ignoring tag `%s`: %s", tag.name, err)
            continue

        version_tags.append(VersionTag(tag.name, tag.hash, tag.tagger, version))

    return version_tags


def sort_version_tags(version_tags: list[VersionTag]) -> list[VersionTag]:
    """Return the tags sorted by creation time, most recent first."""
    return sorted(version_tags, key=lambda tag: tag.when, reverse=True)


def get_sorted_matching_tags(repo: GitRepository, prefix: str) -> list[VersionTag]:
    """Return the repository's version tags for the prefix, most recent first."""
    return sort_version_tags(filter_version_tags(repo.tags(), prefix))


def current_version(version_tags: list[VersionTag]) -> semver.version.Version:
    """Return the version of the most recent tag, or 0.0.0 without any."""
    if not version_tags:
        fallback = semver.Version(0, 0, 0)
        logging.getLogger(__name__).info(
            "No matching version tags - defaulting to %s", fallback
        )
        return fallback

    return version_tags[0].version


def resolve_commit(repo: GitRepository, ref: Reference) -> str:
    """
    Return the commit hash a branch or tag reference points to.

    Annotated tags are dereferenced once; tags of anything other than a commit
    raise UnsupportedTargetError.
    """
    if not ref.is_tag:
        return ref.hash

    kind = repo.object_type(ref.hash)

    if kind == "tag":
        target_type, target = repo.read_tag(ref.hash)
        if target_type != "commit":
            raise UnsupportedTargetError(
                f"unsupported tag object target `{target_type}`", target_type
            )
        return target

    if kind == "commit":
        return ref.hash

    raise UnsupportedTargetError(f"unsupported tag target `{kind}`", kind)
