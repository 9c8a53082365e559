"""Utility functions for parsing, bumping, and naming versions."""

from typing import Union

import semver

from .errors import UsageError


BUMP_TYPES = ("major", "minor", "patch")

# Separator between the prefix, branch, and version segments of a tag name
SEPARATOR = "-"


def tag_to_semver(tag: str, prefix: str = "") -> semver.version.Version:
    """
    Return the Version associated with this git tag.

    The prefix and one following separator are stripped before parsing. A
    leading `v` is optional, as are the minor and patch components.

    Raises ValueError for invalid tags.
    """
    if not tag.startswith(prefix):
        raise ValueError(f"Tag `{tag}` doesn't start with `{prefix}`")

    version_str = tag[len(prefix):].removeprefix(SEPARATOR).strip()
    if version_str.startswith("v"):
        version_str = version_str[1:]

    return semver.Version.parse(version_str, optional_minor_and_patch=True)


def validate_bump(major: bool = False, minor: bool = False, patch: bool = False) -> str:
    """Return the single requested bump type, or raise a UsageError."""
    requested = [
        bump_type
        for bump_type, flag in zip(BUMP_TYPES, (major, minor, patch))
        if flag
    ]

    if len(requested) != 1:
        raise UsageError("Set exactly one of major, minor, or patch to increment")

    return requested[0]


def next_version(
    current: semver.version.Version, bump_type: str, reset: bool = False
) -> semver.version.Version:
    """
    Return the version following `current` for the given bump type.

    Without `reset` only the selected field is incremented (1.2.3 -> 2.2.3 for
    a major bump). With `reset` the lower fields are zeroed as semantic
    versioning prescribes (1.2.3 -> 2.0.0).
    """
    if bump_type not in BUMP_TYPES:
        raise UsageError(f"Unknown bump type `{bump_type}`")

    # Pre-release and build metadata never influence the increment
    released = current.replace(prerelease=None, build=None)

    if reset:
        return getattr(released, f"bump_{bump_type}")()

    return released.replace(**{bump_type: getattr(released, bump_type) + 1})


def version_to_tag_str(
    version: Union[str, semver.version.Version],
    prefix: str = "",
    branch: str = "",
    primary_branch: str = "master",
) -> str:
    """
    Return the git tag associated with this version.

    Tags look like `[<prefix>-][<branch>-]v<version>`. The branch segment is
    only added for branches other than the primary one.
    """
    # Versions numbers never have leading `v`s, tags always have leading `v`s.
    version = str(version)

    segments = []
    if prefix:
        segments.append(prefix)

    if branch and branch != primary_branch:
        segments.append(branch)

    segments.append(f"v{version.lstrip('v')}")

    return SEPARATOR.join(segments)
