"""Errors reported while tagging and verifying module sets."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


class MultimodError(Exception):
    """Base class of module-set errors."""


@dataclass(eq=True)
class GitTagsNotOnCommitError(MultimodError):
    """Some tags are missing or point at a different commit."""

    commit_hash: str
    tag_names: Sequence[str] = field(default_factory=list)

    def __str__(self) -> str:
        joined = "\n".join(self.tag_names)
        return f"some git tags are not on commit {self.commit_hash}:\n{joined}"


@dataclass(eq=True)
class CouldNotGetCommitHashError(MultimodError):
    """A revision could not be resolved to a full commit hash."""

    err: object = None

    def __str__(self) -> str:
        return f"error getting full hash: {self.err}"


@dataclass(eq=True)
class ModuleNotInSetError(MultimodError):
    """A module in the repository is listed in no module set."""

    mod_path: str
    mod_file_path: str

    def __str__(self) -> str:
        return (
            f"Module {self.mod_path} (defined in {self.mod_file_path}) "
            "is not listed in any module set."
        )


@dataclass(eq=True)
class ModuleNotInRepoError(MultimodError):
    """A module named by a module set does not exist in the repository."""

    mod_path: str
    mod_set_name: str

    def __str__(self) -> str:
        return (
            f"Module {self.mod_path} in module set {self.mod_set_name} "
            "does not exist in the current repo."
        )


@dataclass(eq=True)
class InvalidVersionError(MultimodError):
    """A module set's version is not a valid semantic version."""

    mod_set_name: str
    mod_set_version: str

    def __str__(self) -> str:
        return (
            f"Module set {self.mod_set_name} has invalid version string: "
            f"{self.mod_set_version}"
        )


@dataclass(eq=True)
class MultipleSetSameVersionError(MultimodError):
    """Several module sets share one non-zero major version."""

    mod_set_names: Sequence[str]
    mod_set_version: str

    def __str__(self) -> str:
        names = " ".join(self.mod_set_names)
        return (
            "Multiple module sets have the same major version "
            f"({self.mod_set_version}): [{names}]"
        )


@dataclass(eq=True)
class MultipleSetSameVersionErrors(MultimodError):
    """A collection of :class:`MultipleSetSameVersionError`, one per major version."""

    errs: Sequence[MultipleSetSameVersionError] = field(default_factory=list)

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errs)


@dataclass(eq=True)
class DependencyWarning(UserWarning):
    """A stable module depends on an unstable one."""

    mod_path: str
    mod_version: str
    dep_path: str
    dep_version: str

    def __str__(self) -> str:
        return (
            f"WARNING: Stable module {self.mod_path} ({self.mod_version}) depends on "
            f"unstable module {self.dep_path} ({self.dep_version}).\n"
        )