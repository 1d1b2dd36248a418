"""Find Go files that changed since a module set's release tags."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

# Tag name that stands for a module living at the repository root; its tags
# carry no path prefix.
REPO_ROOT_TAG = "REPOROOTTAG"


class TagNotFoundError(LookupError):
    """Raised when a git tag does not exist in the repository."""

    def __init__(self, message: str = "tag not found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Commit:
    """A commit of the repository at ``repo``."""

    repo: str
    hash: str


class Client(Protocol):
    def head_commit(self, repo: str) -> Commit: ...

    def tag_commit(self, repo: str, tag: str) -> Commit: ...

    def files_changed(
        self, head_commit: Commit, tag_commit: Commit, prefix: str, suffix: str
    ) -> list[str]: ...


def _git(repo: str, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True
    )


def _git_checked(repo: str, *args: str) -> str:
    try:
        result = _git(repo, *args)
    except OSError as exc:
        raise RuntimeError(f"unable to exec git {' '.join(args)}: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed: {result.stderr.strip()}"
        )
    return result.stdout


class GitClient:
    """Client that asks the ``git`` command about a repository directory."""

    def head_commit(self, repo: str) -> Commit:
        """Return the commit HEAD points at."""
        commit_hash = _git_checked(repo, "rev-parse", "--verify", "HEAD^{commit}")
        return Commit(repo, commit_hash.strip())

    def tag_commit(self, repo: str, tag: str) -> Commit:
        """Return the commit an annotated tag points at."""
        ref = f"refs/tags/{tag}"
        try:
            lookup = _git(repo, "rev-parse", "--verify", "--quiet", ref)
        except OSError as exc:
            raise RuntimeError(f"unable to exec git rev-parse: {exc}") from exc
        if lookup.returncode != 0:
            raise TagNotFoundError()
        tag_hash = lookup.stdout.strip()

        object_type = _git_checked(repo, "cat-file", "-t", tag_hash).strip()
        if object_type != "tag":
            raise RuntimeError(
                f"tag object error {tag_hash} object is not an annotated tag"
            )
        commit_hash = _git_checked(repo, "rev-parse", "--verify", f"{tag_hash}^{{commit}}")
        return Commit(repo, commit_hash.strip())

    def files_changed(
        self, head_commit: Commit, tag_commit: Commit, prefix: str, suffix: str
    ) -> list[str]:
        """Return the paths with ``prefix`` and ``suffix`` that differ between two commits."""
        output = _git_checked(
            head_commit.repo,
            "diff",
            "--no-renames",
            "--name-only",
            "-z",
            head_commit.hash,
            tag_commit.hash,
        )
        return [
            path
            for path in output.split("\0")
            if path and path.startswith(prefix) and path.endswith(suffix)
        ]


def normalize_version(ver: str) -> str:
    """Make sure the version starts with ``v``."""
    return ver if ver.startswith("v") else f"v{ver}"


def normalize_tag(tag_name: str, ver: str) -> str:
    """Return the full tag for a module's tag name and a version."""
    if tag_name == REPO_ROOT_TAG:
        return ver
    return f"{tag_name}/{ver}"


def collect_changed_files(
    repo: str,
    modset: str,
    ver: str,
    tag_names: Iterable[str],
    client: Client | None = None,
) -> list[str]:
    """Return Go files changed since ``ver`` was tagged for every module in ``tag_names``."""
    client = client if client is not None else GitClient()
    head = client.head_commit(repo)

    changed: list[str] = []
    for tag_name in tag_names:
        tag = normalize_tag(tag_name, ver)
        try:
            tag_commit = client.tag_commit(repo, tag)
        except TagNotFoundError as exc:
            logger.warning("Module %s does not have a %s tag", tag_name, ver)
            logger.warning("%s release is required.", modset)
            raise TagNotFoundError(f"tag not found {tag}") from exc
        changed.extend(client.files_changed(head, tag_commit, tag_name, ".go"))
    return changed