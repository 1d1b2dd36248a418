import pytest

from gobuildtools.errors import (
    CouldNotGetCommitHashError,
    DependencyWarning,
    GitTagsNotOnCommitError,
    InvalidVersionError,
    ModuleNotInRepoError,
    ModuleNotInSetError,
    MultimodError,
    MultipleSetSameVersionError,
    MultipleSetSameVersionErrors,
)


def test_git_tags_not_on_commit_message():
    err = GitTagsNotOnCommitError(
        "abc123", ["test_tag_first_hash_1/v2.2.2", "test_tag_first_hash_2/v2.2.2"]
    )
    assert str(err) == (
        "some git tags are not on commit abc123:\n"
        "test_tag_first_hash_1/v2.2.2\ntest_tag_first_hash_2/v2.2.2"
    )


def test_git_tags_not_on_commit_equality():
    a = GitTagsNotOnCommitError("abc", ["t/v1.0.0"])
    assert a == GitTagsNotOnCommitError("abc", ["t/v1.0.0"])
    assert not a == GitTagsNotOnCommitError("def", ["t/v1.0.0"])


def test_could_not_get_commit_hash_wraps_cause():
    err = CouldNotGetCommitHashError(ValueError("reference not found"))
    assert str(err).startswith("error getting full hash: ")
    assert str(err).endswith("reference not found")
    with pytest.raises(MultimodError):
        raise err


def test_module_not_in_set_message():
    err = ModuleNotInSetError("go.opentelemetry.io/testroot/v2", "/tmp/not_listed/go.mod")
    assert str(err) == (
        "Module go.opentelemetry.io/testroot/v2 (defined in /tmp/not_listed/go.mod) "
        "is not listed in any module set."
    )


def test_module_not_in_repo_message():
    err = ModuleNotInRepoError("go.opentelemetry.io/testroot/v2", "mod-set-3")
    assert str(err) == (
        "Module go.opentelemetry.io/testroot/v2 in module set mod-set-3 "
        "does not exist in the current repo."
    )


def test_invalid_version_message():
    err = InvalidVersionError("mod-set-1", "invalid-version-v.02.0.")
    assert str(err) == (
        "Module set mod-set-1 has invalid version string: invalid-version-v.02.0."
    )


def test_multiple_set_same_version_messages_are_joined():
    first = MultipleSetSameVersionError(["mod-set-1", "mod-set-3", "mod-set-4"], "v1")
    second = MultipleSetSameVersionError(["mod-set-5", "mod-set-6"], "v1")
    combined = MultipleSetSameVersionErrors([first, second])
    assert str(first) == (
        "Multiple module sets have the same major version (v1): "
        "[mod-set-1 mod-set-3 mod-set-4]"
    )
    assert str(combined) == f"{first}\n{second}"
    assert str(combined).count("\n") == 1


def test_dependency_warning_message():
    warning = DependencyWarning(
        "go.opentelemetry.io/build-tools/multimod/internal/verify/test/test1",
        "v1.2.3-RC1+meta",
        "go.opentelemetry.io/build-tools/multimod/internal/verify/test3",
        "v0.1.0",
    )
    text = str(warning)
    assert text.startswith("WARNING: Stable module ")
    assert text.endswith(".\n")
    assert "(v1.2.3-RC1+meta) depends on unstable module" in text
    assert isinstance(warning, UserWarning)


def test_dependency_warning_can_be_issued():
    with pytest.warns(DependencyWarning, match="depends on unstable module b"):
        import warnings

        warnings.warn(DependencyWarning("a", "v1.0.0", "b", "v0.1.0"))