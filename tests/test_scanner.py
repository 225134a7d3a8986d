import pytest

from auto_git.errors import DiffReadError, NoPendingChangesError
from auto_git.scanner import (
    ChangeKind,
    ChangeSet,
    FileChange,
    build_summary,
    classify_change,
    parse_numstat,
    read_diff_text,
    scan,
)


class FakeRepo:
    """Serves canned git output instead of running git."""

    def __init__(self, staged="", unstaged="", staged_diff="", unstaged_diff=""):
        self.numstat = {True: staged, False: unstaged}
        self.diff = {True: staged_diff, False: unstaged_diff}

    def check_repository(self):
        pass

    def get_numstat(self, staged):
        return self.numstat[staged]

    def get_diff(self, staged):
        return self.diff[staged]


@pytest.mark.parametrize(
    "additions, deletions, expected",
    [
        (1, 0, ChangeKind.ADDED),
        (250, 0, ChangeKind.ADDED),
        (0, 1, ChangeKind.DELETED),
        (0, 40, ChangeKind.DELETED),
        (3, 2, ChangeKind.MODIFIED),
        (0, 0, ChangeKind.MODIFIED),
    ],
)
def test_classify_change(additions, deletions, expected):
    assert classify_change(additions, deletions) is expected
    assert FileChange("f", additions, deletions).kind is expected


def test_parse_numstat_keeps_spaces_in_path():
    changes = parse_numstat("3\t1\tfile name with spaces.txt\n")
    assert changes == [FileChange(path="file name with spaces.txt", additions=3, deletions=1)]


def test_parse_numstat_binary_counts_become_zero():
    changes = parse_numstat("-\t-\tassets/logo.png\n")
    assert changes == [FileChange(path="assets/logo.png", additions=0, deletions=0)]
    assert changes[0].kind is ChangeKind.MODIFIED


def test_parse_numstat_multiple_lines_in_order():
    output = "10\t0\tsrc/new.py\n0\t7\tsrc/old.py\n\n2\t2\tREADME.md\n"
    changes = parse_numstat(output)
    assert [c.path for c in changes] == ["src/new.py", "src/old.py", "README.md"]
    assert [c.kind for c in changes] == [
        ChangeKind.ADDED,
        ChangeKind.DELETED,
        ChangeKind.MODIFIED,
    ]


def test_parse_numstat_skips_short_lines():
    assert parse_numstat("5\t3\n\n") == []
    assert parse_numstat("") == []


def test_empty_changeset_is_rejected():
    with pytest.raises(NoPendingChangesError):
        ChangeSet(staged=[], unstaged=[])


def test_build_summary_groups_staged_then_unstaged():
    staged = [FileChange("a.txt", 3, 1)]
    unstaged = [FileChange("b.txt", 0, 2), FileChange("c d.txt", 5, 0)]
    assert build_summary(staged, unstaged) == (
        "Staged: 1 file(s)\n"
        "  +3 -1 a.txt\n"
        "Unstaged: 2 file(s)\n"
        "  +0 -2 b.txt\n"
        "  +5 -0 c d.txt"
    )


def test_build_summary_omits_empty_group():
    assert build_summary([], [FileChange("b.txt", 1, 1)]) == "Unstaged: 1 file(s)\n  +1 -1 b.txt"


def test_scan_builds_changeset():
    repo = FakeRepo(staged="4\t0\tnew.py\n", unstaged="1\t1\tREADME.md\n")
    change_set = scan(repo)
    assert change_set.staged == [FileChange("new.py", 4, 0)]
    assert change_set.unstaged == [FileChange("README.md", 1, 1)]
    assert change_set.summary.startswith("Staged: 1 file(s)")
    assert [c.path for c in change_set.files] == ["new.py", "README.md"]


def test_scan_without_changes_raises():
    with pytest.raises(NoPendingChangesError):
        scan(FakeRepo())


def test_scan_propagates_diff_errors():
    class BrokenRepo(FakeRepo):
        def get_numstat(self, staged):
            raise DiffReadError("git diff failed")

    with pytest.raises(DiffReadError):
        scan(BrokenRepo())


def test_read_diff_text_labels_sections():
    repo = FakeRepo(staged_diff="diff --git a/x b/x\n", unstaged_diff="diff --git a/y b/y\n")
    text = read_diff_text(repo)
    assert text == (
        "=== STAGED CHANGES ===\n\ndiff --git a/x b/x\n"
        "\n\n=== UNSTAGED CHANGES ===\n\ndiff --git a/y b/y\n"
    )


def test_read_diff_text_skips_empty_sections():
    assert read_diff_text(FakeRepo(unstaged_diff="patch")) == "=== UNSTAGED CHANGES ===\n\npatch"
    assert read_diff_text(FakeRepo()) == ""
