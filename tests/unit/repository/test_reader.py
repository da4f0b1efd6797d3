"""Unit tests for StateReader against real on-disk repositories."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dulwich import porcelain
from dulwich.objects import Blob, Commit, Tree
from dulwich.repo import Repo

from gitprompt.enums import Operation
from gitprompt.exceptions import (
    DiffComputationError,
    OperationMarkerReadError,
    RefReadError,
    StashReadError,
)
from gitprompt.repository import (
    RawDiffCounts,
    RawRefState,
    RepositoryHandle,
    StateReader,
    StateReaderProtocol,
    map_through_refspecs,
)

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

IDENTITY = b"Test User <test@example.com>"


def make_commit(
    repo: Repo,
    message: bytes,
    parents: Sequence[bytes] = (),
    files: dict[bytes, bytes] | None = None,
) -> bytes:
    """Write a commit with a flat tree straight into the object store."""
    tree = Tree()
    for name, content in (files or {}).items():
        blob = Blob.from_string(content)
        repo.object_store.add_object(blob)
        tree.add(name, 0o100644, blob.id)
    repo.object_store.add_object(tree)

    commit = Commit()
    commit.tree = tree.id
    commit.parents = list(parents)
    commit.author = commit.committer = IDENTITY
    commit.author_time = commit.commit_time = 1_700_000_000
    commit.author_timezone = commit.commit_timezone = 0
    commit.encoding = b"UTF-8"
    commit.message = message
    repo.object_store.add_object(commit)
    return commit.id


def set_upstream(repo: Repo, branch: bytes, remote: bytes, merge: bytes) -> None:
    config = repo.get_config()
    config.set((b"branch", branch), b"remote", remote)
    config.set((b"branch", branch), b"merge", merge)
    if remote != b".":
        config.set(
            (b"remote", remote),
            b"fetch",
            b"+refs/heads/*:refs/remotes/" + remote + b"/*",
        )
    config.write_to_path()


@pytest.fixture
def handle(dulwich_repo: Repo, repo_dir: Path) -> Iterator[RepositoryHandle]:
    with RepositoryHandle.open(repo_dir) as handle:
        yield handle


@pytest.fixture
def reader(handle: RepositoryHandle) -> StateReader:
    return StateReader(handle)


@pytest.fixture
def control_dir(repo_dir: Path) -> Path:
    return repo_dir / ".git"


def test_satisfies_protocol(reader: StateReader) -> None:
    assert isinstance(reader, StateReaderProtocol)


class TestMapThroughRefspecs:
    def test_glob(self) -> None:
        specs = ["+refs/heads/*:refs/remotes/origin/*"]

        result = map_through_refspecs("refs/heads/dev", specs)

        assert result == "refs/remotes/origin/dev"

    def test_exact(self) -> None:
        specs = ["refs/heads/main:refs/remotes/upstream/trunk"]

        assert map_through_refspecs("refs/heads/main", specs) == (
            "refs/remotes/upstream/trunk"
        )

    def test_first_match_wins(self) -> None:
        specs = [
            "refs/heads/release/*:refs/remotes/origin/rel/*",
            "refs/heads/*:refs/remotes/origin/*",
        ]

        assert map_through_refspecs("refs/heads/release/1.0", specs) == (
            "refs/remotes/origin/rel/1.0"
        )

    def test_skips_negative_and_malformed_specs(self) -> None:
        specs = ["^refs/heads/secret", "refs/heads/*", "refs/heads/*:"]

        assert map_through_refspecs("refs/heads/main", specs) is None

    def test_no_match(self) -> None:
        specs = ["refs/tags/*:refs/tags/*"]

        assert map_through_refspecs("refs/heads/main", specs) is None


class TestReadRefState:
    def test_unborn_branch(self, reader: StateReader) -> None:
        assert reader.read_ref_state() == RawRefState(branch="main", commit_id=None)

    def test_branch_without_upstream(
        self, dulwich_repo: Repo, reader: StateReader
    ) -> None:
        commit_id = make_commit(dulwich_repo, b"initial")
        dulwich_repo.refs[b"refs/heads/main"] = commit_id

        assert reader.read_ref_state() == RawRefState(
            branch="main", commit_id=commit_id.decode()
        )

    def test_detached_head(
        self, dulwich_repo: Repo, reader: StateReader, control_dir: Path
    ) -> None:
        commit_id = make_commit(dulwich_repo, b"initial")
        (control_dir / "HEAD").write_bytes(commit_id + b"\n")

        state = reader.read_ref_state()

        assert state.branch is None
        assert state.commit_id == commit_id.decode()
        assert state.upstream is None

    def test_ahead_and_behind(self, dulwich_repo: Repo, reader: StateReader) -> None:
        base = make_commit(dulwich_repo, b"base")
        local = make_commit(dulwich_repo, b"local 1", [base])
        local = make_commit(dulwich_repo, b"local 2", [local])
        remote = make_commit(dulwich_repo, b"remote", [base])
        dulwich_repo.refs[b"refs/heads/main"] = local
        dulwich_repo.refs[b"refs/remotes/origin/main"] = remote
        set_upstream(dulwich_repo, b"main", b"origin", b"refs/heads/main")

        state = reader.read_ref_state()

        assert state.upstream == "origin/main"
        assert state.ahead == 2
        assert state.behind == 1

    def test_in_sync_upstream(self, dulwich_repo: Repo, reader: StateReader) -> None:
        commit_id = make_commit(dulwich_repo, b"initial")
        dulwich_repo.refs[b"refs/heads/main"] = commit_id
        dulwich_repo.refs[b"refs/remotes/origin/main"] = commit_id
        set_upstream(dulwich_repo, b"main", b"origin", b"refs/heads/main")

        state = reader.read_ref_state()

        assert (state.upstream, state.ahead, state.behind) == ("origin/main", 0, 0)

    def test_local_branch_upstream(
        self, dulwich_repo: Repo, reader: StateReader
    ) -> None:
        base = make_commit(dulwich_repo, b"base")
        tip = make_commit(dulwich_repo, b"tip", [base])
        dulwich_repo.refs[b"refs/heads/trunk"] = base
        dulwich_repo.refs[b"refs/heads/main"] = tip
        set_upstream(dulwich_repo, b"main", b".", b"refs/heads/trunk")

        state = reader.read_ref_state()

        assert (state.upstream, state.ahead, state.behind) == ("trunk", 1, 0)

    def test_gone_upstream_is_no_upstream(
        self, dulwich_repo: Repo, reader: StateReader
    ) -> None:
        commit_id = make_commit(dulwich_repo, b"initial")
        dulwich_repo.refs[b"refs/heads/main"] = commit_id
        set_upstream(dulwich_repo, b"main", b"origin", b"refs/heads/main")

        state = reader.read_ref_state()

        assert state.upstream is None
        assert state.ahead is None
        assert state.behind is None

    def test_branch_name_not_utf8(
        self, dulwich_repo: Repo, reader: StateReader
    ) -> None:
        branch = b"f\xe9at"
        commit_id = make_commit(dulwich_repo, b"initial")
        dulwich_repo.refs.set_symbolic_ref(b"HEAD", b"refs/heads/" + branch)
        dulwich_repo.refs[b"refs/heads/" + branch] = commit_id

        state = reader.read_ref_state()

        assert state.branch == "f�at"
        assert state.upstream is None

    def test_upstream_of_branch_name_not_utf8(
        self, dulwich_repo: Repo, reader: StateReader
    ) -> None:
        branch = b"f\xe9at"
        base = make_commit(dulwich_repo, b"base")
        tip = make_commit(dulwich_repo, b"tip", [base])
        dulwich_repo.refs.set_symbolic_ref(b"HEAD", b"refs/heads/" + branch)
        dulwich_repo.refs[b"refs/heads/" + branch] = tip
        dulwich_repo.refs[b"refs/remotes/origin/" + branch] = base
        set_upstream(dulwich_repo, branch, b"origin", b"refs/heads/" + branch)

        state = reader.read_ref_state()

        assert state.branch == "f�at"
        assert (state.upstream, state.ahead, state.behind) == ("origin/f�at", 1, 0)

    def test_corrupt_head(self, reader: StateReader, control_dir: Path) -> None:
        (control_dir / "HEAD").write_text("garbage\n")

        with pytest.raises(RefReadError, match="invalid object id"):
            reader.read_ref_state()

    def test_missing_commit_object(
        self, dulwich_repo: Repo, reader: StateReader, repo_dir: Path
    ) -> None:
        base = make_commit(dulwich_repo, b"base")
        dulwich_repo.refs[b"refs/heads/main"] = base
        dulwich_repo.refs[b"refs/remotes/origin/main"] = b"1" * 40
        set_upstream(dulwich_repo, b"main", b"origin", b"refs/heads/main")

        with pytest.raises(RefReadError) as exc_info:
            reader.read_ref_state()

        assert exc_info.value.path == repo_dir
        assert exc_info.value.cause is not None

    def test_wraps_os_errors(self, reader: StateReader, mocker: MockerFixture) -> None:
        error = PermissionError("denied")
        mocker.patch.object(StateReader, "_read_ref_state", side_effect=error)

        with pytest.raises(RefReadError) as exc_info:
            reader.read_ref_state()

        assert exc_info.value.cause is error


class TestReadDiffCounts:
    def test_empty_repository(self, reader: StateReader) -> None:
        assert reader.read_diff_counts() == RawDiffCounts()

    def test_untracked_files(self, reader: StateReader, repo_dir: Path) -> None:
        (repo_dir / "a.txt").write_text("a")
        (repo_dir / "nested").mkdir()
        (repo_dir / "nested" / "b.txt").write_text("b")

        assert reader.read_diff_counts() == RawDiffCounts(untracked=2)

    def test_ignored_files_not_counted(
        self, reader: StateReader, repo_dir: Path
    ) -> None:
        (repo_dir / ".gitignore").write_text("*.log\n")
        (repo_dir / "debug.log").write_text("noise")

        assert reader.read_diff_counts() == RawDiffCounts(untracked=1)

    def test_staged_on_unborn_branch(
        self, dulwich_repo: Repo, reader: StateReader, repo_dir: Path
    ) -> None:
        (repo_dir / "a.txt").write_text("a")
        porcelain.add(dulwich_repo, paths=[str(repo_dir / "a.txt")])

        assert reader.read_diff_counts() == RawDiffCounts(staged=1)

    def test_staged_and_unstaged(
        self, dulwich_repo: Repo, reader: StateReader, repo_dir: Path
    ) -> None:
        (repo_dir / "a.txt").write_text("one\n")
        (repo_dir / "b.txt").write_text("one\n")
        porcelain.add(
            dulwich_repo, paths=[str(repo_dir / "a.txt"), str(repo_dir / "b.txt")]
        )
        porcelain.commit(
            dulwich_repo, message=b"initial", author=IDENTITY, committer=IDENTITY
        )

        # a.txt: staged change, then a further unstaged change on top
        (repo_dir / "a.txt").write_text("two\n")
        porcelain.add(dulwich_repo, paths=[str(repo_dir / "a.txt")])
        (repo_dir / "a.txt").write_text("three, longer\n")
        # b.txt: unstaged change only
        (repo_dir / "b.txt").write_text("changed, longer\n")

        assert reader.read_diff_counts() == RawDiffCounts(staged=1, unstaged=2)

    def test_wraps_errors(self, reader: StateReader, mocker: MockerFixture) -> None:
        mocker.patch.object(
            StateReader, "_read_diff_counts", side_effect=OSError("disk gone")
        )

        with pytest.raises(DiffComputationError, match="disk gone"):
            reader.read_diff_counts()


class TestReadStashState:
    def test_no_stash(self, reader: StateReader) -> None:
        assert reader.read_stash_state().count == 0

    def test_wraps_errors(self, reader: StateReader, mocker: MockerFixture) -> None:
        mocker.patch(
            "gitprompt.repository._reader.Stash.from_repo",
            side_effect=OSError("unreadable reflog"),
        )

        with pytest.raises(StashReadError, match="unreadable reflog"):
            reader.read_stash_state()


class TestReadOperationMarker:
    def test_no_markers(self, reader: StateReader) -> None:
        assert reader.read_operation_marker() is Operation.NONE

    @pytest.mark.parametrize(
        ("marker", "is_dir", "expected"),
        [
            ("MERGE_HEAD", False, Operation.MERGE),
            ("CHERRY_PICK_HEAD", False, Operation.CHERRY_PICK),
            ("BISECT_LOG", False, Operation.BISECT),
            ("rebase-merge", True, Operation.REBASE),
            ("rebase-apply", True, Operation.REBASE),
        ],
    )
    def test_single_marker(
        self,
        reader: StateReader,
        control_dir: Path,
        marker: str,
        is_dir: bool,  # noqa: FBT001
        expected: Operation,
    ) -> None:
        if is_dir:
            (control_dir / marker).mkdir()
        else:
            (control_dir / marker).write_text("0" * 40 + "\n")

        assert reader.read_operation_marker() is expected

    def test_mailbox_apply_is_not_rebase(
        self, reader: StateReader, control_dir: Path
    ) -> None:
        (control_dir / "rebase-apply").mkdir()
        (control_dir / "rebase-apply" / "applying").touch()

        assert reader.read_operation_marker() is Operation.NONE

    def test_rebase_beats_stale_merge_head(
        self, reader: StateReader, control_dir: Path
    ) -> None:
        (control_dir / "rebase-merge").mkdir()
        (control_dir / "MERGE_HEAD").write_text("0" * 40 + "\n")

        assert reader.read_operation_marker() is Operation.REBASE

    def test_custom_precedence(self, reader: StateReader, control_dir: Path) -> None:
        (control_dir / "rebase-merge").mkdir()
        (control_dir / "MERGE_HEAD").write_text("0" * 40 + "\n")
        precedence = (
            Operation.MERGE,
            Operation.REBASE,
            Operation.CHERRY_PICK,
            Operation.BISECT,
        )

        assert reader.read_operation_marker(precedence) is Operation.MERGE

    def test_wraps_errors(self, reader: StateReader, mocker: MockerFixture) -> None:
        mocker.patch.object(
            StateReader,
            "_present_operations",
            side_effect=PermissionError("no access"),
        )

        with pytest.raises(OperationMarkerReadError, match="no access"):
            reader.read_operation_marker()
