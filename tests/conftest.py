"""Shared test fixtures for gitprompt tests."""

from collections.abc import Callable, Iterator
from io import StringIO
from pathlib import Path

import pytest
from dulwich.repo import Repo
from rich.console import Console

from gitprompt.enums import Operation
from gitprompt.status import (
    ChangeCounts,
    Detached,
    Head,
    NoUpstream,
    OnBranch,
    Status,
    TrackingState,
)


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the real user config, logs and git identity."""
    import os

    for key in list(os.environ):
        if key.startswith("GITPROMPT_"):
            monkeypatch.delenv(key)

    home = tmp_path / "_home"
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    # Never discover a repository enclosing the pytest temp directory
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))


@pytest.fixture
def console() -> Console:
    """Rich console writing to an in-memory buffer."""
    return Console(file=StringIO(), force_terminal=False, width=120)


@pytest.fixture
def console_output(console: Console) -> Callable[[], str]:
    """Return a function reading everything written to the console so far."""

    def _read() -> str:
        file = console.file
        assert isinstance(file, StringIO)
        return file.getvalue()

    return _read


StatusFactory = Callable[..., Status]


@pytest.fixture
def make_status() -> StatusFactory:
    """Return a factory building Status values with clean defaults."""

    def _make(
        head: Head | None = None,
        tracking: TrackingState | None = None,
        changes: ChangeCounts | None = None,
        stash_count: int = 0,
        operation: Operation = Operation.NONE,
    ) -> Status:
        return Status(
            head=head if head is not None else OnBranch("main"),
            tracking=tracking if tracking is not None else NoUpstream(),
            changes=changes if changes is not None else ChangeCounts(),
            stash_count=stash_count,
            in_progress_operation=operation,
        )

    return _make


@pytest.fixture
def detached_status(make_status: StatusFactory) -> Status:
    return make_status(head=Detached("abc1234"))


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Return the path of an empty directory to hold a test repository."""
    path = tmp_path / "repo"
    path.mkdir()
    return path


@pytest.fixture
def dulwich_repo(repo_dir: Path) -> Iterator[Repo]:
    """Initialize an empty repository whose HEAD points at refs/heads/main."""
    repo = Repo.init(str(repo_dir))
    repo.refs.set_symbolic_ref(b"HEAD", b"refs/heads/main")
    yield repo
    repo.close()
