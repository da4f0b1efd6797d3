import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def run_git(
    path: Path, *args: str, check: bool = True
) -> subprocess.CompletedProcess[str]:
    """Run git in the given directory and capture its output."""
    return subprocess.run(  # noqa: S603 - Safe: fixed git executable
        ["git", *args],  # noqa: S607
        cwd=str(path),
        capture_output=True,
        text=True,
        check=check,
    )


@dataclass(frozen=True, slots=True)
class GitRepo:
    """A real git repository driven through the git command line."""

    path: Path

    @property
    def control_dir(self) -> Path:
        return self.path / ".git"

    def git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        return run_git(self.path, *args, check=check)

    def write(self, name: str, content: str = "") -> Path:
        file = self.path / name
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(content)
        return file

    def commit(self, name: str, content: str, message: str | None = None) -> str:
        """Write a file, commit it, and return the new commit id."""
        self.write(name, content)
        self.git("add", name)
        self.git("commit", "-q", "-m", message or f"update {name}")
        return self.rev_parse()

    def rev_parse(self, rev: str = "HEAD") -> str:
        return self.git("rev-parse", rev).stdout.strip()


def init_git_repo(path: Path) -> GitRepo:
    """Initialize a repository on branch main in the given path."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init", "-q", "-b", "main")
    return GitRepo(path)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    """Create an empty repository whose HEAD points at the unborn main branch."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    return init_git_repo(tmp_path / "work")


@pytest.fixture
def committed_repo(git_repo: GitRepo) -> GitRepo:
    """Create a repository with one commit on main."""
    git_repo.commit("README.md", "# Project\n", "initial commit")
    return git_repo


@pytest.fixture
def conflicting_branches(committed_repo: GitRepo) -> GitRepo:
    """Create branches main and feature that both change README.md."""
    committed_repo.git("checkout", "-q", "-b", "feature")
    committed_repo.commit("README.md", "# Feature\n", "feature change")
    committed_repo.git("checkout", "-q", "main")
    committed_repo.commit("README.md", "# Main\n", "main change")
    return committed_repo
