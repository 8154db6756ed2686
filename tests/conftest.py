"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, Generator

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test User", "test@example.com")

# Committer timestamps used by the fixtures, oldest first
T_MAIN = 1_700_000_000
T_FEATURE = 1_700_003_600
T_OLD = 1_699_000_000
T_RELEASE = 1_700_100_000


def commit_file(repo: Repo, name: str, content: str, message: str, timestamp: int) -> None:
    """Write a file and commit it with a fixed author and committer time."""
    path = Path(repo.working_tree_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    date = f"{timestamp} +0000"
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR, author_date=date, commit_date=date)


def init_repo(path: Path) -> Repo:
    """Initialize a repository whose first branch is main."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    repo.git.symbolic_ref("HEAD", "refs/heads/main")
    with repo.config_writer() as config:
        config.set_value("user", "name", AUTHOR.name)
        config.set_value("user", "email", AUTHOR.email)
    return repo


@pytest.fixture
def make_branch() -> Callable[..., None]:
    """Create a branch off main with one commit at ``timestamp``, then return to main."""

    def _make_branch(repo: Repo, name: str, timestamp: int, message: str = "") -> None:
        branch = repo.create_head(name, "main")
        branch.checkout()
        commit_file(repo, f"{name}.txt", name, message or f"Add {name}", timestamp)
        repo.heads.main.checkout()

    return _make_branch


@pytest.fixture
def simple_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """A repository with main (older) and feature/x (newer), HEAD on main."""
    repo = init_repo(tmp_path / "simple")
    commit_file(repo, "README.md", "# Test Repository", "Initial commit", T_MAIN)

    repo.create_head("feature/x", "main").checkout()
    commit_file(repo, "x.txt", "x", "Add x", T_FEATURE)
    repo.heads.main.checkout()

    yield Path(repo.working_tree_dir)
    repo.close()


@pytest.fixture
def test_env(tmp_path: Path, make_branch: Callable[..., None]) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    remote_path.mkdir()
    Repo.init(remote_path, bare=True)

    local_repo = init_repo(tmp_path / "local")
    commit_file(local_repo, "README.md", "# Test Repository", "Initial commit", T_MAIN)

    make_branch(local_repo, "feature-old", T_OLD, "Old work")
    make_branch(local_repo, "v2", T_RELEASE, "Release v2")
    make_branch(local_repo, "feature/current", T_FEATURE, "fix bug")

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")
    origin.push("feature/current")

    local_repo.heads["feature/current"].checkout()

    yield Path(local_repo.working_tree_dir), remote_path
    local_repo.close()
