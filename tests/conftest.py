"""Pytest fixtures for gitree tests"""
import tempfile
from pathlib import Path

import git
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def isolated_home(temp_dir, monkeypatch):
    """Keep the user's git configuration and global ignore file out of the tests."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    return home


@pytest.fixture
def scan_root(temp_dir):
    """Empty directory used as the scan root."""
    root = temp_dir / "root"
    root.mkdir()
    return root


@pytest.fixture
def make_fake_repo():
    """Factory creating marker-only repositories (no real git data)."""

    def _make(path: Path, bare: bool = False) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        if bare:
            (path / "refs" / "heads").mkdir(parents=True)
            (path / "objects").mkdir()
            (path / "HEAD").write_text("ref: refs/heads/main\n")
        else:
            git_dir = path / ".git"
            git_dir.mkdir()
            (git_dir / "HEAD").write_text("ref: refs/heads/main\n")
        return path

    return _make


def _configure_user(repo: git.Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def make_commit():
    """Factory adding one commit with a new file to a repository."""
    counter = {"n": 0}

    def _commit(repo: git.Repo, message: str = None) -> git.Commit:
        counter["n"] += 1
        name = f"file_{counter['n']}.txt"
        (Path(repo.working_dir) / name).write_text(f"content {counter['n']}\n")
        repo.index.add([name])
        return repo.index.commit(message or f"Commit {counter['n']}")

    return _commit


@pytest.fixture
def make_git_repo(make_commit):
    """Factory creating a real repository with one commit on ``main``."""
    created = []

    def _make(path: Path) -> git.Repo:
        path.mkdir(parents=True, exist_ok=True)
        repo = git.Repo.init(path)
        _configure_user(repo)
        make_commit(repo, "Initial commit")
        repo.git.branch("-M", "main")
        created.append(repo)
        return repo

    yield _make

    for repo in created:
        repo.close()


@pytest.fixture
def git_repo(scan_root, make_git_repo):
    """Create a real Git repository inside the scan root."""
    return make_git_repo(scan_root / "test_repo")


@pytest.fixture
def repo_with_remote(git_repo, temp_dir):
    """Repository whose main branch is pushed to a bare ``origin`` outside the scan root."""
    origin_path = temp_dir / "remotes" / "origin.git"
    origin = git.Repo.init(origin_path, bare=True, mkdir=True)
    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("-u", "origin", "main")
    yield git_repo
    origin.close()


@pytest.fixture
def bare_repo(scan_root):
    """Create a real bare repository inside the scan root."""
    repo = git.Repo.init(scan_root / "bare.git", bare=True, mkdir=True)
    yield repo
    repo.close()
