import shutil
import subprocess
from pathlib import Path

import pytest

GIT_AVAILABLE = shutil.which("git") is not None

requires_git = pytest.mark.skipif(not GIT_AVAILABLE, reason="git executable not found")


def run_git(repo: Path, *args: str) -> str:
    """Run git in repo and return stdout, failing the test on a non-zero exit."""
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


def make_commit(repo: Path, name: str, subject: str) -> None:
    (repo / name).write_text(f"{subject}\n")
    run_git(repo, "add", name)
    run_git(repo, "commit", "-q", "-m", subject)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty repository with a local identity and signing disabled."""
    if not GIT_AVAILABLE:
        pytest.skip("git executable not found")

    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo
