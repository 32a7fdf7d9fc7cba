"""
Shared pytest fixtures for gitlog-export tests.

Provides sample log records for parser and serializer tests and a throwaway
git repository with a known history for end-to-end tests.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, List

import pytest

from gitlog_export.models import Commit
from gitlog_export.timestamps import Timestamp

SAMPLE_HASH = "0123456789abcdef0123456789abcdef01234567"
OTHER_HASH = "fedcba9876543210fedcba9876543210fedcba98"


def make_record(
    hash_: str = SAMPLE_HASH,
    author_date: str = "2021-05-01T12:00:00+00:00",
    email: str = "dev@example.com",
    commit_date: str = "2021-05-01T12:05:00+00:00",
    trailer: str = "2 files changed, 5 insertions(+), 1 deletion(-)",
) -> str:
    """Build a record the way ``git log --shortstat`` lays it out (without NUL)."""
    header = f"{hash_} {author_date} {email} {commit_date}"
    return f"{header}\n\n {trailer}\n" if trailer else header


@pytest.fixture
def sample_commit() -> Commit:
    return Commit(
        hash=SAMPLE_HASH,
        author_timestamp=Timestamp.parse("2021-05-01T12:00:00+00:00"),
        author_email="dev@example.com",
        commit_timestamp=Timestamp.parse("2021-05-01T12:05:00+00:00"),
        files_changed=2,
        insertions=5,
        deletions=1,
    )


@pytest.fixture
def merge_commit() -> Commit:
    """A commit without a diffstat trailer."""
    return Commit(
        hash=OTHER_HASH,
        author_timestamp=Timestamp.parse("2024-02-29T23:59:59-03:00"),
        author_email="merger@example.org",
        commit_timestamp=Timestamp.parse("2024-03-01T02:59:59Z"),
    )


@pytest.fixture
def sample_hash() -> str:
    return SAMPLE_HASH


@pytest.fixture
def record_factory() -> Callable[..., str]:
    return make_record


def _git(repo: Path, env: Dict[str, str], *args: str) -> None:
    subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        env=env,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Repository with three commits: two with content changes, one empty.

    git log lists them newest first: empty, modify, initial.
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    repo = tmp_path / "repo"
    repo.mkdir()

    base_env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Dev",
        "GIT_AUTHOR_EMAIL": "dev@example.com",
        "GIT_COMMITTER_NAME": "Dev",
        "GIT_COMMITTER_EMAIL": "dev@example.com",
        "GIT_CONFIG_NOSYSTEM": "1",
        "HOME": str(tmp_path),
    }

    _git(repo, base_env, "init", "-q")

    history: List[tuple] = [
        ("2021-05-01T12:00:00+00:00", "2021-05-01T12:05:00+00:00", "initial"),
        ("2021-05-02T09:30:00+02:00", "2021-05-02T09:31:00+02:00", "modify"),
        ("2021-05-03T18:00:00-07:00", "2021-05-03T18:00:00-07:00", "empty"),
    ]

    for author_date, commit_date, step in history:
        env = {
            **base_env,
            "GIT_AUTHOR_DATE": author_date,
            "GIT_COMMITTER_DATE": commit_date,
        }
        if step == "initial":
            (repo / "a.txt").write_text("one\ntwo\nthree\n")
            (repo / "b.txt").write_text("alpha\nbeta\n")
            _git(repo, env, "add", ".")
            _git(repo, env, "commit", "-q", "-m", "initial")
        elif step == "modify":
            (repo / "a.txt").write_text("one\n2\nthree\nfour\n")
            _git(repo, env, "commit", "-q", "-am", "modify")
        else:
            _git(repo, env, "commit", "-q", "--allow-empty", "-m", "empty")

    return repo
