"""
Git log process runner with dubious ownership handling.

Spawns a single ``git log`` process and streams its stdout in chunks so the
parser can consume history lazily, one record at a time. The process
environment marks the repository as a safe.directory, which keeps git
working under sudo or in containers where the repository owner differs
from the current user.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, Iterator, List

from ..errors import LogStreamError, ProcessSpawnError

logger = logging.getLogger(__name__)

# Each record starts with NUL; --shortstat appends the diffstat line
LOG_PRETTY_FORMAT = "--pretty=format:%x00%H %aI %ae %cI"

# Seconds to wait for git to exit after terminating it early
TERMINATE_TIMEOUT = 5.0


def get_git_environment(repository: Path) -> Dict[str, str]:
    """
    Get environment variables for git commands to handle dubious ownership.

    Existing GIT_CONFIG_KEY_n/GIT_CONFIG_VALUE_n pairs from the calling
    environment are shifted up by one so safe.directory can take index 0.

    Args:
        repository: Path to the repository

    Returns:
        Dictionary of environment variables for the git process
    """
    env = os.environ.copy()

    env["GIT_CONFIG_KEY_0"] = "safe.directory"
    env["GIT_CONFIG_VALUE_0"] = str(repository.resolve())

    config_count = 1
    for key in os.environ:
        if not key.startswith("GIT_CONFIG_KEY_"):
            continue
        idx = key[len("GIT_CONFIG_KEY_"):]
        if not idx.isdigit():
            continue
        new_idx = int(idx) + 1
        env[f"GIT_CONFIG_KEY_{new_idx}"] = os.environ[key]
        value_key = f"GIT_CONFIG_VALUE_{idx}"
        if value_key in os.environ:
            env[f"GIT_CONFIG_VALUE_{new_idx}"] = os.environ[value_key]
        config_count = max(config_count, new_idx + 1)

    env["GIT_CONFIG_COUNT"] = str(config_count)
    return env


def run_git_command(
    cmd: List[str], cwd: Path, check: bool = True
) -> subprocess.CompletedProcess:
    """
    Run a short git command with captured text output.

    Args:
        cmd: Git command as a list (e.g., ["git", "rev-parse", "HEAD"])
        cwd: Working directory for the command
        check: Whether to raise CalledProcessError on non-zero exit

    Returns:
        CompletedProcess instance with the command result
    """
    if not cmd or cmd[0] != "git":
        raise ValueError("Command must start with 'git'")

    return subprocess.run(
        cmd,
        cwd=cwd,
        check=check,
        capture_output=True,
        text=True,
        env=get_git_environment(cwd),
    )


def is_empty_repository(repository: Path) -> bool:
    """
    Check whether repository is a git repository without any commit yet.

    git log exits 128 for such a repository; its history is simply empty.
    Paths that are not repositories return False so git log reports them.
    """
    try:
        git_dir = run_git_command(
            ["git", "rev-parse", "--git-dir"], cwd=repository, check=False
        )
        if git_dir.returncode != 0:
            return False
        head = run_git_command(
            ["git", "rev-parse", "--verify", "--quiet", "HEAD"],
            cwd=repository,
            check=False,
        )
    except OSError:
        return False
    return head.returncode != 0


def build_log_command(repository: Path) -> List[str]:
    return ["git", "-C", str(repository), "log", LOG_PRETTY_FORMAT, "--shortstat"]


class GitLogSource:
    """Streams raw ``git log --shortstat`` output from one git process.

    Usage:
        source = GitLogSource(Path("my-repo"))
        for chunk in source.chunks():
            ...
    """

    def __init__(self, repository: Path, chunk_size: int = 65536):
        self.repository = repository
        self.chunk_size = chunk_size

    def _spawn(self) -> subprocess.Popen:
        cmd = build_log_command(self.repository)
        logger.debug(f"Spawning: {' '.join(cmd)}")
        try:
            # stderr is inherited so git's own diagnostics reach the user
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                env=get_git_environment(self.repository),
            )
        except OSError as e:
            raise ProcessSpawnError(f"failed to spawn git process: {e}") from e

        if process.stdout is None:
            process.kill()
            process.wait()
            raise ProcessSpawnError("failed to take stdout from git process")
        return process

    def chunks(self) -> Iterator[bytes]:
        """Yield stdout chunks until git finishes.

        Raises:
            ProcessSpawnError: If git cannot be started
            LogStreamError: If git exits nonzero after its output is drained
        """
        if is_empty_repository(self.repository):
            logger.debug(f"{self.repository} has no commits yet")
            return

        process = self._spawn()
        completed = False
        try:
            while True:
                chunk = process.stdout.read1(self.chunk_size)
                if not chunk:
                    break
                yield chunk
            completed = True
        finally:
            self._close(process, completed)

        if process.returncode != 0:
            raise LogStreamError(
                f"git log exited with status {process.returncode}",
                returncode=process.returncode,
            )

    def _close(self, process: subprocess.Popen, completed: bool) -> None:
        process.stdout.close()
        if not completed and process.poll() is None:
            # Consumer stopped early; git would otherwise block on a full pipe
            logger.debug("Terminating git log before end of output")
            process.terminate()
        try:
            process.wait(timeout=TERMINATE_TIMEOUT)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
