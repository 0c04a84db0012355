"""Per-repository git status extraction."""

import os
import queue
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

import git

from gitree.constants import (
    DEFAULT_EXTRACT_TIMEOUT,
    DEFAULT_REMOTE,
    DETACHED_BRANCH,
    POLL_INTERVAL,
    SLOW_EXTRACTION_THRESHOLD,
    STASH_REF,
    UNKNOWN_BRANCH,
)
from gitree.exceptions import ExtractionCancelled, InvariantError
from gitree.logging_config import get_logger
from gitree.models import Status
from gitree.services.git.changes import parse_porcelain

logger = get_logger(__name__)

# Raised inside a reader to stop it; never turned into a degraded status
_INTERRUPTS = (ExtractionCancelled, TimeoutError)

# How often (in commits) history walks check for cancellation
_CHECK_EVERY = 256


def reachable_commits(
    repo: git.Repo, rev: str, check: Optional[Callable[[], None]] = None
) -> Set[str]:
    """Hex SHAs of every commit reachable from ``rev``."""
    commits: Set[str] = set()
    for commit in repo.iter_commits(rev):
        commits.add(commit.hexsha)
        if check is not None and len(commits) % _CHECK_EVERY == 0:
            check()
    return commits


def count_divergence(
    repo: git.Repo, local_rev: str, remote_rev: str, check: Optional[Callable[[], None]] = None
) -> Tuple[int, int]:
    """Count commits only on the local side and only on the remote side.

    Both histories are walked in full and compared as sets, so the cost is
    linear in history size.

    Returns:
        (ahead, behind)
    """
    local = reachable_commits(repo, local_rev, check)
    remote = reachable_commits(repo, remote_rev, check)
    return len(local - remote), len(remote - local)


class GitStatusReader:
    """Reads the status of one repository.

    Each step can fail on its own; failures degrade the result instead of
    aborting it, and the first failure is kept as the status error text.
    """

    def __init__(
        self,
        repo_path: str,
        deadline: float,
        cancel_event: Optional[threading.Event] = None,
        ignore_file: Optional[Path] = None,
        debug: bool = False,
    ):
        """
        Args:
            repo_path: Repository root
            deadline: ``time.monotonic()`` value after which the reader gives up
            cancel_event: Shared cancellation signal
            ignore_file: Global ignore file passed to ``git status``
            debug: Log classified working-tree changes
        """
        self.repo_path = repo_path
        self.deadline = deadline
        self.cancel_event = cancel_event
        self.ignore_file = ignore_file
        self.debug = debug

    def _check(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ExtractionCancelled(self.repo_path)
        if time.monotonic() >= self.deadline:
            raise TimeoutError(f"status extraction deadline passed for {self.repo_path}")

    def _remaining(self) -> float:
        return max(self.deadline - time.monotonic(), POLL_INTERVAL)

    def read(self) -> Status:
        """Extract the status, degrading on repository errors.

        Raises:
            ExtractionCancelled: the cancel event fired
            TimeoutError: the deadline passed
        """
        start = time.monotonic()
        self._check()
        try:
            repo = git.Repo(self.repo_path)
        except Exception as e:
            logger.debug(f"Cannot open {self.repo_path}: {e}")
            return Status.degraded(f"failed to open repository: {e}")

        try:
            status = self._collect(repo)
        finally:
            repo.close()

        duration = time.monotonic() - start
        if duration > SLOW_EXTRACTION_THRESHOLD:
            logger.debug(f"Repository {self.repo_path} status extraction: {duration * 1000:.0f}ms")
        logger.debug(f"Repository {self.repo_path}: {_summarize(status)}")
        return status

    def _collect(self, repo: git.Repo) -> Status:
        errors: List[str] = []

        branch, is_detached = UNKNOWN_BRANCH, False
        try:
            branch, is_detached = self._read_branch(repo)
        except _INTERRUPTS:
            raise
        except Exception as e:
            logger.debug(f"Error reading HEAD in {self.repo_path}: {e}")
            errors.append(f"failed to get HEAD: {e}")

        self._check()
        has_remote = self._has_remote(repo)

        ahead = behind = 0
        if has_remote and not is_detached and branch != UNKNOWN_BRANCH:
            try:
                ahead, behind = self._read_divergence(repo, branch)
            except _INTERRUPTS:
                raise
            except Exception as e:
                logger.debug(f"Error computing ahead/behind in {self.repo_path}: {e}")
                errors.append(f"failed to compute ahead/behind: {e}")

        self._check()
        has_stashes = self._has_stashes(repo)

        has_changes = False
        if not repo.bare:
            try:
                has_changes = self._read_changes(repo)
            except _INTERRUPTS:
                raise
            except Exception as e:
                logger.debug(f"Error reading working tree status in {self.repo_path}: {e}")
                errors.append(f"failed to get worktree status: {e}")

        return Status(
            branch=branch,
            is_detached=is_detached,
            has_remote=has_remote,
            ahead=ahead,
            behind=behind,
            has_stashes=has_stashes,
            has_changes=has_changes,
            error=errors[0] if errors else None,
        )

    def _read_branch(self, repo: git.Repo) -> Tuple[str, bool]:
        if repo.head.is_detached:
            return DETACHED_BRANCH, True
        # Works for unborn branches too: HEAD still names them
        return repo.active_branch.name, False

    def _has_remote(self, repo: git.Repo) -> bool:
        try:
            return len(repo.remotes) > 0
        except Exception as e:
            logger.debug(f"Error listing remotes in {self.repo_path}: {e}")
            return False

    def _read_divergence(self, repo: git.Repo, branch: str) -> Tuple[int, int]:
        if not repo.head.is_valid():
            logger.debug(f"{self.repo_path}: branch {branch} has no commits yet")
            return 0, 0

        tracking = git.RemoteReference(repo, f"refs/remotes/{DEFAULT_REMOTE}/{branch}")
        if not tracking.is_valid():
            logger.debug(f"{self.repo_path}: no tracking ref {DEFAULT_REMOTE}/{branch}")
            return 0, 0

        return count_divergence(
            repo, repo.head.commit.hexsha, tracking.commit.hexsha, check=self._check
        )

    def _has_stashes(self, repo: git.Repo) -> bool:
        try:
            return git.Reference(repo, STASH_REF).is_valid()
        except Exception as e:
            logger.debug(f"Error checking stash in {self.repo_path}: {e}")
            return False

    def _read_changes(self, repo: git.Repo) -> bool:
        git_options = {"no_optional_locks": True}
        if self.ignore_file is not None:
            git_options["c"] = f"core.excludesFile={self.ignore_file}"

        output = repo.git(**git_options).status(
            "--porcelain", "--untracked-files=normal", kill_after_timeout=self._remaining()
        )
        changes = parse_porcelain(output)

        if self.debug and changes.has_changes:
            for line in changes.describe():
                logger.debug(f"{self.repo_path}: {line}")

        return changes.has_changes


def _summarize(status: Status) -> str:
    parts = [f"branch={status.branch}", f"hasChanges={status.has_changes}"]
    if status.has_remote:
        parts.append("hasRemote=true")
        if status.ahead:
            parts.append(f"ahead={status.ahead}")
        if status.behind:
            parts.append(f"behind={status.behind}")
    else:
        parts.append("hasRemote=false")
    if status.has_stashes:
        parts.append("hasStashes=true")
    if status.error:
        parts.append(f"error={status.error}")
    return ", ".join(parts)


def extract(
    repo_path: str,
    timeout: float = DEFAULT_EXTRACT_TIMEOUT,
    cancel_event: Optional[threading.Event] = None,
    ignore_file: Optional[Path] = None,
    debug: bool = False,
) -> Status:
    """Extract the status of one repository within ``timeout`` seconds.

    Always returns a Status: repository errors give a degraded one and an
    overrun gives ``Status.timed_out()``. The reader runs on its own daemon
    thread, which is abandoned when the time is up.

    Raises:
        ExtractionCancelled: ``cancel_event`` fired before a result was ready
        InvariantError: the extracted status was internally inconsistent
    """
    if cancel_event is not None and cancel_event.is_set():
        raise ExtractionCancelled(repo_path)

    deadline = time.monotonic() + timeout
    reader = GitStatusReader(repo_path, deadline, cancel_event, ignore_file, debug)
    outcome: "queue.Queue[object]" = queue.Queue(maxsize=1)

    def run() -> None:
        try:
            outcome.put(reader.read())
        except _INTERRUPTS:
            # The waiting side has already given up on this unit
            return
        except Exception as e:
            outcome.put(e)

    worker = threading.Thread(
        target=run, name=f"gitree-read-{os.path.basename(repo_path)}", daemon=True
    )
    worker.start()

    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning(f"Status extraction timed out after {timeout}s: {repo_path}")
            return Status.timed_out()
        try:
            result = outcome.get(timeout=min(remaining, POLL_INTERVAL))
        except queue.Empty:
            if cancel_event is not None and cancel_event.is_set():
                raise ExtractionCancelled(repo_path)
            continue

        if isinstance(result, InvariantError):
            raise result
        if isinstance(result, Exception):
            logger.error(f"Status extraction failed for {repo_path}: {result}")
            return Status.degraded(f"status extraction failed: {result}")
        return result
