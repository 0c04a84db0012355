"""Repository discovery: walks a root directory for git repositories."""

import os
import stat
import threading
import time
from typing import Hashable, List, Optional, Set, Tuple

from gitree.constants import (
    BARE_HEAD_FILE,
    BARE_OBJECTS_DIR,
    BARE_REFS_DIR,
    DEFAULT_ROOT_LABEL,
    GIT_DIR_NAME,
    GITDIR_PREFIX,
)
from gitree.exceptions import ScanError, TraversalError
from gitree.logging_config import get_logger
from gitree.models import Repository, ScanResult
from gitree.services.tree_builder import build_tree

logger = get_logger(__name__)


def is_git_repository(path: str) -> Tuple[bool, bool]:
    """Check whether a directory is the root of a git repository.

    Returns:
        (is_repo, is_bare)
    """
    git_path = os.path.join(path, GIT_DIR_NAME)
    if os.path.isdir(git_path):
        return True, False

    # Linked worktrees and submodule checkouts have a .git file pointing elsewhere
    if os.path.isfile(git_path):
        try:
            with open(git_path, encoding="utf-8") as f:
                if f.readline().strip().startswith(GITDIR_PREFIX):
                    return True, False
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Unreadable .git file in {path}: {e}")

    # Bare repository: HEAD, refs/ and objects/ directly at the root
    if (
        os.path.exists(os.path.join(path, BARE_HEAD_FILE))
        and os.path.isdir(os.path.join(path, BARE_REFS_DIR))
        and os.path.isdir(os.path.join(path, BARE_OBJECTS_DIR))
    ):
        return True, True

    return False, False


def directory_identity(path: str, st: os.stat_result) -> Hashable:
    """Key identifying the underlying directory, whichever path reaches it.

    Uses the device/inode pair; falls back to the resolved path where the
    platform reports no inode.
    """
    if st.st_ino:
        return (st.st_dev, st.st_ino)
    return os.path.realpath(path)


class RepositoryScanner:
    """Sequential, loop-safe walk of a directory tree.

    Directories are visited depth-first in name order. Descent stops at every
    repository root, so repository internals are never examined.
    """

    def __init__(
        self,
        root_path: str,
        cancel_event: Optional[threading.Event] = None,
        root_label: str = DEFAULT_ROOT_LABEL,
    ):
        self.root_path = os.path.abspath(root_path)
        self.cancel_event = cancel_event
        self.root_label = root_label
        self.repositories: List[Repository] = []
        self.errors: List[TraversalError] = []
        self.dir_count = 0
        self._visited: Set[Hashable] = set()

    def _validate_root(self) -> None:
        try:
            st = os.stat(self.root_path)
        except OSError as e:
            raise ScanError(self.root_path, f"cannot access root path: {e.strerror or e}") from e
        if not stat.S_ISDIR(st.st_mode):
            raise ScanError(self.root_path, "root path is not a directory")
        if not os.access(self.root_path, os.R_OK | os.X_OK):
            raise ScanError(self.root_path, "permission denied")

    def _record_error(self, path: str, reason: str) -> None:
        logger.debug(f"Skipping {path}: {reason}")
        self.errors.append(TraversalError(path, reason))

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _enter(self, path: str) -> Optional[bool]:
        """Decide whether to visit a directory.

        Returns:
            None to prune, otherwise whether the path itself is a symlink
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            self._record_error(path, f"cannot stat ({e.strerror or e})")
            return None

        is_symlink = stat.S_ISLNK(st.st_mode)
        identity_path = path
        if is_symlink:
            try:
                identity_path = os.path.realpath(path, strict=True)
                st = os.stat(identity_path)
            except OSError as e:
                self._record_error(path, f"broken symlink ({e.strerror or e})")
                return None
            if not stat.S_ISDIR(st.st_mode):
                # Link to a regular file, nothing to descend into
                return None
            if path != self.root_path and self._inside_repository(identity_path):
                logger.debug(f"Skipping {path}: links into repository internals ({identity_path})")
                return None

        identity = directory_identity(identity_path, st)
        if identity in self._visited:
            logger.debug(f"Already visited {identity_path}, skipping {path}")
            return None
        self._visited.add(identity)
        return is_symlink

    def _inside_repository(self, real_path: str) -> bool:
        """Whether a strict ancestor of ``real_path`` is a repository root."""
        parent = os.path.dirname(real_path)
        while parent != real_path:
            if is_git_repository(parent)[0]:
                return True
            real_path, parent = parent, os.path.dirname(parent)
        return False

    def _list_subdirectories(self, path: str) -> Optional[List[str]]:
        """Sorted child paths that may be directories (symlinks included)."""
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except PermissionError:
            self._record_error(path, "permission denied")
            return None
        except OSError as e:
            self._record_error(path, f"cannot read directory ({e.strerror or e})")
            return None

        children = []
        for entry in entries:
            try:
                if entry.is_symlink() or entry.is_dir(follow_symlinks=False):
                    children.append(entry.path)
            except OSError as e:
                self._record_error(entry.path, f"cannot stat ({e.strerror or e})")
        return children

    def scan(self) -> ScanResult:
        """Walk the tree and collect every repository under the root.

        Raises:
            ScanError: if the root path is missing, unreadable or not a directory
        """
        start = time.monotonic()
        self._validate_root()
        logger.info(f"Scanning {self.root_path}")

        # Stack of (path, reached through a symlink); children pushed in reverse for name order
        stack: List[Tuple[str, bool]] = [(self.root_path, False)]
        while stack:
            if self._cancelled():
                logger.warning(
                    f"Scan cancelled with {len(stack)} directories left; returning partial results"
                )
                break

            path, via_symlink = stack.pop()
            entered = self._enter(path)
            if entered is None:
                continue
            # A symlinked root is where the user asked to start, not a detour
            via_symlink = via_symlink or (entered and path != self.root_path)
            self.dir_count += 1

            is_repo, is_bare = is_git_repository(path)
            if is_repo:
                repo = Repository(path=path, is_bare=is_bare, is_symlink=via_symlink)
                logger.debug(f"Found repository {repo}")
                self.repositories.append(repo)
                continue

            children = self._list_subdirectories(path)
            if children:
                stack.extend((child, via_symlink) for child in reversed(children))

        duration = time.monotonic() - start
        logger.info(
            f"Scanned {self.dir_count} directories, found {len(self.repositories)} repositories "
            f"in {duration:.2f}s ({len(self.errors)} skipped)"
        )

        result = ScanResult(
            root_path=self.root_path,
            repositories=self.repositories,
            tree=build_tree(self.root_path, self.repositories, self.root_label),
            total_scanned=self.dir_count,
            errors=self.errors,
            duration=duration,
        )
        result.validate()
        return result


def scan(
    root_path: str,
    cancel_event: Optional[threading.Event] = None,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> ScanResult:
    """Scan ``root_path`` for repositories.

    Raises:
        ScanError: if the root cannot be scanned at all
    """
    return RepositoryScanner(root_path, cancel_event, root_label).scan()
