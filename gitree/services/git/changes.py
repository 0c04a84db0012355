"""Working-tree change classification from ``git status --porcelain`` output."""

from dataclasses import dataclass, field
from typing import List

from gitree.constants import MAX_FILES_PER_CATEGORY


@dataclass
class WorkingTreeChanges:
    """Changed files grouped by kind."""
    modified: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return any((self.modified, self.untracked, self.staged, self.deleted, self.other))

    def describe(self, limit: int = MAX_FILES_PER_CATEGORY) -> List[str]:
        """Human-readable lines, one per non-empty category, truncated past ``limit``."""
        lines = []
        for category, files in (
            ("Modified", self.modified),
            ("Untracked", self.untracked),
            ("Staged", self.staged),
            ("Deleted", self.deleted),
        ):
            if not files:
                continue
            shown = files[:limit]
            lines.append(f"{category} files ({len(files)}): {', '.join(shown)}")
            if len(files) > limit:
                lines.append(f"...and {len(files) - limit} more {category.lower()} files")
        return lines


def parse_porcelain(output: str) -> WorkingTreeChanges:
    """Parse porcelain v1 status lines (``XY path``).

    X is the index (staged) state and Y the working-tree state.
    """
    changes = WorkingTreeChanges()
    for line in output.splitlines():
        if len(line) < 4:
            continue
        index_status, worktree_status, path = line[0], line[1], line[3:]
        if " -> " in path:
            # Renames and copies: "old -> new"
            path = path.split(" -> ", 1)[1]

        if index_status == "?" and worktree_status == "?":
            changes.untracked.append(path)
        elif index_status == " " and worktree_status == "M":
            changes.modified.append(path)
        elif index_status not in (" ", "?", "!"):
            changes.staged.append(path)
        elif worktree_status == "D":
            changes.deleted.append(path)
        elif index_status != "!":
            changes.other.append(path)
    return changes
