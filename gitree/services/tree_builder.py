"""Builds the display hierarchy from a flat repository list."""

import os
from pathlib import PurePath
from typing import Iterable

from gitree.constants import DEFAULT_ROOT_LABEL
from gitree.logging_config import get_logger
from gitree.models import Repository, TreeNode

logger = get_logger(__name__)


def build_tree(
    root_path: str, repositories: Iterable[Repository], root_label: str = DEFAULT_ROOT_LABEL
) -> TreeNode:
    """Arrange repositories into a tree mirroring their location under ``root_path``.

    Intermediate directories that are not repositories become synthetic nodes.
    Every level is sorted by name, so the same input always yields the same tree.
    A repository located at the root itself is attached to the root node;
    repositories outside the root are skipped.
    """
    root = TreeNode(name=root_label, path=root_path, relative_path=root_label)

    for repo in repositories:
        try:
            relative = os.path.relpath(repo.path, root_path)
        except ValueError:
            # Different drive on Windows
            logger.debug(f"Skipping {repo.path}: not under {root_path}")
            continue

        if relative == os.curdir:
            root.repository = repo
            continue
        if relative == os.pardir or relative.startswith(os.pardir + os.sep):
            logger.debug(f"Skipping {repo.path}: not under {root_path}")
            continue

        _insert(root, repo, PurePath(relative).parts)

    _sort_tree(root)
    return root


def _insert(root: TreeNode, repo: Repository, parts: tuple) -> None:
    """Insert ``repo`` below ``root``, creating synthetic nodes for missing segments."""
    current = root
    for index, part in enumerate(parts[:-1]):
        child = current.find_child(part)
        if child is None:
            child = TreeNode(
                name=part,
                path=os.path.join(current.path, part),
                relative_path="/".join(parts[: index + 1]),
            )
            current.add_child(child)
        current = child

    name = parts[-1]
    existing = current.find_child(name)
    if existing is None:
        current.add_child(
            TreeNode(name=name, path=repo.path, relative_path="/".join(parts), repository=repo)
        )
    elif existing.is_synthetic:
        # A deeper repository created this segment first
        existing.repository = repo
    else:
        logger.warning(f"Duplicate repository entry ignored: {repo.path}")


def _sort_tree(node: TreeNode) -> None:
    node.sort_children()
    for child in node.children:
        _sort_tree(child)
