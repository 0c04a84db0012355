"""Tree node model"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from gitree.exceptions import InvariantError
from gitree.models.repository import Repository


@dataclass
class TreeNode:
    """A node in the rendered hierarchy.

    Nodes without a repository are synthetic: they stand for an intermediate
    directory that is not itself a repository.
    """
    name: str
    path: str
    relative_path: str
    repository: Optional[Repository] = None
    depth: int = 0
    is_last: bool = False
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_synthetic(self) -> bool:
        return self.repository is None

    def add_child(self, child: "TreeNode") -> None:
        child.depth = self.depth + 1
        self.children.append(child)

    def find_child(self, name: str) -> Optional["TreeNode"]:
        return next((child for child in self.children if child.name == name), None)

    def sort_children(self) -> None:
        """Sort children by name and refresh their depth and is_last flags."""
        self.children.sort(key=lambda node: node.name)
        for index, child in enumerate(self.children):
            child.depth = self.depth + 1
            child.is_last = index == len(self.children) - 1

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def validate(self) -> None:
        """Check this subtree's depth and ordering invariants."""
        if self.depth < 0:
            raise InvariantError("TreeNode", f"depth cannot be negative: {self.depth}")
        if not self.relative_path:
            raise InvariantError("TreeNode", f"relative path cannot be empty: {self.path}")
        names = [child.name for child in self.children]
        if names != sorted(names):
            raise InvariantError("TreeNode", f"children of {self.relative_path} are not sorted")
        for index, child in enumerate(self.children):
            if child.depth != self.depth + 1:
                raise InvariantError(
                    "TreeNode", f"depth of {child.relative_path} is inconsistent with its parent"
                )
            if child.is_last != (index == len(self.children) - 1):
                raise InvariantError("TreeNode", f"is_last flag wrong for {child.relative_path}")
            child.validate()
