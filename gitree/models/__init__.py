"""Data models shared by the scanning, status and tree stages."""

from .status import Status
from .repository import Repository
from .tree import TreeNode
from .scan_result import ScanResult

__all__ = ["Status", "Repository", "TreeNode", "ScanResult"]
