"""
gitree - Show every git repository under a directory as a status tree
"""

from .__version__ import __version__
from .core import Gitree
from .cli.main import main

__all__ = ["Gitree", "main", "__version__"]
