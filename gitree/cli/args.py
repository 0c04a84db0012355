"""Command-line argument parsing for gitree."""

import argparse

from gitree.__version__ import __version__
from gitree.constants import COLOR_MODES, DEFAULT_EXTRACT_TIMEOUT, DEFAULT_SCAN_TIMEOUT


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="gitree",
        description="Show every git repository under a directory as a tree with its status",
        epilog="Markers: ↑N ahead, ↓N behind, ○ no remote, $ stashes, * uncommitted changes",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to scan (default: current)")
    parser.add_argument("--version", action="version", version=f"gitree {__version__}")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_EXTRACT_TIMEOUT,
        metavar="SECONDS",
        help=f"Status extraction timeout per repository (default: {DEFAULT_EXTRACT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of repositories processed in parallel (default: auto-detect)",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        default=DEFAULT_SCAN_TIMEOUT,
        metavar="SECONDS",
        help=f"Overall time limit (default: {DEFAULT_SCAN_TIMEOUT:g})",
    )
    parser.add_argument(
        "--color", choices=COLOR_MODES, default="auto", help="Colorize output (default: auto)"
    )
    parser.add_argument("--no-root", action="store_true", help="Do not print the root line")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    return parser.parse_args(argv)
